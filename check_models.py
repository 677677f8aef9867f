#!/usr/bin/env python3
"""
Gemini model availability check

Usage:
    python check_models.py <api_key> [--model <name> ...]

Examples:
    python check_models.py YOUR_API_KEY
    python check_models.py YOUR_API_KEY --model gemini-2.5-flash --model gemini-2.0-flash
"""

import argparse
import sys

from app.ai.llm.gemini import GeminiClient, is_model_not_found

PROBE_PROMPT = "Hello, simply reply 'OK'."

DEFAULT_PROBE_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-flash-latest",
    "gemini-1.5-flash",
    "gemini-1.5-pro",
]


def check_models(api_key: str, models: list[str]) -> dict[str, bool]:
    """Send a trivial prompt to each model and report which ones respond."""
    client = GeminiClient(api_key)
    available = {}

    print("Checking available Gemini models for your API key...")
    for model_name in models:
        print(f"\nTesting model: {model_name}")
        try:
            reply = client.generate(model_name, PROBE_PROMPT)
        except Exception as e:
            print(f"FAILED: {e}")
            if is_model_not_found(e):
                print("   -> Model not found or not enabled for this API key.")
            available[model_name] = False
            continue

        print(f"SUCCESS! Model '{model_name}' is working.")
        print(f"   Response: {reply.strip()}")
        available[model_name] = True

    print("\nDiagnostic complete.")
    return available


def main():
    parser = argparse.ArgumentParser(description="Check which Gemini models an API key can use")
    parser.add_argument("api_key", nargs="?", help="Gemini API key")
    parser.add_argument("--model", "-m", action="append", dest="models", help="Model to test (repeatable)")

    args = parser.parse_args()

    if not args.api_key:
        print("Please provide an API key as an argument.")
        print("Usage: python check_models.py YOUR_API_KEY")
        sys.exit(1)

    results = check_models(args.api_key, args.models or DEFAULT_PROBE_MODELS)
    if not any(results.values()):
        sys.exit(2)


if __name__ == "__main__":
    main()
