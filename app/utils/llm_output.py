def strip_code_fences(text: str) -> str:
    """Remove markdown fence markers (```json and ```) and surrounding whitespace."""
    if not text:
        return ""
    return text.replace("```json", "").replace("```", "").strip()
