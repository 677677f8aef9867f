from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

DEFAULT_GEMINI_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-flash-latest",
    "gemini-1.5-flash",
    "gemini-1.5-pro",
    "gemini-pro-vision",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_TITLE: str = "Financial Document Extractor"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Tried in order, newest first.
    GEMINI_MODELS: List[str] = list(DEFAULT_GEMINI_MODELS)
    # False stops the scan on the first error that is not a model-not-found.
    FALLBACK_ON_ANY_ERROR: bool = True


settings = Settings()
