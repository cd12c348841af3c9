import os

from pydantic import BaseModel

APP_VERSION = "0.1.0"


class Settings(BaseModel):
    # LLM: provider selected when the UI has no explicit choice
    DEFAULT_PROVIDER: str = os.getenv("DEFAULT_PROVIDER", "openai")

    # LLM: default model per provider (API keys are supplied per request, never here)
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    ANTHROPIC_MODEL: str = os.getenv("ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022")
    GOOGLE_MODEL: str = os.getenv("GOOGLE_MODEL", "gemini-1.5-flash")
    GOOGLE_API_BASE: str = os.getenv("GOOGLE_API_BASE", "https://generativelanguage.googleapis.com/v1beta")

    # LLM: shared generation parameters
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    LLM_MAX_TOKENS: int = int(os.getenv("LLM_MAX_TOKENS", "4096"))

    # Uploads
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(1024 * 1024)))


settings = Settings()
