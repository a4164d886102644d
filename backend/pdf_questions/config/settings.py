"""
Application Configuration

This module provides type-safe configuration loading using Pydantic settings.
Environment variables are loaded from .env file and validated.

Settings are read once at startup and injected into the LLM client and the
pipeline; nothing below this layer reads the environment directly.

Usage:
    from pdf_questions.config import settings

    model = settings.summarization_model
    client = LLMClient.from_settings(settings)
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "PDF Questions"
    DEBUG: bool = False

    # Provider credentials (empty = not configured)
    OPENAI_API_KEY: str = ""
    ANTHROPIC_API_KEY: str = ""
    GEMINI_API_KEY: str = ""
    MISTRAL_API_KEY: str = ""

    # Model configuration (LiteLLM format: provider/model-name)
    # MODEL overrides both operation models when set
    MODEL: Optional[str] = None

    # Large context window model for summarization
    SUMMARIZATION_MODEL: str = "openai/gpt-4.1"

    # Question generation model
    QUESTION_MODEL: str = "anthropic/claude-3-5-sonnet-20240620"

    # Optional completion service endpoint (e.g. a local OpenAI-compatible server)
    LLM_API_BASE: Optional[str] = None

    # Attempts per completion request; 1 disables retries
    LLM_MAX_ATTEMPTS: int = 1

    # Download limits
    PDF_MAX_FILE_SIZE_MB: int = 50
    DOWNLOAD_TIMEOUT_SECONDS: Optional[float] = None

    @property
    def summarization_model(self) -> str:
        """Model used for the summarization stage."""
        return self.MODEL or self.SUMMARIZATION_MODEL

    @property
    def question_model(self) -> str:
        """Model used for the question generation stage."""
        return self.MODEL or self.QUESTION_MODEL

    @property
    def api_keys(self) -> dict[str, str]:
        """Configured credentials keyed by LiteLLM provider name."""
        keys = {
            "openai": self.OPENAI_API_KEY,
            "anthropic": self.ANTHROPIC_API_KEY,
            "gemini": self.GEMINI_API_KEY,
            "mistral": self.MISTRAL_API_KEY,
        }
        return {provider: key for provider, key in keys.items() if key}

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
