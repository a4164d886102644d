"""
Processing Pipeline Configuration

Configuration settings for the summarization and question generation
stages. These settings control prompt sizes, sampling parameters and
the thresholds the question stage applies to completions.

All settings can be overridden via environment variables with PROCESSING_ prefix.

Usage:
    from pdf_questions.config.processing import processing_settings

    limit = processing_settings.QUESTIONS_TEXT_TRUNCATE
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class ProcessingSettings(BaseSettings):
    """
    Processing pipeline configuration.

    Attributes are grouped by stage:
    - Summarization
    - Question generation
    """

    # =========================================================================
    # SUMMARIZATION
    # =========================================================================
    # The full extracted text is sent; the model must have a large context window

    SUMMARY_TEMPERATURE: float = 0.3
    SUMMARY_MAX_TOKENS: int = 2000

    # =========================================================================
    # QUESTION GENERATION
    # =========================================================================

    # Characters of source text sent to the question model
    QUESTIONS_TEXT_TRUNCATE: int = 4000

    # Questions returned when the caller does not ask for a count
    QUESTIONS_DEFAULT_MAX: int = 10

    # Completions at or below this length (after trimming) are not parsed
    QUESTIONS_MIN_RESPONSE_LENGTH: int = 20

    QUESTIONS_TEMPERATURE: float = 0.7
    QUESTIONS_MAX_TOKENS: int = 2000

    class Config:
        env_prefix = "PROCESSING_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_processing_settings() -> ProcessingSettings:
    """Get cached processing settings instance."""
    return ProcessingSettings()


# Convenience instance
processing_settings = get_processing_settings()
