"""Configuration package."""

from pdf_questions.config.processing import ProcessingSettings, processing_settings
from pdf_questions.config.settings import Settings, get_settings, settings

__all__ = [
    # Processing settings
    "processing_settings",
    "ProcessingSettings",
    # Application settings
    "Settings",
    "get_settings",
    "settings",
]
