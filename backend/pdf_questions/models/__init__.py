"""Data models for the application."""

from pdf_questions.models.llm_usage import LLMUsage
from pdf_questions.models.processing import (
    DownloadedDocument,
    ExtractionResult,
    PipelineResult,
    SummaryResult,
)

__all__ = [
    "DownloadedDocument",
    "ExtractionResult",
    "LLMUsage",
    "PipelineResult",
    "SummaryResult",
]
