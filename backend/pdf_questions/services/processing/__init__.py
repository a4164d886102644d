"""
PDF processing services.

Exposes the pipeline entry points that take a PDF URL (or text already in
hand) through summarization and question generation.
"""

from pdf_questions.services.processing.pipeline import (
    PipelineConfig,
    extract_and_summarize,
    generate_questions,
    generate_questions_from_pdf_url,
)

__all__ = [
    "PipelineConfig",
    "extract_and_summarize",
    "generate_questions",
    "generate_questions_from_pdf_url",
]
