"""Pipeline utilities for PDF text extraction and text handling."""

from pdf_questions.pipelines.utils.pdf_utils import extract_text_from_pdf
from pdf_questions.pipelines.utils.text_utils import (
    TOKEN_LIMIT_HINT,
    is_token_limit_error,
    truncate_text,
)

__all__ = [
    # PDF utilities
    "extract_text_from_pdf",
    # Text utilities
    "TOKEN_LIMIT_HINT",
    "is_token_limit_error",
    "truncate_text",
]
