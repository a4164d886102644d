"""
Processing Stages

Individual stages of the PDF question pipeline:
- summarization: Compress extracted text into a summary
- questions: Generate and parse questions from text

Usage:
    from pdf_questions.services.processing.stages import (
        generate_summary,
        generate_questions,
        parse_questions_from_text,
    )
"""

from pdf_questions.services.processing.stages.questions import (
    generate_questions,
    parse_questions_from_text,
)
from pdf_questions.services.processing.stages.summarization import generate_summary

__all__ = [
    "generate_questions",
    "generate_summary",
    "parse_questions_from_text",
]
