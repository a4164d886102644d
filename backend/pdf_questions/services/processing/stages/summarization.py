"""
Summarization Stage

Compresses the full extracted text of a PDF into a structured summary with
a large context window model, so later stages work on a fraction of the
original length.

Usage:
    from pdf_questions.services.processing.stages.summarization import generate_summary

    summary, usage = await generate_summary(extraction.text, llm_client)
"""

import logging

from pdf_questions.config.processing import processing_settings
from pdf_questions.enums.pipeline import PipelineName, PipelineOperation
from pdf_questions.exceptions import LLMError, SummarizationError
from pdf_questions.models.llm_usage import LLMUsage
from pdf_questions.pipelines.utils.text_utils import (
    TOKEN_LIMIT_HINT,
    is_token_limit_error,
)
from pdf_questions.services.llm.client import LLMClient, build_messages

logger = logging.getLogger(__name__)

EMPTY_SUMMARY_FALLBACK = "Summary could not be generated"

SUMMARY_SYSTEM_PROMPT = """You are a PDF summarization specialist working with a large context window.
Turn lengthy document text into a concise summary that captures the essence
of the document while being far shorter than the original.

Work in three passes:
1. Analysis: identify the document type, its main themes and its structure.
2. Extraction: pull out the critical facts, figures, definitions and conclusions.
3. Synthesis: organize the material from general to specific.

Structure the summary as:

Document Overview:
- Document type and purpose
- Main topic
- Intended audience or use case

Key Points:
- The 3-5 most important insights or findings
- Critical facts and figures
- Main conclusions or recommendations

Important Details:
- Specifics that support the key points
- Relevant examples or case studies
- Technical specifications if applicable

Implications:
- What this means for readers
- Potential applications or next steps

Write in clear, plain English. Aim for 300-800 words, reducing the original
by 80-95% while keeping every essential piece of information. Represent the
source faithfully."""

SUMMARY_PROMPT = """Please provide a comprehensive summary of this PDF content:

{content}"""


async def generate_summary(
    text: str,
    llm_client: LLMClient,
) -> tuple[str, LLMUsage]:
    """
    Summarize extracted PDF text.

    The full text is sent without truncation. An empty response is replaced
    by a fixed placeholder rather than treated as a failure.

    Args:
        text: Extracted document text
        llm_client: LLM client for completion

    Returns:
        Tuple of (summary text, LLMUsage)

    Raises:
        SummarizationError: If the completion service call fails
    """
    messages = build_messages(
        SUMMARY_PROMPT.format(content=text),
        system_prompt=SUMMARY_SYSTEM_PROMPT,
    )

    try:
        summary, usage = await llm_client.complete(
            operation=PipelineOperation.SUMMARIZATION,
            messages=messages,
            temperature=processing_settings.SUMMARY_TEMPERATURE,
            max_tokens=processing_settings.SUMMARY_MAX_TOKENS,
            pipeline=PipelineName.PDF_QUESTIONS,
        )
    except LLMError as e:
        details = dict(e.details)
        if is_token_limit_error(e.message):
            details["hint"] = TOKEN_LIMIT_HINT
            logger.error(TOKEN_LIMIT_HINT)
        raise SummarizationError(
            f"Summarization failed: {e.message}", details=details
        ) from e

    summary = summary or EMPTY_SUMMARY_FALLBACK
    logger.info(f"Generated summary: {len(summary)} characters")
    return summary, usage
