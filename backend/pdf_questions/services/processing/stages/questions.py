"""
Question Generation Stage

Generates study questions from a document summary (or any text) with a
streamed completion, then parses the free-form response into a bounded
list of question strings.

The parser is purely syntactic: numbered items are split onto their own
lines, every "?" ends a candidate, list markers are stripped, and short
fragments are dropped. It performs no semantic checks, no case
normalization and no deduplication, so prose that happens to contain a
"?" is returned as a question.

Text is never turned into a question by adding a "?". Anything after the
last "?" on a line is discarded rather than closed off with one, so a
response without any "?" parses to an empty list. A decimal point splits
like a list marker: "What is 2.5 times 3?" yields only "5 times 3?",
because "What is" is left without a "?" of its own.

Usage:
    from pdf_questions.services.processing.stages.questions import (
        generate_questions,
        parse_questions_from_text,
    )

    result = await generate_questions(summary, llm_client, max_questions=5)
    if result.success:
        for q in result.questions:
            print(q)

    parse_questions_from_text("1. What is X? 2. What is Y?", 10)
    # ['What is X?', 'What is Y?']
"""

import logging
import re
from typing import Optional

from pdf_questions.config.processing import processing_settings
from pdf_questions.enums.pipeline import PipelineName, PipelineOperation
from pdf_questions.exceptions import ServiceError
from pdf_questions.models.llm_usage import LLMUsage
from pdf_questions.models.processing import PipelineResult
from pdf_questions.pipelines.utils.text_utils import (
    TOKEN_LIMIT_HINT,
    is_token_limit_error,
    truncate_text,
)
from pdf_questions.services.llm.client import LLMClient, build_messages

logger = logging.getLogger(__name__)

# Questions at or below this length (after cleaning) are dropped
MIN_QUESTION_LENGTH = 5

# "12." or "3)" plus any whitespace after it, anywhere in the text
_NUMBER_MARKER = re.compile(r"([0-9]+[.)]\s*)")
_LEADING_NUMBER = re.compile(r"^[0-9]+[.)]\s*")
_LEADING_BULLET = re.compile(r"^[-*•]\s*")


QUESTIONS_SYSTEM_PROMPT = """You are an expert question generator who creates thoughtful, varied questions
from the content you are given, testing different levels of understanding.

Cover:
- Factual recall: direct facts from the content
- Comprehension: understanding of concepts and ideas
- Application: how the information might be used
- Analysis: breaking down complex ideas
- Synthesis: connecting different concepts

Mix multiple choice, short answer, discussion and application questions.

Return the questions as a numbered list, one per line:
1. What is the main concept discussed in the document?
2. How does [specific concept] relate to [other concept]?
3. What would happen if [scenario]?

Vary difficulty from basic to advanced, keep every question answerable from
the content, and use clear, precise language."""

QUESTIONS_PROMPT = """Generate comprehensive questions based on the following content extracted from a PDF.
Please create questions that test understanding, analysis, and application of the content.
Generate up to {max_questions} questions:

{content}"""


def _split_candidates(text: str) -> list[str]:
    """
    Split raw completion text into candidate question segments.

    Every numbered marker starts a new line, then each line is split on "?".
    Each non-blank piece that was terminated by a "?" is trimmed and gets
    its "?" back; trailing text after a line's last "?" is not a candidate.
    """
    normalized = _NUMBER_MARKER.sub(r"\n\1", text)

    segments: list[str] = []
    for line in normalized.split("\n"):
        for part in line.split("?")[:-1]:
            part = part.strip()
            if part:
                segments.append(part + "?")
    return segments


def _clean_segment(segment: str) -> str:
    """Strip one leading number marker, then one leading bullet."""
    cleaned = _LEADING_NUMBER.sub("", segment, count=1)
    cleaned = _LEADING_BULLET.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_questions_from_text(text: str, max_questions: int) -> list[str]:
    """
    Parse a completion into an ordered list of questions.

    Never raises: a response with nothing usable yields an empty list.

    Args:
        text: Raw completion text
        max_questions: Maximum number of questions to return (negative
            values are treated as 0)

    Returns:
        Up to max_questions questions in order of appearance, each longer
        than MIN_QUESTION_LENGTH characters and containing "?"
    """
    questions = [
        cleaned
        for cleaned in (_clean_segment(s) for s in _split_candidates(text))
        if len(cleaned) > MIN_QUESTION_LENGTH and "?" in cleaned
    ]
    return questions[: max(0, max_questions)]


def _error_usages(error: Exception) -> list[LLMUsage]:
    """Pull the failed-request usage record off an LLM error, if any."""
    if isinstance(error, ServiceError):
        usage = error.details.get("usage")
        if isinstance(usage, LLMUsage):
            return [usage]
    return []


async def generate_questions(
    text: str,
    llm_client: LLMClient,
    max_questions: Optional[int] = None,
) -> PipelineResult:
    """
    Generate questions from text.

    Only the first QUESTIONS_TEXT_TRUNCATE characters of the text are sent.
    The streamed response is drained completely before it is parsed.

    Never raises: every failure (blank input, completion error, a response
    too short to parse, or no parseable questions) becomes an unsuccessful
    result with no questions.

    Args:
        text: Source text, usually a summary
        llm_client: LLM client for the streamed completion
        max_questions: Maximum number of questions (default from settings)

    Returns:
        PipelineResult; success is True only when questions were parsed
    """
    if max_questions is None:
        max_questions = processing_settings.QUESTIONS_DEFAULT_MAX

    logger.info("Generating questions from text...")

    if not text or not text.strip():
        logger.error("No text provided for question generation")
        return PipelineResult.failed()

    max_length = processing_settings.QUESTIONS_TEXT_TRUNCATE
    if len(text) > max_length:
        logger.warning(
            "Document is very large. Consider using a smaller PDF to avoid token limits."
        )
        logger.warning(f"Using first {max_length} characters only...")

    prompt = QUESTIONS_PROMPT.format(
        max_questions=max_questions,
        content=truncate_text(text, max_length),
    )

    try:
        stream = await llm_client.stream(
            operation=PipelineOperation.QUESTION_GENERATION,
            messages=build_messages(prompt, system_prompt=QUESTIONS_SYSTEM_PROMPT),
            temperature=processing_settings.QUESTIONS_TEMPERATURE,
            max_tokens=processing_settings.QUESTIONS_MAX_TOKENS,
            pipeline=PipelineName.PDF_QUESTIONS,
        )
        generated_content = await stream.text()
    except Exception as e:
        logger.error(f"Question generation failed: {e}")
        if is_token_limit_error(str(e)):
            logger.error(TOKEN_LIMIT_HINT)
        return PipelineResult.failed(usages=_error_usages(e))

    usages = [stream.usage] if stream.usage else []

    if len(generated_content.strip()) <= processing_settings.QUESTIONS_MIN_RESPONSE_LENGTH:
        logger.warning("Generated content too short for question parsing")
        return PipelineResult.failed(usages=usages)

    questions = parse_questions_from_text(generated_content, max_questions)
    if not questions:
        logger.warning("No questions could be parsed from the generated content")
        return PipelineResult.failed(usages=usages)

    logger.info(f"Question generation successful: {len(questions)} questions generated")
    return PipelineResult(questions=questions, success=True, usages=usages)
