"""
Processing Pipeline Orchestrator

Runs a PDF through the stages in strict sequence, each stage feeding the
next:

1. Download - Fetch the PDF over HTTP
2. Extraction - Recover the embedded text and page count
3. Summarization - Compress the text with a large context window model
4. Question Generation - Generate and parse questions from the summary

Failure policy:
    Download, extraction and summarization failures abort the run and are
    raised as ServiceError subclasses whose `stage` names the failing step.
    Question generation failures never raise; they produce
    PipelineResult(questions=[], success=False) so the completed upstream
    work is not discarded.

No state is shared between runs, so any number of runs may execute
concurrently with the same client and processor.

Usage:
    from pdf_questions.services.processing import (
        generate_questions_from_pdf_url,
        PipelineConfig,
    )

    result = await generate_questions_from_pdf_url(
        "https://example.com/paper.pdf",
        config=PipelineConfig(max_questions=5),
    )
    print(result.questions)
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from pdf_questions.config.processing import processing_settings
from pdf_questions.enums.processing import PipelineState, ProcessingStage
from pdf_questions.exceptions import ServiceError
from pdf_questions.models.processing import PipelineResult, SummaryResult
from pdf_questions.pipelines.pdf_processor import PDFProcessor
from pdf_questions.services.llm.client import LLMClient, get_llm_client
from pdf_questions.services.processing.stages import questions as question_stage
from pdf_questions.services.processing.stages.summarization import generate_summary

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """
    Configuration for a pipeline run.

    Attributes:
        max_questions: Upper bound on the number of questions returned
    """

    max_questions: int = field(
        default_factory=lambda: processing_settings.QUESTIONS_DEFAULT_MAX
    )


def _new_run_id() -> str:
    return uuid.uuid4().hex[:8]


def _log_state(run_id: str, state: PipelineState) -> None:
    logger.debug(f"[{run_id}] State: {state.value}")


async def _summarize_document(
    run_id: str,
    url: str,
    llm_client: LLMClient,
    pdf_processor: PDFProcessor,
) -> SummaryResult:
    """Run the extracting and summarizing states of one pipeline run."""
    try:
        _log_state(run_id, PipelineState.EXTRACTING)
        document = await pdf_processor.process_url(url)
        extraction = document.extraction

        _log_state(run_id, PipelineState.SUMMARIZING)
        logger.info(f"[{run_id}] Generating summary...")
        summary, usage = await generate_summary(extraction.text, llm_client)
    except ServiceError as e:
        stage = e.stage.value if e.stage else "UNKNOWN"
        logger.error(f"[{run_id}] PDF processing failed at {stage} stage: {e.message}")
        raise

    result = SummaryResult(
        summary=summary,
        file_size=document.file_size,
        page_count=extraction.page_count,
        character_count=extraction.character_count,
        usages=[usage],
    )

    logger.info(
        f"[{run_id}] Downloaded {result.file_size} bytes, "
        f"extracted {result.character_count} characters from {result.page_count} pages, "
        f"generated {len(result.summary)} character summary "
        f"({result.compression_ratio:.1%} of original)"
    )
    return result


async def extract_and_summarize(
    url: str,
    llm_client: LLMClient = None,
    pdf_processor: PDFProcessor = None,
) -> SummaryResult:
    """
    Download a PDF, extract its text and summarize it.

    Args:
        url: URL of the PDF
        llm_client: LLM client (shared client from settings if not provided)
        pdf_processor: Downloader/extractor (default instance if not provided)

    Returns:
        SummaryResult with the summary and document statistics

    Raises:
        MissingCredentialError: If no client is given and settings lack a key
        DownloadError: If the PDF cannot be fetched
        ExtractionError: If no text can be extracted
        SummarizationError: If the summarization call fails
    """
    llm_client = llm_client or get_llm_client()
    pdf_processor = pdf_processor or PDFProcessor()
    return await _summarize_document(
        _new_run_id(), url, llm_client, pdf_processor
    )


async def generate_questions(
    text: str,
    max_questions: Optional[int] = None,
    llm_client: LLMClient = None,
) -> PipelineResult:
    """
    Generate questions from text the caller already holds.

    Args:
        text: Extracted or summarized text
        max_questions: Upper bound on questions (default from settings)
        llm_client: LLM client (shared client from settings if not provided)

    Returns:
        PipelineResult; never raises for generation failures
    """
    llm_client = llm_client or get_llm_client()
    return await question_stage.generate_questions(
        text, llm_client, max_questions=max_questions
    )


async def generate_questions_from_pdf_url(
    url: str,
    config: PipelineConfig = None,
    llm_client: LLMClient = None,
    pdf_processor: PDFProcessor = None,
) -> PipelineResult:
    """
    Run the full pipeline: download, extract, summarize, generate questions.

    Args:
        url: URL of the PDF
        config: Pipeline configuration (uses defaults if not provided)
        llm_client: LLM client (shared client from settings if not provided)
        pdf_processor: Downloader/extractor (default instance if not provided)

    Returns:
        PipelineResult with the generated questions

    Raises:
        MissingCredentialError: If no client is given and settings lack a key
        DownloadError: If the PDF cannot be fetched
        ExtractionError: If no text can be extracted
        SummarizationError: If the summarization call fails
    """
    config = config or PipelineConfig()
    llm_client = llm_client or get_llm_client()
    pdf_processor = pdf_processor or PDFProcessor()
    run_id = _new_run_id()
    start_time = time.time()

    _log_state(run_id, PipelineState.AWAITING_INPUT)
    logger.info(f"[{run_id}] Starting PDF question pipeline for: {url}")

    summary_result = await _summarize_document(
        run_id, url, llm_client, pdf_processor
    )

    _log_state(run_id, PipelineState.GENERATING_QUESTIONS)
    if not summary_result.summary:
        logger.error(f"[{run_id}] Missing summary in question generation step")
        return PipelineResult.failed(usages=summary_result.usages)

    try:
        questions_result = await question_stage.generate_questions(
            summary_result.summary,
            llm_client,
            max_questions=config.max_questions,
        )
    except Exception as e:
        logger.error(
            f"[{run_id}] {ProcessingStage.QUESTIONS.value} stage failed: {e}"
        )
        questions_result = PipelineResult.failed()

    result = questions_result.model_copy(
        update={"usages": summary_result.usages + questions_result.usages}
    )

    _log_state(run_id, PipelineState.DONE)
    processing_time = time.time() - start_time
    estimated_cost = sum(u.total_cost for u in result.usages)
    logger.info(
        f"[{run_id}] Pipeline complete: {result.question_count} questions "
        f"(success={result.success}) in {processing_time:.2f}s, "
        f"cost: ${estimated_cost:.4f}"
    )

    return result
