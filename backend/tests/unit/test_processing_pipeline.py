"""
Unit tests for the processing pipeline orchestrator.

The LLM client is mocked and PDFs are served through httpx.MockTransport,
so each test runs the real stages end to end without network access.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from pdf_questions.enums import ProcessingStage
from pdf_questions.exceptions import (
    DownloadError,
    LLMError,
    MissingCredentialError,
    NoTextFoundError,
    SummarizationError,
)
from pdf_questions.pipelines.pdf_processor import PDFProcessor
from pdf_questions.services.processing import (
    PipelineConfig,
    extract_and_summarize,
    generate_questions,
    generate_questions_from_pdf_url,
)

PDF_URL = "https://example.com/paper.pdf"


def make_processor(content: bytes, status_code: int = 200) -> PDFProcessor:
    """Create a processor that serves fixed content for every URL."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=content)

    return PDFProcessor(transport=httpx.MockTransport(handler))


class TestPipelineConfig:
    def test_default_max_questions(self):
        assert PipelineConfig().max_questions == 10


class TestExtractAndSummarize:
    """Tests for extract_and_summarize."""

    @pytest.mark.asyncio
    async def test_summary_result(self, mock_llm_client, sample_pdf_bytes):
        """The result carries the summary and document statistics."""
        processor = make_processor(sample_pdf_bytes)

        result = await extract_and_summarize(
            PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
        )

        assert result.summary == "A concise summary of the document."
        assert result.file_size == len(sample_pdf_bytes)
        assert result.page_count == 2
        assert result.character_count > 0
        assert len(result.usages) == 1

    @pytest.mark.asyncio
    async def test_extracted_text_is_summarized(self, mock_llm_client, sample_pdf_bytes):
        """The extracted text is what gets sent for summarization."""
        processor = make_processor(sample_pdf_bytes)

        await extract_and_summarize(
            PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
        )

        prompt = mock_llm_client.complete.call_args.kwargs["messages"][-1]["content"]
        assert "Photosynthesis converts light into chemical energy." in prompt

    @pytest.mark.asyncio
    async def test_download_failure_aborts(self, mock_llm_client):
        processor = make_processor(b"not found", status_code=404)

        with pytest.raises(DownloadError) as exc_info:
            await extract_and_summarize(
                PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
            )

        assert exc_info.value.stage == ProcessingStage.DOWNLOAD
        mock_llm_client.complete.assert_not_called()

    @pytest.mark.asyncio
    async def test_extraction_failure_aborts(self, mock_llm_client, blank_pdf_bytes):
        processor = make_processor(blank_pdf_bytes)

        with pytest.raises(NoTextFoundError) as exc_info:
            await extract_and_summarize(
                PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
            )

        assert exc_info.value.stage == ProcessingStage.EXTRACTION
        mock_llm_client.complete.assert_not_called()

    @pytest.mark.asyncio
    async def test_summarization_failure_aborts(self, mock_llm_client, sample_pdf_bytes):
        mock_llm_client.complete.side_effect = LLMError("Service unavailable")
        processor = make_processor(sample_pdf_bytes)

        with pytest.raises(SummarizationError) as exc_info:
            await extract_and_summarize(
                PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
            )

        assert exc_info.value.stage == ProcessingStage.SUMMARIZATION


class TestGenerateQuestions:
    """Tests for the text-only entry point."""

    @pytest.mark.asyncio
    async def test_delegates_to_stage(self, mock_llm_client):
        result = await generate_questions(
            "Plants use light.", max_questions=1, llm_client=mock_llm_client
        )

        assert result.success is True
        assert result.questions == ["What is photosynthesis?"]

    @pytest.mark.asyncio
    async def test_shared_client_used_when_none_given(self, mock_llm_client):
        with patch(
            "pdf_questions.services.processing.pipeline.get_llm_client",
            return_value=mock_llm_client,
        ):
            result = await generate_questions("Plants use light.")

        assert result.success is True
        mock_llm_client.stream.assert_awaited_once()


class TestGenerateQuestionsFromPdfUrl:
    """Tests for the full pipeline."""

    @pytest.mark.asyncio
    async def test_full_run(self, mock_llm_client, sample_pdf_bytes):
        """A PDF URL yields parsed questions from its summary."""
        processor = make_processor(sample_pdf_bytes)

        result = await generate_questions_from_pdf_url(
            PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
        )

        assert result.success is True
        assert result.questions == [
            "What is photosynthesis?",
            "Why do plants need light?",
        ]
        assert [u.request_type for u in result.usages] == ["text", "stream"]

    @pytest.mark.asyncio
    async def test_summary_feeds_question_generation(self, mock_llm_client, sample_pdf_bytes):
        """Questions are generated from the summary, not the raw text."""
        processor = make_processor(sample_pdf_bytes)

        await generate_questions_from_pdf_url(
            PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
        )

        prompt = mock_llm_client.stream.call_args.kwargs["messages"][-1]["content"]
        assert prompt.endswith("A concise summary of the document.")
        assert "Chlorophyll" not in prompt

    @pytest.mark.asyncio
    async def test_max_questions_from_config(self, mock_llm_client, sample_pdf_bytes):
        processor = make_processor(sample_pdf_bytes)

        result = await generate_questions_from_pdf_url(
            PDF_URL,
            config=PipelineConfig(max_questions=1),
            llm_client=mock_llm_client,
            pdf_processor=processor,
        )

        assert result.questions == ["What is photosynthesis?"]

    @pytest.mark.asyncio
    async def test_question_failure_degrades(self, mock_llm_client, sample_pdf_bytes):
        """Question generation errors produce an empty, failed result."""
        mock_llm_client.stream.side_effect = LLMError("Service unavailable")
        processor = make_processor(sample_pdf_bytes)

        result = await generate_questions_from_pdf_url(
            PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
        )

        assert result.success is False
        assert result.questions == []
        assert len(result.usages) == 1

    @pytest.mark.asyncio
    async def test_unexpected_question_stage_error_degrades(
        self, mock_llm_client, sample_pdf_bytes
    ):
        """Even errors escaping the question stage do not abort the run."""
        processor = make_processor(sample_pdf_bytes)

        with patch(
            "pdf_questions.services.processing.pipeline.question_stage.generate_questions",
            new=AsyncMock(side_effect=RuntimeError("boom")),
        ):
            result = await generate_questions_from_pdf_url(
                PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
            )

        assert result.success is False
        assert result.questions == []
        assert [u.request_type for u in result.usages] == ["text"]

    @pytest.mark.asyncio
    async def test_download_failure_raises(self, mock_llm_client):
        processor = make_processor(b"", status_code=500)

        with pytest.raises(DownloadError) as exc_info:
            await generate_questions_from_pdf_url(
                PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
            )

        assert "500" in exc_info.value.message
        mock_llm_client.stream.assert_not_called()

    @pytest.mark.asyncio
    async def test_summarization_failure_raises(self, mock_llm_client, sample_pdf_bytes):
        mock_llm_client.complete.side_effect = LLMError("Service unavailable")
        processor = make_processor(sample_pdf_bytes)

        with pytest.raises(SummarizationError):
            await generate_questions_from_pdf_url(
                PDF_URL, llm_client=mock_llm_client, pdf_processor=processor
            )

        mock_llm_client.stream.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_credential_fails_before_download(self):
        """Without credentials the run fails before any network call."""
        processor = MagicMock()
        processor.process_url = AsyncMock()

        with patch(
            "pdf_questions.services.processing.pipeline.get_llm_client",
            side_effect=MissingCredentialError("openai", "OPENAI_API_KEY"),
        ):
            with pytest.raises(MissingCredentialError):
                await generate_questions_from_pdf_url(PDF_URL, pdf_processor=processor)

        processor.process_url.assert_not_called()
