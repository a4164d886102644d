"""
Unit tests for data models.

Tests the processing models and LLM usage records for validation and
derived values.
"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from pdf_questions.models import (
    DownloadedDocument,
    ExtractionResult,
    LLMUsage,
    PipelineResult,
    SummaryResult,
)
from pdf_questions.models.llm_usage import (
    create_error_usage,
    extract_provider,
    extract_usage_from_response,
    extract_usage_from_stream,
)


class TestExtractionResult:
    """Tests for the ExtractionResult model."""

    def test_text_trimmed(self):
        result = ExtractionResult(text="  Some text \n\n", page_count=1)

        assert result.text == "Some text"
        assert result.character_count == 9

    def test_blank_text_rejected(self):
        """Extraction never succeeds with empty text."""
        with pytest.raises(ValidationError):
            ExtractionResult(text=" \n ", page_count=1)

    def test_negative_page_count_rejected(self):
        with pytest.raises(ValidationError):
            ExtractionResult(text="Some text", page_count=-1)

    def test_frozen(self):
        result = ExtractionResult(text="Some text", page_count=1)

        with pytest.raises(ValidationError):
            result.page_count = 2


class TestDownloadedDocument:
    def test_fields(self):
        extraction = ExtractionResult(text="Body", page_count=3)

        document = DownloadedDocument(
            url="https://example.com/a.pdf", file_size=2048, extraction=extraction
        )

        assert document.extraction.page_count == 3
        assert document.file_size == 2048


class TestSummaryResult:
    """Tests for the SummaryResult model."""

    def test_compression_ratio(self):
        result = SummaryResult(
            summary="x" * 100, file_size=5000, page_count=2, character_count=1000
        )

        assert result.compression_ratio == pytest.approx(0.1)

    def test_compression_ratio_without_text(self):
        result = SummaryResult(summary="x", file_size=0, page_count=0, character_count=0)

        assert result.compression_ratio == 0.0


class TestPipelineResult:
    """Tests for the PipelineResult model."""

    def test_success_with_questions(self):
        result = PipelineResult(questions=["What is X?"], success=True)

        assert result.question_count == 1
        assert result.usages == []

    def test_failure_cannot_carry_questions(self):
        """success=False always comes with an empty question list."""
        with pytest.raises(ValidationError):
            PipelineResult(questions=["What is X?"], success=False)

    def test_failed_factory(self):
        result = PipelineResult.failed()

        assert result.success is False
        assert result.questions == []
        assert result.question_count == 0

    def test_empty_success_allowed(self):
        """The model itself does not reject an empty successful result."""
        result = PipelineResult(questions=[], success=True)

        assert result.success is True


class TestLLMUsage:
    """Tests for LLMUsage and its helpers."""

    def test_total_cost_defaults_to_zero(self):
        assert LLMUsage(model="openai/gpt-4.1").total_cost == 0.0

    def test_str(self):
        usage = LLMUsage(model="openai/gpt-4.1", request_type="text", cost_usd=0.0123, total_tokens=42)

        assert str(usage) == "openai/gpt-4.1 [text] $0.0123, 42 tokens"

    def test_to_dict(self):
        data = LLMUsage(model="openai/gpt-4.1").to_dict()

        assert data["model"] == "openai/gpt-4.1"
        assert "request_id" in data

    @pytest.mark.parametrize(
        "model,provider",
        [
            ("openai/gpt-4.1", "openai"),
            ("anthropic/claude-3-5-sonnet-20240620", "anthropic"),
            ("gpt-4o", "unknown"),
        ],
    )
    def test_extract_provider(self, model, provider):
        assert extract_provider(model) == provider

    def test_usage_from_response(self):
        response = SimpleNamespace(
            usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5, total_tokens=15),
            _hidden_params={"response_cost": 0.5},
        )

        usage = extract_usage_from_response(
            response, model="openai/gpt-4.1", latency_ms=100, operation="SUMMARIZATION"
        )

        assert usage.total_tokens == 15
        assert usage.cost_usd == 0.5
        assert usage.latency_ms == 100
        assert usage.operation == "SUMMARIZATION"

    def test_usage_from_stream_without_usage(self):
        """Streams that never report usage still get a record."""
        usage = extract_usage_from_stream(None, model="openai/gpt-4.1", latency_ms=50)

        assert usage.request_type == "stream"
        assert usage.total_tokens is None
        assert usage.success is True

    def test_error_usage(self):
        usage = create_error_usage(
            model="openai/gpt-4.1",
            request_type="text",
            latency_ms=10,
            error_message="timeout",
        )

        assert usage.success is False
        assert usage.error_message == "timeout"
        assert usage.provider == "openai"
