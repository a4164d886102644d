"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across the unit tests: a
predictable environment, fake LLM clients and streams, and PDF documents
built in memory with PyMuPDF.
"""

import os
import sys
from pathlib import Path
from typing import Generator, Optional
from unittest.mock import AsyncMock, MagicMock

import fitz
import pytest

# Add the backend directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Test credentials must be in place before pdf_questions.config is imported
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")
# Use litellm's bundled model cost map instead of fetching it over the network
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

from pdf_questions.models.llm_usage import LLMUsage


# ============================================================================
# Environment Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """
    Set up test environment variables before any tests run.

    Overrides any values from .env files to ensure test isolation.
    """
    original_env = os.environ.copy()

    test_env = {
        "OPENAI_API_KEY": "test-openai-key",
        "ANTHROPIC_API_KEY": "test-anthropic-key",
        "DEBUG": "false",
    }
    os.environ.update(test_env)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_llm_singleton() -> Generator[None, None, None]:
    """Drop the shared LLM client between tests."""
    from pdf_questions.services.llm.client import reset_llm_client

    reset_llm_client()
    yield
    reset_llm_client()


# ============================================================================
# LLM Fakes
# ============================================================================


def make_usage(
    model: str = "openai/gpt-4.1",
    request_type: str = "text",
    cost_usd: Optional[float] = 0.001,
    success: bool = True,
) -> LLMUsage:
    """Create an LLMUsage record for tests."""
    return LLMUsage(
        model=model,
        provider=model.split("/")[0],
        request_type=request_type,
        prompt_tokens=100,
        completion_tokens=50,
        total_tokens=150,
        cost_usd=cost_usd,
        success=success,
    )


class FakeCompletionStream:
    """Stand-in for CompletionStream returning fixed text."""

    def __init__(self, text: str = "", usage: Optional[LLMUsage] = None):
        self._text = text
        self.usage = usage

    async def text(self) -> str:
        return self._text


@pytest.fixture
def mock_llm_client() -> MagicMock:
    """
    LLM client with async complete/stream methods.

    complete returns a summary, stream returns a numbered question list.
    Override return_value or side_effect per test.
    """
    client = MagicMock()
    client.complete = AsyncMock(
        return_value=("A concise summary of the document.", make_usage())
    )
    client.stream = AsyncMock(
        return_value=FakeCompletionStream(
            "1. What is photosynthesis?\n2. Why do plants need light?",
            usage=make_usage(
                model="anthropic/claude-3-5-sonnet-20240620",
                request_type="stream",
            ),
        )
    )
    return client


@pytest.fixture
def fake_stream():
    """Build FakeCompletionStream instances for stream.return_value."""
    return FakeCompletionStream


@pytest.fixture
def usage_factory():
    """Build LLMUsage records with test defaults."""
    return make_usage


# ============================================================================
# PDF Documents
# ============================================================================


def build_pdf(pages: list[str]) -> bytes:
    """Build a PDF in memory with one page per entry (empty string = blank page)."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Two-page PDF with text on both pages."""
    return build_pdf(
        [
            "Photosynthesis converts light into chemical energy.",
            "Chlorophyll absorbs mostly blue and red light.",
        ]
    )


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """Single-page PDF with no text."""
    return build_pdf([""])


@pytest.fixture
def pdf_factory():
    """Build PDFs from a list of page texts."""
    return build_pdf
