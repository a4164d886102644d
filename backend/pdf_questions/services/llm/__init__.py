"""
LLM Service Module

Provides a unified interface to multiple LLM providers via LiteLLM.
Supports operation-based model selection, streaming and usage tracking.

Key Components:
- client.py: LLMClient with async complete() and stream() methods

Usage:
    from pdf_questions.enums import PipelineOperation
    from pdf_questions.services.llm import get_llm_client

    client = get_llm_client()
    text, usage = await client.complete(
        operation=PipelineOperation.SUMMARIZATION,
        messages=[{"role": "user", "content": "Summarize this..."}],
    )
    print(f"Cost: ${usage.total_cost:.4f}, Tokens: {usage.total_tokens}")
"""

from pdf_questions.models.llm_usage import LLMUsage
from pdf_questions.services.llm.client import (
    CompletionStream,
    LLMClient,
    build_messages,
    get_llm_client,
    reset_llm_client,
)

__all__ = [
    "CompletionStream",
    "LLMClient",
    "LLMUsage",
    "build_messages",
    "get_llm_client",
    "reset_llm_client",
]
