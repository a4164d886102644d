"""
Per-request LLM accounting.

Every completion the pipeline makes, streamed or not, successful or not,
produces one LLMUsage record. Records travel on SummaryResult and
PipelineResult so callers can see what a run cost without any storage
layer.

Usage:
    from pdf_questions.models.llm_usage import extract_usage_from_response

    usage = extract_usage_from_response(
        response=litellm_response,
        model="openai/gpt-4.1",
        latency_ms=1234,
        pipeline="PDF_QUESTIONS",
        operation="SUMMARIZATION",
    )
    print(usage)  # openai/gpt-4.1 [text] $0.0042, 1830 tokens
"""

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

import litellm


@dataclass
class LLMUsage:
    """
    Token, cost and timing data for a single completion request.

    Attributes:
        request_id: Random UUID identifying the request
        model: LiteLLM model string, e.g. "openai/gpt-4.1"
        provider: Provider prefix of the model string
        request_type: "text" for plain completions, "stream" for streamed ones
        prompt_tokens: Input tokens, when reported
        completion_tokens: Output tokens, when reported
        total_tokens: Input plus output tokens, when reported
        cost_usd: Cost in US dollars, when LiteLLM can price the model
        pipeline: PipelineName value the request was made for
        operation: PipelineOperation value the request was made for
        latency_ms: Wall time from request to final byte
        success: False if the request raised
        error_message: The raised error's text, for failed requests
    """

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    model: str = ""
    provider: str = ""
    request_type: str = ""

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    cost_usd: Optional[float] = None

    pipeline: Optional[str] = None
    operation: Optional[str] = None

    latency_ms: Optional[int] = None
    success: bool = True
    error_message: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def total_cost(self) -> float:
        """Cost in USD, 0.0 when unknown."""
        return self.cost_usd or 0.0

    def __str__(self) -> str:
        cost = f"${self.cost_usd:.4f}" if self.cost_usd else "cost unknown"
        tokens = f"{self.total_tokens} tokens" if self.total_tokens else "tokens unknown"
        status = "" if self.success else " FAILED"
        return f"{self.model} [{self.request_type}]{status} {cost}, {tokens}"


def extract_provider(model: str) -> str:
    """
    Provider prefix of a LiteLLM model string.

    "anthropic/claude-3-5-sonnet-20240620" gives "anthropic"; a model
    string without a prefix gives "unknown".
    """
    if "/" not in model:
        return "unknown"
    return model.split("/", 1)[0]


def _copy_token_counts(usage: LLMUsage, reported: Any) -> None:
    usage.prompt_tokens = getattr(reported, "prompt_tokens", None)
    usage.completion_tokens = getattr(reported, "completion_tokens", None)
    usage.total_tokens = getattr(reported, "total_tokens", None)


def extract_usage_from_response(
    response,
    model: str,
    latency_ms: int,
    pipeline: Optional[str] = None,
    operation: Optional[str] = None,
) -> LLMUsage:
    """
    Build the usage record for a completed (non-streamed) request.

    Token counts come from `response.usage`; cost comes from the
    `response_cost` LiteLLM stores in the response's hidden params.

    Args:
        response: Object returned by litellm.acompletion()
        model: Model string the request was sent to
        latency_ms: Request wall time
        pipeline: Pipeline the request belongs to
        operation: Operation the request served

    Returns:
        LLMUsage for the request
    """
    usage = LLMUsage(
        model=model,
        provider=extract_provider(model),
        request_type="text",
        latency_ms=latency_ms,
        pipeline=pipeline,
        operation=operation,
    )

    reported = getattr(response, "usage", None)
    if reported:
        _copy_token_counts(usage, reported)

    hidden_params = getattr(response, "_hidden_params", None)
    if isinstance(hidden_params, dict):
        usage.cost_usd = hidden_params.get("response_cost")

    return usage


def extract_usage_from_stream(
    final_usage: Any,
    model: str,
    latency_ms: int,
    pipeline: Optional[str] = None,
    operation: Optional[str] = None,
) -> LLMUsage:
    """
    Build the usage record for a drained stream.

    Providers that honour stream_options.include_usage report token counts
    on the last chunk only. Streamed responses carry no cost, so it is
    priced from the token counts via litellm.cost_per_token.

    Args:
        final_usage: Usage object of the last chunk that had one, or None
        model: Model string the request was sent to
        latency_ms: Wall time until the stream was exhausted
        pipeline: Pipeline the request belongs to
        operation: Operation the request served

    Returns:
        LLMUsage for the request; token and cost fields stay None when the
        provider reported nothing
    """
    usage = LLMUsage(
        model=model,
        provider=extract_provider(model),
        request_type="stream",
        latency_ms=latency_ms,
        pipeline=pipeline,
        operation=operation,
    )

    if final_usage is None:
        return usage

    _copy_token_counts(usage, final_usage)

    if usage.prompt_tokens is None or usage.completion_tokens is None:
        return usage

    try:
        prompt_cost, completion_cost = litellm.cost_per_token(
            model=model,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
        )
    except Exception:
        # LiteLLM has no price for this model
        return usage

    usage.cost_usd = prompt_cost + completion_cost
    return usage


def create_error_usage(
    model: str,
    request_type: str,
    latency_ms: int,
    error_message: str,
    pipeline: Optional[str] = None,
    operation: Optional[str] = None,
) -> LLMUsage:
    """Build the usage record for a request that raised."""
    return LLMUsage(
        model=model,
        provider=extract_provider(model),
        request_type=request_type,
        latency_ms=latency_ms,
        success=False,
        error_message=error_message,
        pipeline=pipeline,
        operation=operation,
    )
