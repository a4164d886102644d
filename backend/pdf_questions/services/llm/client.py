"""
Unified LLM Client supporting multiple providers via LiteLLM.

LiteLLM provides a unified interface to 100+ LLM providers using
the format "provider/model-name". Key features:
- Operation-based model selection via PipelineOperation enum
- Credentials, models and endpoint injected once at construction
- Streaming completions exposed as an async iterator of text fragments
- Usage tracking via LLMUsage

See: https://docs.litellm.ai/

Usage:
    from pdf_questions.enums import PipelineOperation
    from pdf_questions.services.llm import get_llm_client

    client = get_llm_client()

    # Single completion
    text, usage = await client.complete(
        operation=PipelineOperation.SUMMARIZATION,
        messages=[{"role": "user", "content": "Summarize..."}],
    )

    # Streamed completion
    stream = await client.stream(
        operation=PipelineOperation.QUESTION_GENERATION,
        messages=[{"role": "user", "content": "Generate questions..."}],
    )
    async for fragment in stream:
        print(fragment, end="")
    print(stream.usage)
"""

import logging
import os
import time
from typing import Any, AsyncIterator, Optional, Union

import litellm
from litellm import acompletion
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from pdf_questions.config.settings import Settings, settings
from pdf_questions.enums.pipeline import PipelineName, PipelineOperation
from pdf_questions.exceptions import LLMError, MissingCredentialError
from pdf_questions.models.llm_usage import (
    LLMUsage,
    create_error_usage,
    extract_provider,
    extract_usage_from_response,
    extract_usage_from_stream,
)

logger = logging.getLogger(__name__)

# Configure LiteLLM
litellm.drop_params = True  # Drop unsupported params instead of erroring
if settings.DEBUG:
    os.environ["LITELLM_LOG"] = "DEBUG"

# Providers that require a credential, and where it is configured
PROVIDER_KEY_ENV_VARS: dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "mistral": "MISTRAL_API_KEY",
}


def build_messages(
    prompt: str,
    system_prompt: Optional[str] = None,
) -> list[dict[str, str]]:
    """
    Build messages list from prompt and optional system prompt.

    Args:
        prompt: User prompt text
        system_prompt: Optional system prompt

    Returns:
        List of message dicts for LLM API
    """
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": prompt})
    return messages


class CompletionStream:
    """
    Text fragments of a streamed completion, in arrival order.

    Iterate once. After the stream is drained, `usage` holds the LLMUsage
    for the request.
    """

    def __init__(
        self,
        response: Any,
        model: str,
        operation: Optional[str],
        pipeline: Optional[str],
        start_time: float,
    ) -> None:
        self._response = response
        self.model = model
        self.operation = operation
        self.pipeline = pipeline
        self._start_time = start_time
        self.usage: Optional[LLMUsage] = None

    async def __aiter__(self) -> AsyncIterator[str]:
        final_usage = None
        try:
            async for chunk in self._response:
                chunk_usage = getattr(chunk, "usage", None)
                if chunk_usage:
                    final_usage = chunk_usage

                choices = getattr(chunk, "choices", None)
                if not choices:
                    continue
                fragment = choices[0].delta.content
                if fragment:
                    yield fragment
        except Exception as e:
            latency_ms = int((time.perf_counter() - self._start_time) * 1000)
            self.usage = create_error_usage(
                model=self.model,
                request_type="stream",
                latency_ms=latency_ms,
                error_message=str(e),
                pipeline=self.pipeline,
                operation=self.operation,
            )
            logger.error(f"LLM stream failed: {e} (model={self.model})")
            raise LLMError(
                str(e), details={"model": self.model, "usage": self.usage}
            ) from e

        latency_ms = int((time.perf_counter() - self._start_time) * 1000)
        self.usage = extract_usage_from_stream(
            final_usage,
            model=self.model,
            latency_ms=latency_ms,
            pipeline=self.pipeline,
            operation=self.operation,
        )

    async def text(self) -> str:
        """Drain the stream and return the concatenated text."""
        fragments = [fragment async for fragment in self]
        return "".join(fragments)


class LLMClient:
    """
    LLM client with operation-based model selection and usage tracking.

    Every request passes the credential for its model's provider and the
    configured endpoint explicitly, so nothing is read from the process
    environment after construction.

    Attributes:
        models: Operation -> model mapping
        api_keys: Provider name -> credential
        api_base: Optional endpoint override
        max_attempts: Attempts per request (1 = no retries)
    """

    def __init__(
        self,
        models: dict[PipelineOperation, str],
        api_keys: Optional[dict[str, str]] = None,
        api_base: Optional[str] = None,
        max_attempts: int = 1,
    ):
        """
        Initialize the LLM client and validate API keys.

        Raises:
            MissingCredentialError: If a configured model's provider has no key
        """
        self.models: dict[PipelineOperation, str] = dict(models)
        self.api_keys: dict[str, str] = dict(api_keys or {})
        self.api_base = api_base
        self.max_attempts = max(1, max_attempts)
        self._validate_api_keys()

    @classmethod
    def from_settings(cls, app_settings: Optional[Settings] = None) -> "LLMClient":
        """Build a client from application settings."""
        app_settings = app_settings or settings
        return cls(
            models={
                PipelineOperation.SUMMARIZATION: app_settings.summarization_model,
                PipelineOperation.QUESTION_GENERATION: app_settings.question_model,
            },
            api_keys=app_settings.api_keys,
            api_base=app_settings.LLM_API_BASE,
            max_attempts=app_settings.LLM_MAX_ATTEMPTS,
        )

    def _validate_api_keys(self) -> None:
        """
        Verify every configured model has a credential for its provider.

        Providers outside PROVIDER_KEY_ENV_VARS (e.g. local servers) are
        not checked.

        Raises:
            MissingCredentialError: On the first provider without a key
        """
        for model in self.models.values():
            provider = extract_provider(model)
            env_var = PROVIDER_KEY_ENV_VARS.get(provider)
            if env_var and not self.api_keys.get(provider):
                raise MissingCredentialError(provider, env_var)

        logger.info(
            f"LLM client initialized with models: "
            f"{', '.join(sorted(set(self.models.values())))}"
        )

    def get_model_for_operation(self, operation: Union[PipelineOperation, str]) -> str:
        """
        Get the configured model for a specific operation.

        Args:
            operation: PipelineOperation enum value

        Returns:
            Model identifier in LiteLLM format (provider/model-name)

        Raises:
            ValueError: If no model is configured for the operation
        """
        operation = PipelineOperation(operation)
        if operation not in self.models:
            raise ValueError(f"No model configured for operation: {operation.value}")
        return self.models[operation]

    def _build_kwargs(
        self,
        model: str,
        messages: list[dict],
        temperature: float,
        max_tokens: int,
    ) -> dict:
        """Build completion kwargs for a request."""
        kwargs = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        api_key = self.api_keys.get(extract_provider(model))
        if api_key:
            kwargs["api_key"] = api_key
        if self.api_base:
            kwargs["api_base"] = self.api_base

        return kwargs

    def _retrying(self) -> AsyncRetrying:
        """Retry policy for opening a completion."""
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=30),
            reraise=True,
        )

    async def complete(
        self,
        operation: Union[PipelineOperation, str],
        messages: list[dict],
        temperature: float = 0.3,
        max_tokens: int = 4096,
        pipeline: Optional[Union[PipelineName, str]] = None,
        model: Optional[str] = None,
    ) -> tuple[str, LLMUsage]:
        """
        Generate a completion using the model configured for the operation.

        Args:
            operation: PipelineOperation enum specifying the operation type
            messages: Chat messages in OpenAI format
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response
            pipeline: PipelineName for usage attribution
            model: Optional model override (bypasses operation-based selection)

        Returns:
            Tuple of (response text, LLMUsage)

        Raises:
            LLMError: If the completion fails after all attempts
        """
        model = model or self.get_model_for_operation(operation)
        kwargs = self._build_kwargs(model, messages, temperature, max_tokens)
        operation_name = PipelineOperation(operation).value
        pipeline_name = PipelineName(pipeline).value if pipeline else None

        start_time = time.perf_counter()

        try:
            async for attempt in self._retrying():
                with attempt:
                    response = await acompletion(**kwargs)
        except Exception as e:
            latency_ms = int((time.perf_counter() - start_time) * 1000)
            usage = create_error_usage(
                model=model,
                request_type="text",
                latency_ms=latency_ms,
                error_message=str(e),
                pipeline=pipeline_name,
                operation=operation_name,
            )
            logger.error(f"LLM completion failed: {e} (model={model})")
            raise LLMError(str(e), details={"model": model, "usage": usage}) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        usage = extract_usage_from_response(
            response=response,
            model=model,
            latency_ms=latency_ms,
            pipeline=pipeline_name,
            operation=operation_name,
        )

        if usage.cost_usd:
            logger.debug(
                f"LLM completion [{model}] - Cost: ${usage.cost_usd:.4f}, "
                f"Tokens: {usage.total_tokens}, Latency: {latency_ms}ms"
            )

        return response.choices[0].message.content or "", usage

    async def stream(
        self,
        operation: Union[PipelineOperation, str],
        messages: list[dict],
        temperature: float = 0.3,
        max_tokens: int = 4096,
        pipeline: Optional[Union[PipelineName, str]] = None,
        model: Optional[str] = None,
    ) -> CompletionStream:
        """
        Open a streamed completion.

        Only opening the stream is retried; a failure while fragments are
        arriving is raised from the iteration as LLMError.

        Args:
            operation: PipelineOperation enum specifying the operation type
            messages: Chat messages in OpenAI format
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response
            pipeline: PipelineName for usage attribution
            model: Optional model override (bypasses operation-based selection)

        Returns:
            CompletionStream yielding text fragments

        Raises:
            LLMError: If the stream cannot be opened
        """
        model = model or self.get_model_for_operation(operation)
        kwargs = self._build_kwargs(model, messages, temperature, max_tokens)
        kwargs["stream"] = True
        kwargs["stream_options"] = {"include_usage": True}
        operation_name = PipelineOperation(operation).value
        pipeline_name = PipelineName(pipeline).value if pipeline else None

        start_time = time.perf_counter()

        try:
            async for attempt in self._retrying():
                with attempt:
                    response = await acompletion(**kwargs)
        except Exception as e:
            logger.error(f"LLM stream could not be opened: {e} (model={model})")
            usage = create_error_usage(
                model=model,
                request_type="stream",
                latency_ms=int((time.perf_counter() - start_time) * 1000),
                error_message=str(e),
                pipeline=pipeline_name,
                operation=operation_name,
            )
            raise LLMError(str(e), details={"model": model, "usage": usage}) from e

        return CompletionStream(
            response,
            model=model,
            operation=operation_name,
            pipeline=pipeline_name,
            start_time=start_time,
        )


# Singleton instance
_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """
    Get or create singleton LLM client built from settings.

    Returns:
        Shared LLMClient instance

    Raises:
        MissingCredentialError: If a configured model has no credential
    """
    global _client
    if _client is None:
        _client = LLMClient.from_settings(settings)
    return _client


def reset_llm_client():
    """Reset the singleton client (useful for testing)."""
    global _client
    _client = None
