"""
Typed Errors

Every failure raised by the pipeline derives from ServiceError, which carries
an error code for categorization, the stage it is attributed to, and an
optional details dict for diagnostics.

Hierarchy:
    ServiceError
    ├── ConfigurationError
    │   └── MissingCredentialError
    ├── DownloadError
    ├── ExtractionError
    │   ├── InvalidPDFError
    │   ├── PDFParseError
    │   └── NoTextFoundError
    └── LLMError
        └── SummarizationError

Usage:
    from pdf_questions.exceptions import DownloadError, ServiceError

    try:
        summary = await extract_and_summarize(url)
    except ServiceError as e:
        print(f"[{e.stage}] {e.error_code}: {e.message}")
"""

from typing import Optional

from pdf_questions.enums.processing import ProcessingStage


class ServiceError(Exception):
    """
    Base exception for pipeline errors.

    Provides consistent error handling with:
    - Error code for categorization
    - Stage the failure is attributed to
    - Optional details for debugging

    Example:
        raise ServiceError("Something went wrong", details={"url": url})
    """

    error_code: str = "service_error"
    stage: Optional[ProcessingStage] = None

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: dict = None,
        stage: ProcessingStage = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        if stage:
            self.stage = stage
        self.details = details or {}


class ConfigurationError(ServiceError):
    """Invalid or incomplete configuration."""

    error_code = "configuration_error"


class MissingCredentialError(ConfigurationError):
    """
    No API credential for a configured model's provider.

    Raised when the LLM client is constructed, before any request is sent.
    """

    error_code = "missing_credential"

    def __init__(self, provider: str, env_var: str):
        super().__init__(
            f"Missing API credential for provider '{provider}': set {env_var}",
            details={"provider": provider, "env_var": env_var},
        )
        self.provider = provider
        self.env_var = env_var


class DownloadError(ServiceError):
    """
    Transport error fetching the source document.

    Raised on network failures and non-2xx responses.
    """

    error_code = "download_error"
    stage = ProcessingStage.DOWNLOAD

    def __init__(
        self,
        message: str,
        url: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details={"url": url, "status_code": status_code})
        self.url = url
        self.status_code = status_code


class ExtractionError(ServiceError):
    """Text could not be extracted from the PDF."""

    error_code = "extraction_error"
    stage = ProcessingStage.EXTRACTION


class InvalidPDFError(ExtractionError):
    """The PDF buffer is empty or exceeds the size limit."""

    error_code = "invalid_pdf"


class PDFParseError(ExtractionError):
    """The PDF is structurally invalid and could not be parsed."""

    error_code = "pdf_parse_failed"


class NoTextFoundError(ExtractionError):
    """
    The PDF parsed but contains no text runs.

    Typical for scanned or password-protected documents.
    """

    error_code = "no_text_found"


class LLMError(ServiceError):
    """
    LLM provider error.

    Raised when completion calls fail (rate limits, timeouts, context length, etc.)
    """

    error_code = "llm_error"


class SummarizationError(LLMError):
    """The summarization service call failed."""

    error_code = "summarization_failed"
    stage = ProcessingStage.SUMMARIZATION
