"""
PDF Processor Pipeline

Downloads a PDF from a URL and extracts its text.

Features:
- Async download with httpx (redirects followed)
- Size limit enforced before parsing
- Text extraction with PyMuPDF, run off the event loop

Usage:
    from pdf_questions.pipelines import PDFProcessor

    processor = PDFProcessor()
    document = await processor.process_url("https://example.com/paper.pdf")
    print(document.extraction.page_count)
"""

import asyncio
import logging
from typing import Optional

import httpx

from pdf_questions.config.settings import settings
from pdf_questions.exceptions import DownloadError, InvalidPDFError
from pdf_questions.models.processing import DownloadedDocument, ExtractionResult
from pdf_questions.pipelines.utils.pdf_utils import extract_text_from_pdf


class PDFProcessor:
    """
    Fetches a PDF over HTTP and runs text extraction on it.

    Each call opens its own HTTP client, so one processor can serve
    concurrent pipeline runs.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        max_file_size_mb: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize PDF processor.

        Args:
            timeout: HTTP timeout in seconds. None (the default from settings)
                waits indefinitely; callers impose their own deadline.
            max_file_size_mb: Maximum allowed PDF size in megabytes.
                Defaults to PDF_MAX_FILE_SIZE_MB from settings.
            transport: Optional httpx transport (used by tests)
        """
        self.timeout: Optional[float] = (
            timeout if timeout is not None else settings.DOWNLOAD_TIMEOUT_SECONDS
        )
        self.max_file_size_mb: int = max_file_size_mb or settings.PDF_MAX_FILE_SIZE_MB
        self.transport = transport
        self.logger: logging.Logger = logging.getLogger(self.__class__.__name__)

    async def download(self, url: str) -> bytes:
        """
        Download the raw bytes of a PDF.

        Args:
            url: URL of the PDF

        Returns:
            Response body

        Raises:
            DownloadError: On a malformed URL or a failed request
        """
        self.logger.info(f"Downloading PDF from URL: {url}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise DownloadError(
                f"Failed to download PDF from {url}: "
                f"{status} {e.response.reason_phrase}",
                url=url,
                status_code=status,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DownloadError(
                f"Failed to download PDF from {url}: {e}",
                url=url,
            ) from e

        pdf_bytes = response.content
        self.logger.info(f"Downloaded PDF: {len(pdf_bytes)} bytes")
        return pdf_bytes

    def validate_size(self, pdf_bytes: bytes) -> None:
        """
        Reject PDFs above the configured size limit.

        Raises:
            InvalidPDFError: If the buffer exceeds max_file_size_mb
        """
        size_mb = len(pdf_bytes) / (1024 * 1024)
        if size_mb > self.max_file_size_mb:
            raise InvalidPDFError(
                f"Invalid PDF file: size {size_mb:.1f}MB exceeds limit of "
                f"{self.max_file_size_mb}MB"
            )

    async def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        """
        Extract text from PDF bytes without blocking the event loop.

        Raises:
            ExtractionError: If the PDF is empty, invalid or has no text
        """
        self.validate_size(pdf_bytes)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, extract_text_from_pdf, pdf_bytes)

    async def process_url(self, url: str) -> DownloadedDocument:
        """
        Download a PDF and extract its text.

        Args:
            url: URL of the PDF

        Returns:
            DownloadedDocument with file size and extraction

        Raises:
            DownloadError: If the download fails
            ExtractionError: If no text can be extracted
        """
        pdf_bytes = await self.download(url)
        extraction = await self.extract(pdf_bytes)

        return DownloadedDocument(
            url=url,
            file_size=len(pdf_bytes),
            extraction=extraction,
        )
