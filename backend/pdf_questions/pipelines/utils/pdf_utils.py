"""
PDF text extraction using PyMuPDF (fitz).

Walks PyMuPDF's structured page tree (page → block → line → span) and
joins every span's text with a single space. Each page ends with a blank
line, and the whole result is trimmed.

Failure modes are kept distinct so callers can tell a broken file from a
file with nothing to read:

- InvalidPDFError: the buffer is empty
- PDFParseError: PyMuPDF could not open the buffer as a PDF
- NoTextFoundError: the PDF opened but holds no text runs (scanned pages,
  or a password-protected document)

Usage:
    from pdf_questions.pipelines.utils.pdf_utils import extract_text_from_pdf

    result = extract_text_from_pdf(pdf_bytes)
    print(f"{result.character_count} chars from {result.page_count} pages")
"""

from __future__ import annotations

import logging

import fitz  # PyMuPDF

from pdf_questions.exceptions import InvalidPDFError, NoTextFoundError, PDFParseError
from pdf_questions.models.processing import ExtractionResult

logger = logging.getLogger(__name__)

# PyMuPDF block type for text (1 is image)
TEXT_BLOCK_TYPE = 0

PAGE_BREAK = "\n\n"


def _open_pdf(pdf_bytes: bytes) -> fitz.Document:
    """Open a PDF from memory, mapping parser failures to PDFParseError."""
    try:
        return fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as e:
        raise PDFParseError(f"PDF parsing failed: {e}") from e


def _page_text(page: fitz.Page) -> str:
    """Concatenate the text of every span on a page, one space after each."""
    parts: list[str] = []
    page_dict = page.get_text("dict")

    for block in page_dict.get("blocks", []):
        if block.get("type") != TEXT_BLOCK_TYPE:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text")
                if text:
                    parts.append(text + " ")

    return "".join(parts)


def extract_text_from_pdf(pdf_bytes: bytes) -> ExtractionResult:
    """
    Extract the text and page count from a PDF held in memory.

    Args:
        pdf_bytes: Raw PDF file content

    Returns:
        ExtractionResult with trimmed, non-empty text

    Raises:
        InvalidPDFError: If the buffer is empty
        PDFParseError: If the buffer is not a readable PDF
        NoTextFoundError: If no text could be extracted
    """
    if not pdf_bytes:
        raise InvalidPDFError("Invalid PDF file: empty buffer")

    logger.debug(f"Extracting text from PDF ({len(pdf_bytes)} bytes)")

    doc = _open_pdf(pdf_bytes)
    try:
        if doc.needs_pass:
            raise NoTextFoundError(
                "No text could be extracted from the PDF: document is password-protected"
            )

        page_count = doc.page_count
        try:
            text = "".join(_page_text(page) + PAGE_BREAK for page in doc)
        except Exception as e:
            raise PDFParseError(f"Text extraction failed: {e}") from e
    finally:
        doc.close()

    text = text.strip()
    if not text:
        raise NoTextFoundError(
            "No text could be extracted from the PDF "
            "(it may be scanned or image-only)"
        )

    logger.info(f"Extracted {len(text)} characters from {page_count} pages")
    return ExtractionResult(text=text, page_count=page_count)
