"""
Ingestion pipelines.

- PDFProcessor: Download a PDF over HTTP and extract its text

Usage:
    from pdf_questions.pipelines import PDFProcessor

    processor = PDFProcessor()
    document = await processor.process_url("https://example.com/paper.pdf")
"""

from pdf_questions.pipelines.pdf_processor import PDFProcessor

__all__ = ["PDFProcessor"]
