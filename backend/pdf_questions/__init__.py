"""
PDF Questions

Downloads a PDF, summarizes its text with a large-context model, and
generates a bounded list of study questions from the summary.

Usage:
    from pdf_questions.services.processing import generate_questions_from_pdf_url

    result = await generate_questions_from_pdf_url("https://example.com/paper.pdf")
    if result.success:
        for question in result.questions:
            print(question)
"""

__version__ = "0.1.0"
