"""
PDF Questions Test Suite

Test Structure:
    tests/
    ├── conftest.py                      # Shared fixtures and fakes
    └── unit/                            # Unit tests (isolated, no network)
        ├── test_config.py               # Settings loading
        ├── test_llm_client.py           # LLM client (LiteLLM mocked)
        ├── test_models.py               # Pydantic/dataclass models
        ├── test_pdf_processor.py        # Download + extraction (httpx mocked)
        ├── test_pdf_utils.py            # PyMuPDF text extraction
        ├── test_processing_pipeline.py  # Orchestrator
        ├── test_question_parser.py      # Question parsing
        ├── test_questions_stage.py      # Question generation stage
        ├── test_summarization.py        # Summarization stage
        └── test_text_utils.py           # Text helpers

Running Tests:
    # Run all tests
    pytest backend/tests/ -v

    # Run with coverage
    pytest backend/tests/ --cov=pdf_questions --cov-report=html
"""
