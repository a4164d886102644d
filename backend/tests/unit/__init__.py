"""
Unit Tests

Unit tests run in isolation without external dependencies.
The completion service and HTTP downloads are mocked; PDFs are built in memory.
"""
