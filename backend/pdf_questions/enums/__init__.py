"""
Centralized enum definitions for the application.

All enums are organized by domain:
- pipeline.py: Pipeline names and LLM operations
- processing.py: Processing stages and run states

Usage:
    from pdf_questions.enums import PipelineOperation, ProcessingStage
"""

from pdf_questions.enums.pipeline import (
    PipelineName,
    PipelineOperation,
)
from pdf_questions.enums.processing import (
    PipelineState,
    ProcessingStage,
)

__all__ = [
    # Pipeline
    "PipelineName",
    "PipelineOperation",
    # Processing
    "PipelineState",
    "ProcessingStage",
]
