"""
Pipeline-related enums.

Defines enums for pipeline identification and LLM operations.
"""

from enum import Enum


class PipelineName(str, Enum):
    """
    Pipeline names for usage attribution.

    Recorded on every LLMUsage produced while running the pipeline.
    """

    PDF_QUESTIONS = "PDF_QUESTIONS"


class PipelineOperation(str, Enum):
    """
    Operation types for LLM calls.

    Used for both:
    1. Model selection: LLMClient maps each operation to its configured model
    2. Usage tracking: operations are recorded on LLMUsage for cost analysis
    """

    SUMMARIZATION = "SUMMARIZATION"
    QUESTION_GENERATION = "QUESTION_GENERATION"
