"""
Processing-related enums.

Defines the stages a pipeline run passes through and the stage a failure
is attributed to.
"""

from enum import Enum


class ProcessingStage(str, Enum):
    """Pipeline stages, used to attribute failures."""

    DOWNLOAD = "DOWNLOAD"
    EXTRACTION = "EXTRACTION"
    SUMMARIZATION = "SUMMARIZATION"
    QUESTIONS = "QUESTIONS"


class PipelineState(str, Enum):
    """
    States of a single pipeline run.

    AWAITING_INPUT → EXTRACTING → SUMMARIZING → GENERATING_QUESTIONS → DONE

    EXTRACTING covers both the download and the text extraction.
    """

    AWAITING_INPUT = "AWAITING_INPUT"
    EXTRACTING = "EXTRACTING"
    SUMMARIZING = "SUMMARIZING"
    GENERATING_QUESTIONS = "GENERATING_QUESTIONS"
    DONE = "DONE"
