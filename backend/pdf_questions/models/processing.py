"""
Processing Data Models (Pydantic)

Immutable value types passed between pipeline stages. Each is constructed
once per pipeline run and discarded at the end of it.

Models:
- ExtractionResult: Text and page count recovered from a PDF
- DownloadedDocument: A fetched PDF with its extraction
- SummaryResult: Output of the download + extract + summarize stages
- PipelineResult: Generated questions and whether generation succeeded

Usage:
    from pdf_questions.models.processing import PipelineResult

    result = PipelineResult(questions=["What is X?"], success=True)
    print(result.question_count)
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pdf_questions.models.llm_usage import LLMUsage


class ExtractionResult(BaseModel):
    """
    Text extracted from a PDF.

    Attributes:
        text: Trimmed text of every page, pages separated by blank lines
        page_count: Number of pages in the document
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Trimmed, non-empty extracted text")
    page_count: int = Field(..., ge=0, description="Number of pages")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("extracted text must not be empty")
        return value

    @property
    def character_count(self) -> int:
        return len(self.text)


class DownloadedDocument(BaseModel):
    """
    A PDF fetched over HTTP and run through text extraction.

    Attributes:
        url: Source URL
        file_size: Size of the downloaded file in bytes
        extraction: Extracted text and page count
    """

    model_config = ConfigDict(frozen=True)

    url: str
    file_size: int = Field(..., ge=0)
    extraction: ExtractionResult


class SummaryResult(BaseModel):
    """
    Result of the download, extraction and summarization stages.

    Attributes:
        summary: Summary text returned by the summarization service
        file_size: Size of the downloaded file in bytes
        page_count: Number of pages in the PDF
        character_count: Number of characters extracted from the PDF
        usages: LLM usage records for the summarization call
    """

    model_config = ConfigDict(frozen=True)

    summary: str
    file_size: int = Field(..., ge=0)
    page_count: int = Field(..., ge=0)
    character_count: int = Field(..., ge=0)
    usages: list[LLMUsage] = Field(default_factory=list)

    @property
    def compression_ratio(self) -> float:
        """Summary length as a fraction of the extracted text length."""
        if not self.character_count:
            return 0.0
        return len(self.summary) / self.character_count


class PipelineResult(BaseModel):
    """
    Questions generated for a document.

    success=False always comes with an empty question list. An empty list
    with success=True is not rejected here.

    Attributes:
        questions: Ordered questions, each ending in "?"
        success: Whether question generation succeeded
        usages: LLM usage records for the calls made during the run
    """

    model_config = ConfigDict(frozen=True)

    questions: list[str] = Field(default_factory=list)
    success: bool
    usages: list[LLMUsage] = Field(default_factory=list)

    @model_validator(mode="after")
    def _failure_has_no_questions(self) -> "PipelineResult":
        if not self.success and self.questions:
            raise ValueError("a failed result cannot carry questions")
        return self

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @classmethod
    def failed(cls, usages: list[LLMUsage] = None) -> "PipelineResult":
        """Build the empty, unsuccessful result."""
        return cls(questions=[], success=False, usages=usages or [])
