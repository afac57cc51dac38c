import re
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

_PAGE_NUMBER = re.compile(r"^\s*(?:p(?:age)?\.?\s*)?(\d+)\s*$", re.IGNORECASE)


# =============================================================================
# PYDANTIC MODELS FOR QUESTION EXTRACTION LLM
# =============================================================================

class PydanticMCQuestion(BaseModel):
    """
    Pydantic model for multiple-choice question extraction.

    Null text fields become "" and an unreadable page number becomes None.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    question: str = Field(..., description="The question text")
    option_a: str = Field(..., description="Option A text")
    option_b: str = Field(..., description="Option B text")
    option_c: str = Field(..., description="Option C text")
    option_d: str = Field(..., description="Option D text")
    correct_answer: Optional[str] = Field(
        None,
        description="The correct answer letter (A, B, C, or D) - can be empty if not found"
    )
    document_section: Optional[str] = Field(None, description="Section or chapter name if visible")
    page_number: Optional[int] = Field(None, description="Page number if visible")
    question_number: Optional[str] = Field(
        None,
        description='Original question numbering (e.g., "Q.15", "15a")'
    )
    preceding_context: Optional[str] = Field(
        None,
        description="Instructions or context before the question"
    )

    @field_validator(
        "question", "option_a", "option_b", "option_c", "option_d", "correct_answer",
        mode="before"
    )
    @classmethod
    def _null_text_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("page_number", mode="before")
    @classmethod
    def _parse_page_number(cls, value: Any) -> Optional[int]:
        # "3", "p. 3" and "Page 3" are read; roman numerals and other text are dropped
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        match = _PAGE_NUMBER.match(str(value))
        return int(match.group(1)) if match else None


class QuestionExtractionResult(BaseModel):
    """Container for extraction results."""
    questions: List[PydanticMCQuestion]


class SemanticMatch(BaseModel):
    """Verdict on whether two differently worded questions test the same thing."""
    is_duplicate: bool = Field(..., description="True if both questions test the same concept")
