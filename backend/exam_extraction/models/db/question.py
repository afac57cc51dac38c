"""
Extracted question database model.
"""

from typing import Optional, Dict, Any, List, TYPE_CHECKING
from datetime import datetime
import uuid
from sqlalchemy import String, Text, Integer, Float, ForeignKey, Index, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, uuid_pk, created_at, updated_at
from ..enums import QuestionStatus

if TYPE_CHECKING:
    from .document import Document
    from .correction import QuestionCorrection


class ExtractedQuestionRecord(Base):
    """
    A multiple-choice question extracted from a document.

    Status starts as APPROVED or PENDING depending on completeness and is
    afterwards owned by the review workflow.
    """
    __tablename__ = "extracted_questions"

    id: Mapped[uuid.UUID] = uuid_pk()

    document_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    module: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # Question content
    question: Mapped[str] = mapped_column(Text, nullable=False)
    option_a: Mapped[str] = mapped_column(Text, default="", nullable=False)
    option_b: Mapped[str] = mapped_column(Text, default="", nullable=False)
    option_c: Mapped[str] = mapped_column(Text, default="", nullable=False)
    option_d: Mapped[str] = mapped_column(Text, default="", nullable=False)
    correct_answer: Mapped[str] = mapped_column(String(1), default="", nullable=False)

    status: Mapped[QuestionStatus] = mapped_column(
        default=QuestionStatus.PENDING,
        nullable=False,
        index=True
    )

    # Source context
    document_section: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    page_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    question_number: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    preceding_context: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sequence: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Scoring
    overall_quality: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    quality: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    validation: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = created_at()
    updated_at: Mapped[datetime] = updated_at()

    # Relationships
    document: Mapped[Optional["Document"]] = relationship(
        "Document",
        back_populates="questions"
    )
    corrections: Mapped[List["QuestionCorrection"]] = relationship(
        "QuestionCorrection",
        back_populates="question",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_question_document_sequence', 'document_id', 'sequence'),
    )

    def __repr__(self) -> str:
        return f"<ExtractedQuestionRecord(id={self.id}, status={self.status.value}, question={self.question[:40]!r})>"
