"""
Question correction database model.

Audit trail of reviewers' edits to extracted questions; recent content
corrections feed learned guidance back into extraction prompts.
"""

from typing import Optional, TYPE_CHECKING
from datetime import datetime
import uuid
from sqlalchemy import String, Text, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, uuid_pk, utcnow
from ..enums import CorrectionType

if TYPE_CHECKING:
    from .question import ExtractedQuestionRecord


class QuestionCorrection(Base):
    __tablename__ = "question_corrections"

    id: Mapped[uuid.UUID] = uuid_pk()

    question_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("extracted_questions.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    field_changed: Mapped[str] = mapped_column(String(50), nullable=False)
    correction_type: Mapped[CorrectionType] = mapped_column(nullable=False, index=True)
    original_value: Mapped[str] = mapped_column(Text, default="", nullable=False)
    corrected_value: Mapped[str] = mapped_column(Text, default="", nullable=False)

    corrected_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    question: Mapped[Optional["ExtractedQuestionRecord"]] = relationship(
        "ExtractedQuestionRecord",
        back_populates="corrections"
    )

    __table_args__ = (
        Index('idx_correction_type_time', 'correction_type', 'corrected_at'),
    )

    def __repr__(self) -> str:
        return f"<QuestionCorrection(id={self.id}, field={self.field_changed}, type={self.correction_type.value})>"
