"""
Document database model.

Represents one uploaded exam document and the outcome of its most recent
extraction run.
"""

from typing import Optional, Dict, Any, List, TYPE_CHECKING
from datetime import datetime
import uuid
from sqlalchemy import String, Text, Integer, Boolean, Index, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, uuid_pk, created_at, updated_at
from ..enums import ProcessingStatus

if TYPE_CHECKING:
    from .question import ExtractedQuestionRecord


class Document(Base):
    """
    Uploaded exam document.

    Extraction run metadata (profile, quality metrics, timings) is stored as
    JSON alongside the denormalized quality score and review flag.
    """
    __tablename__ = "documents"

    # Primary key
    id: Mapped[uuid.UUID] = uuid_pk()

    # File information
    filename: Mapped[str] = mapped_column(String(500), nullable=False)
    module: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # Processing state
    processing_status: Mapped[ProcessingStatus] = mapped_column(
        default=ProcessingStatus.PENDING,
        nullable=False,
        index=True
    )
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Extraction outcome
    question_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    quality_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    needs_review: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Note: 'metadata' is reserved by SQLAlchemy
    extraction_metadata: Mapped[Optional[Dict[str, Any]]] = mapped_column("metadata", JSON, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = created_at()
    updated_at: Mapped[datetime] = updated_at()

    # Relationships
    questions: Mapped[List["ExtractedQuestionRecord"]] = relationship(
        "ExtractedQuestionRecord",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="ExtractedQuestionRecord.sequence",
        lazy="select"
    )

    __table_args__ = (
        Index('idx_document_module_status', 'module', 'processing_status'),
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, filename={self.filename}, status={self.processing_status.value})>"
