"""
Helper functions for persisting extraction runs and reading review history.
"""

from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import select

from exam_extraction.extractors.base.models import ExtractionResult
from .document import Document
from .correction import QuestionCorrection
from ..enums import CorrectionType, ProcessingStatus
from ..converters import bulk_extracted_questions_to_records


def save_extraction_result(
    session: Session,
    document: Document,
    result: ExtractionResult,
    commit: bool = True
) -> Document:
    """
    Store a successful run's questions and metadata on its document.

    Question rows and document fields are written in one transaction.

    Args:
        session: SQLAlchemy session
        document: Document the run belongs to (may be unsaved)
        result: Pipeline output
        commit: Whether to commit the transaction (default: True)

    Returns:
        The updated document
    """
    session.add(document)
    session.flush()  # Get document ID

    records = bulk_extracted_questions_to_records(result.questions, document_id=document.id)
    session.add_all(records)

    metadata = result.metadata
    document.question_count = len(records)
    document.quality_score = metadata.quality_score
    document.needs_review = metadata.needs_review
    document.extraction_metadata = metadata.to_dict()
    document.processing_status = ProcessingStatus.COMPLETED
    document.error_message = None

    if commit:
        session.commit()

    return document


def get_recent_content_corrections(session: Session, limit: int = 20) -> List[QuestionCorrection]:
    """Most recent content corrections, newest first."""
    stmt = (
        select(QuestionCorrection)
        .where(QuestionCorrection.correction_type == CorrectionType.CONTENT)
        .order_by(QuestionCorrection.corrected_at.desc())
        .limit(limit)
    )
    return list(session.execute(stmt).scalars().all())
