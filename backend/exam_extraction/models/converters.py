"""
Converters between extraction models and database models.

This module provides functions to convert between:
1. Extraction models (ExtractedQuestion) -> DB models (ExtractedQuestionRecord)
2. DB corrections -> the plain records used to build correction guidance

This keeps the extraction layer (business logic) separate from the
persistence layer (database).
"""

from typing import Optional, List, Sequence
import uuid

from exam_extraction.extractors.base.models import ExtractedQuestion
from exam_extraction.extractors.question.corrections import ContentCorrection
from .db.question import ExtractedQuestionRecord
from .db.correction import QuestionCorrection
from .enums import QuestionStatus


# =============================================================================
# REVIEW STATUS POLICY
# =============================================================================

def review_status_for(question: ExtractedQuestion) -> QuestionStatus:
    """
    Initial review status for a newly extracted question.

    Complete questions with a valid answer letter are auto-approved;
    everything else waits for a reviewer.
    """
    if question.validation and question.validation.is_complete and question.correct_answer:
        return QuestionStatus.APPROVED
    return QuestionStatus.PENDING


# =============================================================================
# EXTRACTION -> DATABASE CONVERSIONS
# =============================================================================

def extracted_question_to_record(
    question: ExtractedQuestion,
    document_id: Optional[uuid.UUID] = None,
    sequence: Optional[int] = None
) -> ExtractedQuestionRecord:
    """
    Convert ExtractedQuestion to its database model.

    Args:
        question: Scored question from the pipeline
        document_id: Optional document ID to link to
        sequence: Position of the question within the document

    Returns:
        ExtractedQuestionRecord (unsaved, needs to be added to session)
    """
    return ExtractedQuestionRecord(
        document_id=document_id,
        module=question.module.value,
        question=question.question,
        option_a=question.option_a or "",
        option_b=question.option_b or "",
        option_c=question.option_c or "",
        option_d=question.option_d or "",
        correct_answer=question.correct_answer or "",
        status=review_status_for(question),
        document_section=question.document_section,
        page_number=question.page_number,
        question_number=question.question_number,
        preceding_context=question.preceding_context,
        sequence=sequence,
        overall_quality=question.quality.overall_quality if question.quality else None,
        quality=question.quality.to_dict() if question.quality else None,
        validation=question.validation.to_dict() if question.validation else None,
    )


def bulk_extracted_questions_to_records(
    questions: Sequence[ExtractedQuestion],
    document_id: Optional[uuid.UUID] = None
) -> List[ExtractedQuestionRecord]:
    """Convert scored questions to records, numbering them in order."""
    return [
        extracted_question_to_record(q, document_id=document_id, sequence=i)
        for i, q in enumerate(questions, start=1)
    ]


# =============================================================================
# DATABASE -> EXTRACTION CONVERSIONS
# =============================================================================

def correction_to_content(correction: QuestionCorrection) -> ContentCorrection:
    return ContentCorrection(
        original_value=correction.original_value or "",
        corrected_value=correction.corrected_value or "",
        field_changed=correction.field_changed
    )
