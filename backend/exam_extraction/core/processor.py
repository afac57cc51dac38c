# exam_extraction/core/processor.py
"""
Core document processing logic, independent of the Azure Function.
This can be used both by Azure Functions and local testing scripts.
"""

import logging
import uuid
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exam_extraction.llm import AIServiceError
from exam_extraction.extractors.base import ExtractionResult, ModuleTag
from exam_extraction.extractors.question import build_correction_guidance
from exam_extraction.models.db import Document
from exam_extraction.models.db.relationships import save_extraction_result, get_recent_content_corrections
from exam_extraction.models.converters import correction_to_content
from exam_extraction.models.enums import ProcessingStatus
from .pipeline import QuestionExtractionPipeline

logger = logging.getLogger(__name__)


class ProcessingResult:
    """Result of document processing operation."""

    def __init__(
        self,
        success: bool,
        message: str,
        question_count: int = 0,
        document_id: Optional[uuid.UUID] = None,
        result: Optional[ExtractionResult] = None,
        error: Exception = None,
        error_code: Optional[str] = None
    ):
        self.success = success
        self.message = message
        self.question_count = question_count
        self.document_id = document_id
        self.result = result
        self.error = error
        self.error_code = error_code

    def __str__(self):
        return (
            f"ProcessingResult(success={self.success}, message='{self.message}', "
            f"question_count={self.question_count})"
        )


class DocumentProcessor:
    """
    Core business logic for processing exam documents.
    Orchestrates learned guidance, the extraction pipeline, and persistence.
    """

    def __init__(
        self,
        session: Session,
        pipeline: QuestionExtractionPipeline = None,
        correction_limit: int = 20
    ):
        """
        Initialize the document processor.

        Args:
            session: SQLAlchemy database session
            pipeline: QuestionExtractionPipeline instance (creates new if None)
            correction_limit: How many recent corrections to learn from
        """
        self.session = session
        self.pipeline = pipeline or QuestionExtractionPipeline()
        self.correction_limit = correction_limit

    def load_correction_guidance(self) -> str:
        """Guidance derived from recent content corrections ("" on none or on a read error)."""
        try:
            corrections = get_recent_content_corrections(self.session, limit=self.correction_limit)
        except SQLAlchemyError as e:
            logger.warning(f"Could not load correction history, extracting without it: {e}")
            self.session.rollback()
            return ""
        return build_correction_guidance(correction_to_content(c) for c in corrections)

    def process_document(
        self,
        text: str,
        filename: str,
        module: str,
        document_id: Optional[uuid.UUID] = None
    ) -> ProcessingResult:
        """
        Process one document's text through the full pipeline.

        Args:
            text: Raw document text
            filename: Name of the file being processed
            module: Module tag for the questions
            document_id: Existing document row to update (created if None)

        Returns:
            ProcessingResult with status and details
        """
        module_tag = ModuleTag.parse(module)
        document = self._get_or_create_document(document_id, filename, module_tag)

        try:
            logger.info(f"Processing file: {filename}")
            document.processing_status = ProcessingStatus.IN_PROGRESS
            self.session.commit()

            # Step 1: Learn from reviewer corrections
            guidance = self.load_correction_guidance()
            if guidance:
                logger.info("Applying learned correction patterns to extraction")

            # Step 2: Extraction
            result = self.pipeline.run(text, module_tag, correction_guidance=guidance)

            # Step 3: Save to database
            save_extraction_result(self.session, document, result)

            count = len(result.questions)
            logger.info(f"Successfully committed {count} questions to DB")

            return ProcessingResult(
                success=True,
                message=f"Successfully processed {count} questions",
                question_count=count,
                document_id=document.id,
                result=result
            )

        except AIServiceError as e:
            logger.error(f"AI error processing document {filename}: {e.code}")
            self._mark_failed(document, e.user_message)
            return ProcessingResult(
                success=False,
                message=e.user_message,
                document_id=document.id,
                error=e,
                error_code=e.code
            )

        except Exception as e:
            logger.error(f"Error processing document {filename}: {str(e)}", exc_info=True)
            self._mark_failed(document, str(e))
            return ProcessingResult(
                success=False,
                message=f"Error processing document: {str(e)}",
                document_id=document.id,
                error=e
            )

    def _get_or_create_document(
        self,
        document_id: Optional[uuid.UUID],
        filename: str,
        module: ModuleTag
    ) -> Document:
        document = self.session.get(Document, document_id) if document_id else None
        if document is None:
            document = Document(filename=filename, module=module.value)
            if document_id:
                document.id = document_id
            self.session.add(document)
            self.session.flush()
        return document

    def _mark_failed(self, document: Document, message: str) -> None:
        self.session.rollback()
        document.processing_status = ProcessingStatus.FAILED
        document.error_message = message
        self.session.commit()
