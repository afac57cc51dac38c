"""
HTTP request handling for the parse-questions endpoint.

Framework-agnostic: takes the decoded JSON payload and returns a status code
and JSON-serializable body, so the Azure Function stays a thin adapter.
"""

import logging
import uuid
from typing import Any, Dict, Optional, Tuple

from exam_extraction.llm import AIServiceError, RateLimitError, CreditsExhaustedError
from exam_extraction.extractors.base import ModuleTag
from .pipeline import QuestionExtractionPipeline
from .processor import DocumentProcessor

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, Any]]


def error_response(error: AIServiceError) -> Response:
    """Map a terminal AI error to its HTTP status and body."""
    if isinstance(error, RateLimitError):
        return 429, {"error": error.user_message}
    if isinstance(error, CreditsExhaustedError):
        return 402, {"error": error.user_message}
    return 500, {
        "error": error.message,
        "processingTimeSeconds": error.elapsed_seconds or 0.0,
    }


def _parse_document_id(value: Any) -> Optional[uuid.UUID]:
    if not value:
        return None
    return uuid.UUID(str(value))


def handle_parse_request(
    payload: Any,
    pipeline: QuestionExtractionPipeline,
    processor: Optional[DocumentProcessor] = None
) -> Response:
    """
    Handle POST /api/parse-questions.

    Payload: {"text": str, "module": str, "documentId": optional str}. When
    a processor is given the run is persisted against the document;
    otherwise the pipeline result is returned without persistence.
    """
    if not isinstance(payload, dict):
        return 400, {"error": "Request body must be a JSON object"}

    text = payload.get("text")
    if not isinstance(text, str) or not text.strip():
        return 400, {"error": "Missing required field: text"}

    try:
        module = ModuleTag.parse(payload.get("module") or "")
        document_id = _parse_document_id(payload.get("documentId"))
    except ValueError as e:
        return 400, {"error": str(e)}

    logger.info(
        f"Starting extraction for module: {module.value}, text length: {len(text)} chars, "
        f"documentId: {document_id or 'N/A'}"
    )

    if processor is not None:
        result = processor.process_document(
            text,
            filename=payload.get("filename") or f"{module.value}-upload.txt",
            module=module.value,
            document_id=document_id
        )
        if isinstance(result.error, AIServiceError):
            return error_response(result.error)
        if not result.success:
            return 500, {"error": result.message}
        body = result.result.to_dict()
        body["documentId"] = str(result.document_id)
        return 200, body

    try:
        extraction = pipeline.run(text, module)
    except AIServiceError as e:
        return error_response(e)

    return 200, extraction.to_dict()
