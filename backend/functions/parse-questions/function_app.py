# backend/functions/parse-questions/function_app.py
"""
Azure Function entry point for HTTP-triggered question extraction.
Core logic lives in exam_extraction.core for reusability.
"""

import azure.functions as func
import json
import logging

from exam_extraction.config import config
from exam_extraction.core import QuestionExtractionPipeline, DocumentProcessor, handle_parse_request
from exam_extraction.extractors.base import PipelineConfig
from exam_extraction.models.db import create_db_engine, get_session_maker

logging.getLogger().setLevel(config.log_level)

app = func.FunctionApp()

# Database Connection Setup (skipped in dry-run mode)
engine = None if config.dry_run else create_db_engine(config.database_url)
SessionLocal = get_session_maker(engine) if engine is not None else None

pipeline = QuestionExtractionPipeline(PipelineConfig.from_env())


def _json_response(status: int, body: dict) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body),
        status_code=status,
        mimetype="application/json"
    )


@app.function_name(name="ParseQuestions")
@app.route(route="parse-questions", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def main(req: func.HttpRequest) -> func.HttpResponse:
    """
    Extract multiple-choice questions from posted exam text.

    Body: {"text": "...", "module": "numerical", "documentId": "<uuid>"}
    Without a database (dry run) the result is returned but not stored.
    """
    try:
        payload = req.get_json()
    except ValueError:
        return _json_response(400, {"error": "Request body must be valid JSON"})

    if engine is None:
        status, body = handle_parse_request(payload, pipeline)
        return _json_response(status, body)

    session = SessionLocal()
    try:
        processor = DocumentProcessor(session, pipeline=pipeline, correction_limit=config.correction_history_limit)
        status, body = handle_parse_request(payload, pipeline, processor=processor)
        if status == 200:
            logging.info(f"Extracted {body['metadata']['totalExtracted']} questions")
        else:
            logging.warning(f"Extraction failed with status {status}: {body.get('error')}")
        return _json_response(status, body)
    except Exception as e:
        session.rollback()
        logging.error(f"Error in parse-questions: {str(e)}", exc_info=True)
        return _json_response(500, {"error": str(e)})
    finally:
        session.close()
