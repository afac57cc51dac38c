from __future__ import annotations

import uuid

import pytest
from sqlalchemy.orm import Session

from conftest import QUESTION_TEXTS, FakeLLMClient, analysis, mc_question
from exam_extraction.core import DocumentProcessor, handle_parse_request
from exam_extraction.core.http_handler import error_response
from exam_extraction.llm import AIServiceError, CreditsExhaustedError, RateLimitError


def _script_success(client: FakeLLMClient) -> None:
    client.script("document_analysis", analysis())
    client.script("discover_questions", {"questions": []})
    client.script("extract_questions", {"questions": [mc_question(t) for t in QUESTION_TEXTS[:4]]})


def _script_failure(client: FakeLLMClient, error: AIServiceError) -> None:
    client.script("document_analysis", analysis())
    client.script("discover_questions", {"questions": []})
    client.script("extract_questions", error)


class TestValidation:
    @pytest.mark.parametrize(
        "payload",
        [
            None,
            ["text"],
            {"module": "numerical"},
            {"text": "   ", "module": "numerical"},
            {"text": "1. What?", "module": "history"},
            {"text": "1. What?"},
            {"text": "1. What?", "module": "numerical", "documentId": "not-a-uuid"},
        ],
    )
    def test_bad_request(self, payload, fake_client: FakeLLMClient, make_pipeline) -> None:
        status, body = handle_parse_request(payload, make_pipeline())

        assert status == 400
        assert "error" in body
        assert fake_client.calls == []


class TestWithoutPersistence:
    def test_success(self, fake_client: FakeLLMClient, make_pipeline, clean_document_text: str) -> None:
        _script_success(fake_client)
        status, body = handle_parse_request({"text": clean_document_text, "module": "NUMERICAL"}, make_pipeline())

        assert status == 200
        assert len(body["questions"]) == 4
        assert body["questions"][0]["option_a"] == "Fifteen"
        assert body["metadata"]["qualityScore"] == 98
        assert body["metadata"]["needsReview"] is False
        assert "documentId" not in body

    def test_rate_limited(self, fake_client: FakeLLMClient, make_pipeline) -> None:
        _script_failure(fake_client, RateLimitError("RATE_LIMIT", status_code=429))
        status, body = handle_parse_request({"text": "1. What?", "module": "verbal"}, make_pipeline())

        assert status == 429
        assert body == {"error": "Rate limit exceeded. Please try again in a moment."}

    def test_credits_exhausted(self, fake_client: FakeLLMClient, make_pipeline) -> None:
        _script_failure(fake_client, CreditsExhaustedError("CREDITS_EXHAUSTED", status_code=402))
        status, body = handle_parse_request({"text": "1. What?", "module": "verbal"}, make_pipeline())

        assert status == 402
        assert body == {"error": "AI credits exhausted. Please add credits to your workspace."}

    def test_generic_failure(self, fake_client: FakeLLMClient, make_pipeline) -> None:
        _script_failure(fake_client, AIServiceError("AI API error: 500"))
        status, body = handle_parse_request({"text": "1. What?", "module": "verbal"}, make_pipeline())

        assert status == 500
        assert body == {"error": "AI API error: 500", "processingTimeSeconds": 0.5}


class TestWithPersistence:
    def test_success_includes_document_id(
        self, fake_client: FakeLLMClient, make_pipeline, db_session: Session, clean_document_text: str
    ) -> None:
        _script_success(fake_client)
        pipeline = make_pipeline()
        document_id = uuid.uuid4()

        status, body = handle_parse_request(
            {"text": clean_document_text, "module": "numerical", "documentId": str(document_id)},
            pipeline,
            processor=DocumentProcessor(db_session, pipeline=pipeline),
        )

        assert status == 200
        assert body["documentId"] == str(document_id)
        assert body["metadata"]["totalExtracted"] == 4

    def test_rate_limited(self, fake_client: FakeLLMClient, make_pipeline, db_session: Session) -> None:
        _script_failure(fake_client, RateLimitError("RATE_LIMIT", status_code=429))
        pipeline = make_pipeline()

        status, body = handle_parse_request(
            {"text": "1. What?", "module": "numerical"},
            pipeline,
            processor=DocumentProcessor(db_session, pipeline=pipeline),
        )

        assert status == 429
        assert body["error"].startswith("Rate limit exceeded")


def test_error_response_defaults_elapsed_time() -> None:
    status, body = error_response(AIServiceError("AI API error: 500"))
    assert status == 500
    assert body["processingTimeSeconds"] == 0.0
