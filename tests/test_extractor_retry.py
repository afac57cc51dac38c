from __future__ import annotations

import pytest

from conftest import REASONING_MODEL, FakeLLMClient, mc_question
from exam_extraction.extractors.base import (
    DiscoveredQuestionStub,
    DocumentProfile,
    ExtractionContext,
    ModuleTag,
    QuestionExtractorConfig,
)
from exam_extraction.extractors.question import MultipleChoiceQuestionExtractor, normalize_answer
from exam_extraction.llm import (
    AIServiceError,
    CreditsExhaustedError,
    MalformedResponseError,
    RateLimitError,
)


@pytest.fixture()
def extractor(fake_client: FakeLLMClient, sleeps: list[float]) -> MultipleChoiceQuestionExtractor:
    return MultipleChoiceQuestionExtractor(QuestionExtractorConfig(), client=fake_client, sleep=sleeps.append)


def _ok(*questions: dict) -> dict:
    return {"questions": list(questions)}


class TestNormalizeAnswer:
    @pytest.mark.parametrize(("raw", "expected"), [("b", "B"), (" D ", "D"), ("", ""), (None, ""), ("E", ""), ("AB", "")])
    def test_letters(self, raw: str | None, expected: str) -> None:
        assert normalize_answer(raw) == expected


class TestExtraction:
    def test_maps_tool_output(self, fake_client: FakeLLMClient, extractor: MultipleChoiceQuestionExtractor) -> None:
        fake_client.script("extract_questions", _ok(
            mc_question("What is 25% of 80?", answer="b", page_number=4, question_number="Q.1"),
            mc_question("Which word is a synonym for 'happy'?", answer=""),
        ))
        questions = extractor.extract("chunk", ExtractionContext())

        assert [q.correct_answer for q in questions] == ["B", ""]
        assert questions[0].page_number == 4
        assert questions[0].question_number == "Q.1"
        assert questions[1].question_number is None

    def test_missing_answer_is_not_fabricated(
        self, fake_client: FakeLLMClient, extractor: MultipleChoiceQuestionExtractor
    ) -> None:
        payload = mc_question("What is 25% of 80?")
        del payload["correct_answer"]
        fake_client.script("extract_questions", _ok(payload))
        assert extractor.extract("chunk")[0].correct_answer == ""

    def test_uses_profile_model_and_prompt_context(
        self, fake_client: FakeLLMClient, extractor: MultipleChoiceQuestionExtractor
    ) -> None:
        fake_client.script("extract_questions", _ok())
        context = ExtractionContext(
            module=ModuleTag.ABSTRACT,
            profile=DocumentProfile(
                recommended_model=REASONING_MODEL,
                has_sections=True,
                has_page_numbers=True,
                special_instructions=["Options are laid out in a grid"],
            ),
            discovery_hints=[DiscoveredQuestionStub(preview="Which shape"), DiscoveredQuestionStub(preview="Odd one")],
            correction_guidance="\n\nLEARNED FROM PREVIOUS CORRECTIONS:\n- Ensure questions start with capital letters",
        )
        extractor.extract("chunk text", context)

        call = fake_client.calls_for("extract_questions")[0]
        system, user = (m["content"] for m in call["messages"])
        assert call["model"] == REASONING_MODEL
        assert "ABSTRACT REASONING FOCUS" in system
        assert "LEARNED FROM PREVIOUS CORRECTIONS" in system
        assert "PRESERVE section/chapter headers" in user
        assert "CAPTURE page numbers" in user
        assert "2 questions were detected in discovery pass" in user
        assert "Special instructions: Options are laid out in a grid" in user
        assert "chunk text" in user

    def test_empty_chunk_makes_no_call(
        self, fake_client: FakeLLMClient, extractor: MultipleChoiceQuestionExtractor
    ) -> None:
        assert extractor.extract("   ") == []
        assert fake_client.calls == []


class TestRetry:
    def test_recovers_after_two_failures(
        self, fake_client: FakeLLMClient, extractor: MultipleChoiceQuestionExtractor, sleeps: list[float]
    ) -> None:
        fake_client.script(
            "extract_questions",
            AIServiceError("AI API error: 500"),
            MalformedResponseError("No extract_questions tool call in AI response"),
            _ok(mc_question("What is 25% of 80?")),
        )
        questions = extractor.extract("chunk")

        assert len(questions) == 1
        assert sleeps == [2.0, 4.0]
        assert len(fake_client.calls_for("extract_questions")) == 3

    def test_gives_up_after_three_attempts(
        self, fake_client: FakeLLMClient, extractor: MultipleChoiceQuestionExtractor, sleeps: list[float]
    ) -> None:
        fake_client.script("extract_questions", AIServiceError("AI API error: 500"))
        with pytest.raises(AIServiceError, match="AI API error: 500"):
            extractor.extract("chunk")

        assert sleeps == [2.0, 4.0]
        assert len(fake_client.calls_for("extract_questions")) == 3

    def test_rate_limit_surfaces_after_retry_cap(
        self, fake_client: FakeLLMClient, extractor: MultipleChoiceQuestionExtractor, sleeps: list[float]
    ) -> None:
        fake_client.script("extract_questions", RateLimitError("RATE_LIMIT", status_code=429))
        with pytest.raises(RateLimitError):
            extractor.extract("chunk")
        assert len(fake_client.calls_for("extract_questions")) == 3

    def test_credits_exhausted_is_not_retried(
        self, fake_client: FakeLLMClient, extractor: MultipleChoiceQuestionExtractor, sleeps: list[float]
    ) -> None:
        fake_client.script("extract_questions", CreditsExhaustedError("CREDITS_EXHAUSTED", status_code=402))
        with pytest.raises(CreditsExhaustedError):
            extractor.extract("chunk")

        assert sleeps == []
        assert len(fake_client.calls_for("extract_questions")) == 1

    def test_backoff_is_capped(self, fake_client: FakeLLMClient, sleeps: list[float]) -> None:
        extractor = MultipleChoiceQuestionExtractor(
            QuestionExtractorConfig(max_attempts=5), client=fake_client, sleep=sleeps.append
        )
        fake_client.script("extract_questions", AIServiceError("AI API error: 500"))
        with pytest.raises(AIServiceError):
            extractor.extract("chunk")
        assert sleeps == [2.0, 4.0, 8.0, 8.0]
