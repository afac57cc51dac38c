from __future__ import annotations

from conftest import ANALYSIS_MODEL, FakeLLMClient
from exam_extraction.extractors.base import DiscoveryConfig, ExtractionContext, ModuleTag
from exam_extraction.extractors.discovery import FastQuestionDiscoverer
from exam_extraction.llm import AIServiceError


class TestFastQuestionDiscoverer:
    def test_returns_stubs(self, fake_client: FakeLLMClient) -> None:
        fake_client.script("discover_questions", {"questions": [
            {"question_number": "1", "page_number": 3, "preview": "What is 25% of 80?"},
            {"question_number": "2", "preview": "Which word is a synonym", "needs_refinement": True},
        ]})
        discoverer = FastQuestionDiscoverer(DiscoveryConfig(), client=fake_client)
        stubs = discoverer.extract("chunk text", ExtractionContext(module=ModuleTag.VOCABULARY))

        assert [s.question_number for s in stubs] == ["1", "2"]
        assert stubs[0].page_number == 3
        assert stubs[1].needs_refinement

        call = fake_client.calls_for("discover_questions")[0]
        assert call["model"] == ANALYSIS_MODEL
        assert "vocabulary" in call["messages"][1]["content"]

    def test_failure_yields_no_hints(self, fake_client: FakeLLMClient) -> None:
        fake_client.script("discover_questions", AIServiceError("AI API error: 502"))
        discoverer = FastQuestionDiscoverer(DiscoveryConfig(), client=fake_client)
        assert discoverer.extract("chunk text") == []

    def test_disabled_makes_no_call(self, fake_client: FakeLLMClient) -> None:
        discoverer = FastQuestionDiscoverer(DiscoveryConfig(enabled=False), client=fake_client)
        assert discoverer.extract("chunk text") == []
        assert fake_client.calls == []
