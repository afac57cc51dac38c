from __future__ import annotations

from conftest import ANALYSIS_MODEL, FakeLLMClient
from exam_extraction.extractors.base import QuestionExtractorConfig, RawExtractedQuestion
from exam_extraction.extractors.question import SemanticDeduplicator
from exam_extraction.llm import AIServiceError

# Similarity between the first two is exactly 0.8
BORDERLINE = [
    RawExtractedQuestion(question="x" * 20),
    RawExtractedQuestion(question="x" * 16 + "yyyy"),
    RawExtractedQuestion(question="Which word is a synonym for 'happy'?"),
]


class TestSemanticDeduplicator:
    def test_borderline_pairs(self, fake_client: FakeLLMClient) -> None:
        dedup = SemanticDeduplicator(QuestionExtractorConfig(), client=fake_client)
        assert dedup.borderline_pairs(BORDERLINE) == [(0, 1)]

    def test_confirmed_duplicate_drops_later_item(self, fake_client: FakeLLMClient) -> None:
        fake_client.script("semantic_match", {"is_duplicate": True})
        dedup = SemanticDeduplicator(QuestionExtractorConfig(), client=fake_client)

        result = dedup.deduplicate(BORDERLINE)

        assert result == [BORDERLINE[0], BORDERLINE[2]]
        call = fake_client.calls_for("semantic_match")[0]
        assert call["model"] == ANALYSIS_MODEL
        assert "Question 2: xxxxxxxxxxxxxxxxyyyy" in call["messages"][1]["content"]

    def test_rejected_pair_is_kept(self, fake_client: FakeLLMClient) -> None:
        fake_client.script("semantic_match", {"is_duplicate": False})
        dedup = SemanticDeduplicator(QuestionExtractorConfig(), client=fake_client)
        assert dedup.deduplicate(BORDERLINE) == BORDERLINE

    def test_failure_keeps_both(self, fake_client: FakeLLMClient) -> None:
        fake_client.script("semantic_match", AIServiceError("AI API error: 500"))
        dedup = SemanticDeduplicator(QuestionExtractorConfig(), client=fake_client)
        assert dedup.deduplicate(BORDERLINE) == BORDERLINE

    def test_too_many_pairs_skips_check(self, fake_client: FakeLLMClient) -> None:
        dedup = SemanticDeduplicator(QuestionExtractorConfig(semantic_max_pairs=1), client=fake_client)

        assert dedup.deduplicate(BORDERLINE) == BORDERLINE
        assert fake_client.calls == []
