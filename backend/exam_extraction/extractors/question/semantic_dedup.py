"""
Semantic deduplication of borderline question pairs.

After the greedy text-similarity pass, pairs that are close but below the
duplicate threshold may still be the same question reworded. When there are
only a handful of them, each pair is put to the analysis model.
"""

import logging
from typing import List, Optional, Sequence, Tuple
from exam_extraction.llm import create_llm_client, BaseLLMClient, AIServiceError

from .models import SemanticMatch
from ..base import QuestionExtractorConfig, RawExtractedQuestion, text_similarity

logger = logging.getLogger(__name__)


SEMANTIC_SYSTEM_PROMPT = "You are a semantic similarity expert. Answer only whether the two questions are duplicates."

SEMANTIC_PROMPT = """Compare these two questions and determine if they are semantically the same (asking the same thing, just worded differently):

Question 1: {q1.question}
Options: A) {q1.option_a} B) {q1.option_b} C) {q1.option_c} D) {q1.option_d}

Question 2: {q2.question}
Options: A) {q2.option_a} B) {q2.option_b} C) {q2.option_c} D) {q2.option_d}

Are these semantically identical (testing the same concept)?"""


class SemanticDeduplicator:
    """Drops the later item of each borderline pair the model confirms as a duplicate."""

    def __init__(
        self,
        config: Optional[QuestionExtractorConfig] = None,
        client: Optional[BaseLLMClient] = None
    ):
        self.config = config or QuestionExtractorConfig()
        self.client = client or create_llm_client(self.config)

    def borderline_pairs(self, questions: Sequence[RawExtractedQuestion]) -> List[Tuple[int, int]]:
        """Index pairs whose text similarity lies strictly between the two bounds."""
        pairs = []
        for i in range(len(questions)):
            for j in range(i + 1, len(questions)):
                similarity = text_similarity(
                    (questions[i].question or "").lower(),
                    (questions[j].question or "").lower()
                )
                if self.config.semantic_lower_bound < similarity < self.config.similarity_threshold:
                    pairs.append((i, j))
        return pairs

    def deduplicate(self, questions: Sequence[RawExtractedQuestion]) -> List[RawExtractedQuestion]:
        if len(questions) < 2:
            return list(questions)

        pairs = self.borderline_pairs(questions)
        if not pairs:
            return list(questions)
        if len(pairs) >= self.config.semantic_max_pairs:
            logger.info(f"Skipping semantic check: {len(pairs)} borderline pairs")
            return list(questions)

        logger.info(f"Running semantic analysis on {len(pairs)} borderline pairs")

        to_remove = set()
        for i, j in pairs:
            if self._is_duplicate(questions[i], questions[j]):
                to_remove.add(j)

        unique = [q for idx, q in enumerate(questions) if idx not in to_remove]
        logger.info(f"Semantic deduplication: {len(questions)} -> {len(unique)}")
        return unique

    def _is_duplicate(self, q1: RawExtractedQuestion, q2: RawExtractedQuestion) -> bool:
        try:
            match = self.client.chat_completions_tool_call(
                model=self.config.llm_analysis_model,
                messages=[
                    {"role": "system", "content": SEMANTIC_SYSTEM_PROMPT},
                    {"role": "user", "content": SEMANTIC_PROMPT.format(q1=q1, q2=q2)}
                ],
                tool_model=SemanticMatch,
                tool_name="semantic_match",
                tool_description="Decide whether two questions are duplicates",
                temperature=self.config.temperature,
            )
        except AIServiceError as e:
            logger.warning(f"Semantic analysis failed for pair: {e}")
            return False
        return match.is_duplicate
