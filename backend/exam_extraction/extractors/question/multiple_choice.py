"""
Multiple-Choice Question Extractor.

Extracts every multiple-choice question from one chunk of text with a single
structured tool call, wrapped in a bounded exponential backoff.

Approach:
1. Build a module-specialised system prompt (with learned correction guidance)
2. Build a user prompt with the chunk and profile/discovery context hints
3. Call the profile's recommended model, forcing the extract_questions tool
4. Normalise answer letters; never invent an answer that is not in the source
"""

import time
import logging
from typing import Callable, List, Optional
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from exam_extraction.llm import (
    create_llm_client,
    BaseLLMClient,
    AIServiceError,
    CreditsExhaustedError
)

from .models import PydanticMCQuestion, QuestionExtractionResult
from .prompts import build_system_prompt, build_user_prompt
from ..base import (
    QuestionExtractor,
    RawExtractedQuestion,
    ExtractionContext,
    QuestionExtractorConfig,
    ModuleTag,
    ANSWER_LETTERS
)

logger = logging.getLogger(__name__)


def normalize_answer(answer: Optional[str]) -> str:
    """Uppercase answer letter, or "" for anything outside A-D."""
    letter = (answer or "").strip().upper()
    return letter if letter in ANSWER_LETTERS else ""


def to_raw_question(q: PydanticMCQuestion) -> RawExtractedQuestion:
    return RawExtractedQuestion(
        question=q.question,
        option_a=q.option_a,
        option_b=q.option_b,
        option_c=q.option_c,
        option_d=q.option_d,
        correct_answer=normalize_answer(q.correct_answer),
        document_section=q.document_section or None,
        page_number=q.page_number,
        question_number=q.question_number or None,
        preceding_context=q.preceding_context or None
    )


# =============================================================================
# MULTIPLE-CHOICE QUESTION EXTRACTOR
# =============================================================================

class MultipleChoiceQuestionExtractor(QuestionExtractor):
    """
    Per-chunk multiple-choice extraction with retry.

    Up to `max_attempts` calls per chunk, waiting 2s, 4s (capped at 8s)
    between attempts. Credits exhaustion is never retried; the final error
    of an exhausted chunk is re-raised unchanged.
    """

    def __init__(
        self,
        config: Optional[QuestionExtractorConfig] = None,
        client: Optional[BaseLLMClient] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the extractor.

        Args:
            config: Extraction config (chunking, retry, model)
            client: LLM client; built from config when omitted
            sleep: Backoff sleep function, injectable for tests
        """
        self.config = config or QuestionExtractorConfig()

        if client is None:
            if not self.config.validate():
                logger.warning("LLM configuration incomplete. Extraction may fail.")
            client = create_llm_client(self.config)
        self.client = client
        self._sleep = sleep

    @property
    def strategy_name(self) -> str:
        """Return the name of this strategy."""
        return "multiple_choice"

    def _retrying(self) -> Retrying:
        # A fresh controller per chunk keeps attempt counters independent
        return Retrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(
                multiplier=self.config.backoff_multiplier,
                max=self.config.backoff_max
            ),
            retry=(
                retry_if_exception_type(AIServiceError)
                & retry_if_not_exception_type(CreditsExhaustedError)
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )

    def extract(
        self,
        document_text: str,
        context: Optional[ExtractionContext] = None
    ) -> List[RawExtractedQuestion]:
        """
        Extract questions from one chunk.

        Args:
            document_text: Chunk text
            context: Module, profile, discovery hints and correction guidance

        Returns:
            List of RawExtractedQuestion objects

        Raises:
            AIServiceError: once retries are exhausted, or immediately for
                CreditsExhaustedError
        """
        if not document_text or not document_text.strip():
            logger.warning("Empty chunk text provided")
            return []

        context = context or ExtractionContext()
        return self._retrying()(self._extract_once, document_text, context)

    def _extract_once(self, text: str, context: ExtractionContext) -> List[RawExtractedQuestion]:
        module = context.module or ModuleTag.NUMERICAL
        profile = context.profile

        model = self.config.llm_model
        if profile and profile.recommended_model:
            model = profile.recommended_model

        result = self.client.chat_completions_tool_call(
            model=model,
            messages=[
                {"role": "system", "content": build_system_prompt(module, context.correction_guidance)},
                {"role": "user", "content": build_user_prompt(text, module, profile, context.discovery_hints)}
            ],
            tool_model=QuestionExtractionResult,
            tool_name="extract_questions",
            tool_description="Extract multiple-choice questions from text",
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )

        questions = [to_raw_question(q) for q in result.questions]
        logger.info(f"Extracted {len(questions)} questions with {model}")
        return questions
