"""
Fast Question Discovery.

A cheap preliminary pass that asks the analysis model for approximate
question boundaries only (no full extraction). The stubs seed the prompt of
the refined extraction pass for the first chunk. This stage is an
optimization: on failure it yields no hints and the pipeline carries on.
"""

import logging
from typing import List, Optional
from pydantic import BaseModel, Field
from exam_extraction.llm import create_llm_client, BaseLLMClient, AIServiceError

from ..base import (
    QuestionDiscoverer,
    DiscoveredQuestionStub,
    ExtractionContext,
    DiscoveryConfig,
    ModuleTag
)

logger = logging.getLogger(__name__)


class DiscoveredQuestionModel(BaseModel):
    question_number: Optional[str] = Field(None, description="Question number/identifier")
    page_number: Optional[int] = Field(None, description="Page number if visible")
    section: Optional[str] = Field(None, description="Section name if visible")
    preview: str = Field(..., description="First 50 characters of the question text")
    needs_refinement: bool = Field(False, description="Whether the question appears incomplete")


class DiscoveryResult(BaseModel):
    questions: List[DiscoveredQuestionModel] = Field(default_factory=list)


DISCOVERY_SYSTEM_PROMPT = "You are a question detector. Identify question boundaries quickly."

DISCOVERY_PROMPT = """Quickly identify ALL question boundaries in this {module} text.

For each question found, extract:
- Approximate location (page/section if visible)
- Question number/identifier
- Question text (first 50 chars)
- Whether it appears complete or needs refinement

TEXT:
{text}

Find ALL questions, even if formatting is poor."""


class FastQuestionDiscoverer(QuestionDiscoverer):
    """Single fast-tier call enumerating approximate question boundaries."""

    def __init__(
        self,
        config: Optional[DiscoveryConfig] = None,
        client: Optional[BaseLLMClient] = None
    ):
        self.config = config or DiscoveryConfig()

        if client is None:
            if not self.config.validate():
                logger.warning("LLM configuration incomplete. Discovery may fail.")
            client = create_llm_client(self.config)
        self.client = client

    @property
    def strategy_name(self) -> str:
        return "fast_discovery"

    def extract(
        self,
        document_text: str,
        context: Optional[ExtractionContext] = None
    ) -> List[DiscoveredQuestionStub]:
        """
        Discover question boundaries in one chunk.

        Returns an empty list when disabled or when the call fails.
        """
        if not self.config.enabled or not document_text.strip():
            return []

        module = context.module if context else ModuleTag.NUMERICAL

        try:
            result = self.client.chat_completions_tool_call(
                model=self.config.llm_analysis_model,
                messages=[
                    {"role": "system", "content": DISCOVERY_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": DISCOVERY_PROMPT.format(module=module.value, text=document_text)
                    }
                ],
                tool_model=DiscoveryResult,
                tool_name="discover_questions",
                tool_description="Identify question boundaries",
                temperature=self.config.temperature,
            )
        except AIServiceError as e:
            logger.warning(f"Discovery pass failed, skipping to direct extraction: {e}")
            return []

        stubs = [
            DiscoveredQuestionStub(
                preview=q.preview,
                question_number=q.question_number,
                page_number=q.page_number,
                section=q.section,
                needs_refinement=q.needs_refinement
            )
            for q in result.questions
        ]

        logger.info(f"Discovery pass found {len(stubs)} questions")
        return stubs
