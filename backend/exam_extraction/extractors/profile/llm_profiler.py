"""
LLM Document Profiler.

Issues one lightweight analysis call over the head of the document to
classify its structural properties (formatting quality, tables, estimated
question count, answer key location) and selects the extraction model tier.

Profiling failure is never fatal: the call's error is logged and a
permissive default profile is used instead.
"""

import logging
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from exam_extraction.llm import create_llm_client, BaseLLMClient, AIServiceError

from ..base import (
    DocumentProfiler,
    DocumentProfile,
    ExtractionContext,
    ProfilerConfig,
    FormattingQuality,
    QuestionFormat,
    AnswerKeyLocation
)

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS FOR LLM STRUCTURED OUTPUT
# =============================================================================

class DocumentAnalysis(BaseModel):
    """Structural assessment returned by the document_analysis tool."""
    model_config = ConfigDict(populate_by_name=True)

    formatting_quality: FormattingQuality = Field(..., alias="formattingQuality")
    has_table: bool = Field(..., alias="hasTable")
    has_diagrams: bool = Field(False, alias="hasDiagrams")
    estimated_question_count: int = Field(..., ge=0, alias="estimatedQuestionCount")
    question_format: QuestionFormat = Field(QuestionFormat.UNKNOWN, alias="questionFormat")
    answer_key_location: AnswerKeyLocation = Field(AnswerKeyLocation.MISSING, alias="answerKeyLocation")
    has_page_numbers: bool = Field(False, alias="hasPageNumbers")
    has_sections: bool = Field(False, alias="hasSections")
    special_instructions: List[str] = Field(default_factory=list, alias="specialInstructions")


# =============================================================================
# LLM PROMPTS
# =============================================================================

ANALYSIS_SYSTEM_PROMPT = "You are a document analysis expert. Provide brief, accurate assessments."

ANALYSIS_PROMPT = """Analyze this document excerpt and provide a structural assessment.

ANALYSIS TASKS:
1. Formatting quality (good/poor/terrible)
2. Presence of tables or diagrams
3. Estimated total question count
4. Question numbering format
5. Answer key location
6. Page number presence
7. Section headers presence

TEXT SAMPLE (first {sample_size} chars):
{sample}

Provide a concise structural analysis."""


def select_model(profile: DocumentProfile, config: ProfilerConfig) -> str:
    """
    Pick the extraction model tier from a document profile.

    Terrible formatting or tables need the strongest reasoning model; very
    large documents use the balanced tier; everything else uses the default
    quality model.
    """
    if profile.formatting_quality == FormattingQuality.TERRIBLE or profile.has_table:
        return config.llm_reasoning_model
    if profile.estimated_question_count > config.large_document_question_count:
        return config.llm_balanced_model
    return config.llm_model


# =============================================================================
# LLM DOCUMENT PROFILER
# =============================================================================

class LLMDocumentProfiler(DocumentProfiler):
    """
    Single-call document profiling.

    Only the first `sample_size` characters are sent, for cost efficiency.
    """

    def __init__(
        self,
        config: Optional[ProfilerConfig] = None,
        client: Optional[BaseLLMClient] = None
    ):
        """Initialize the profiler."""
        self.config = config or ProfilerConfig()

        if client is None:
            if not self.config.validate():
                logger.warning("LLM configuration incomplete. Profiling may fail.")
            client = create_llm_client(self.config)
        self.client = client

    @property
    def strategy_name(self) -> str:
        """Return the name of this strategy."""
        return "llm_profile"

    def extract(
        self,
        document_text: str,
        context: Optional[ExtractionContext] = None
    ) -> DocumentProfile:
        """
        Profile the document, falling back to defaults on AI failure.

        Args:
            document_text: The normalized document text
            context: Unused by this strategy

        Returns:
            DocumentProfile with recommended_model set
        """
        try:
            profile = self._analyze(document_text)
        except AIServiceError as e:
            logger.warning(f"Document analysis failed, using defaults: {e}")
            return DocumentProfile.default(recommended_model=self.config.llm_model)

        profile.recommended_model = select_model(profile, self.config)
        logger.info(
            f"Document analysis: formatting={profile.formatting_quality.value}, "
            f"table={profile.has_table}, estimated_questions={profile.estimated_question_count}, "
            f"model={profile.recommended_model}"
        )
        return profile

    def _analyze(self, document_text: str) -> DocumentProfile:
        """Run the analysis call. Raises AIServiceError on any failure."""
        sample = document_text[:self.config.sample_size]

        analysis = self.client.chat_completions_tool_call(
            model=self.config.llm_analysis_model,
            messages=[
                {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": ANALYSIS_PROMPT.format(
                        sample_size=self.config.sample_size,
                        sample=sample
                    )
                }
            ],
            tool_model=DocumentAnalysis,
            tool_name="document_analysis",
            tool_description="Analyze document structure and formatting",
            temperature=self.config.temperature,
        )

        return DocumentProfile(
            formatting_quality=analysis.formatting_quality,
            has_table=analysis.has_table,
            has_diagrams=analysis.has_diagrams,
            estimated_question_count=analysis.estimated_question_count,
            question_format=analysis.question_format,
            answer_key_location=analysis.answer_key_location,
            has_page_numbers=analysis.has_page_numbers,
            has_sections=analysis.has_sections,
            special_instructions=list(analysis.special_instructions),
        )
