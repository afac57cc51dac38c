"""
Shared data models for extraction strategies.

This module defines the common data structures used across the pipeline
stages (profiling, discovery, extraction, scoring), ensuring consistency
between them.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Optional, Dict, Any
from enum import Enum


# =============================================================================
# ENUMERATIONS
# =============================================================================

class ModuleTag(str, Enum):
    """Subject area of an assessment; selects prompt guidance text."""
    NUMERICAL = "numerical"
    VOCABULARY = "vocabulary"
    VERBAL = "verbal"
    ABSTRACT = "abstract"
    QUANTITATIVE = "quantitative"

    @classmethod
    def parse(cls, value: str) -> "ModuleTag":
        """Parse a module tag, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown module: {value}. Available: {allowed}") from None


class FormattingQuality(str, Enum):
    GOOD = "good"
    POOR = "poor"
    TERRIBLE = "terrible"


class QuestionFormat(str, Enum):
    NUMBERED = "numbered"
    BULLETED = "bulleted"
    MIXED = "mixed"
    UNKNOWN = "unknown"


class AnswerKeyLocation(str, Enum):
    INLINE = "inline"
    END_OF_SECTION = "end-of-section"
    SEPARATE = "separate"
    MISSING = "missing"


ANSWER_LETTERS = ("A", "B", "C", "D")


# =============================================================================
# MODULE GUIDELINES
# =============================================================================

_MODULE_GUIDELINES = MappingProxyType({
    ModuleTag.NUMERICAL: """
NUMERICAL REASONING FOCUS:
- Questions involve calculations, data interpretation, numerical patterns
- Look for tables, charts, statistics, percentages, ratios
- Questions may include graphs or data sets
- Common topics: arithmetic, percentages, ratios, data analysis""",

    ModuleTag.VOCABULARY: """
VOCABULARY FOCUS:
- Questions test word meanings, synonyms, antonyms, word usage
- Look for "Which word means...", "Synonym for...", "Opposite of..."
- Questions may include context sentences
- Common topics: definitions, word relationships, contextual usage""",

    ModuleTag.VERBAL: """
VERBAL REASONING FOCUS:
- Questions test reading comprehension, logic, analogies
- Look for passage-based questions, logical sequences, statements
- Questions may include argument analysis, inference
- Common topics: comprehension, critical reasoning, sentence completion""",

    ModuleTag.ABSTRACT: """
ABSTRACT REASONING FOCUS:
- Questions test pattern recognition, spatial reasoning
- Look for sequences, shapes, matrices, visual patterns
- Questions may describe patterns or relationships
- Common topics: pattern completion, odd one out, series""",

    ModuleTag.QUANTITATIVE: """
QUANTITATIVE REASONING FOCUS:
- Questions test mathematical and statistical analysis
- Look for graphs, data interpretation, problem-solving
- Questions may include advanced calculations
- Common topics: statistics, probability, algebra, geometry""",
})


def module_guidelines(module: ModuleTag) -> str:
    """Topic guidance text for a module."""
    return _MODULE_GUIDELINES[ModuleTag(module)]


# =============================================================================
# DATA MODELS
# =============================================================================

@dataclass
class Chunk:
    """An overlapping word window over the normalized document text."""
    text: str
    index: int

    @property
    def word_count(self) -> int:
        return len(self.text.split())


@dataclass
class DocumentProfile:
    """
    Structural assessment of a document, produced once per run.

    Drives model selection and the context hints embedded in the
    extraction prompt.
    """
    formatting_quality: FormattingQuality = FormattingQuality.GOOD
    has_table: bool = False
    has_diagrams: bool = False
    estimated_question_count: int = 50
    question_format: QuestionFormat = QuestionFormat.NUMBERED
    answer_key_location: AnswerKeyLocation = AnswerKeyLocation.INLINE
    recommended_model: str = ""
    has_page_numbers: bool = False
    has_sections: bool = False
    special_instructions: List[str] = field(default_factory=list)

    # True when the analysis call failed and defaults were substituted
    from_fallback: bool = False

    @classmethod
    def default(cls, recommended_model: str) -> "DocumentProfile":
        """Permissive profile used when document analysis fails."""
        return cls(recommended_model=recommended_model, from_fallback=True)

    @property
    def has_context_data(self) -> bool:
        return self.has_sections or self.has_page_numbers


@dataclass
class DiscoveredQuestionStub:
    """Approximate question boundary found by the discovery pass."""
    preview: str
    question_number: Optional[str] = None
    page_number: Optional[int] = None
    section: Optional[str] = None
    needs_refinement: bool = False


@dataclass
class RawExtractedQuestion:
    """
    A multiple-choice question as returned by the extraction call.

    The four option fields are always present (empty when unextractable).
    correct_answer is an uppercase letter A-D or empty, never guessed.
    """
    question: str
    option_a: str = ""
    option_b: str = ""
    option_c: str = ""
    option_d: str = ""
    correct_answer: str = ""
    document_section: Optional[str] = None
    page_number: Optional[int] = None
    question_number: Optional[str] = None
    preceding_context: Optional[str] = None
    chunk_index: int = 0

    @property
    def options(self) -> List[str]:
        return [self.option_a, self.option_b, self.option_c, self.option_d]

    @property
    def has_context(self) -> bool:
        return bool(self.document_section or self.page_number or self.question_number)


@dataclass
class ValidationResult:
    has_question: bool
    has_all_options: bool
    has_answer: bool
    options_distinct: bool

    @property
    def is_complete(self) -> bool:
        return (
            self.has_question
            and self.has_all_options
            and self.has_answer
            and self.options_distinct
        )

    def to_dict(self) -> Dict[str, bool]:
        return {
            "hasQuestion": self.has_question,
            "hasAllOptions": self.has_all_options,
            "hasAnswer": self.has_answer,
            "optionsDistinct": self.options_distinct,
            "isComplete": self.is_complete,
        }


@dataclass
class QualityResult:
    question_clarity: float
    option_quality: float
    answer_certainty: float
    formatting_score: float
    overall_quality: float
    needs_review: bool
    review_reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questionClarity": self.question_clarity,
            "optionQuality": self.option_quality,
            "answerCertainty": self.answer_certainty,
            "formattingScore": self.formatting_score,
            "overallQuality": self.overall_quality,
            "needsReview": self.needs_review,
            "reviewReasons": list(self.review_reasons),
        }


@dataclass
class ExtractedQuestion(RawExtractedQuestion):
    """A scored question, ready to be handed to persistence."""
    module: ModuleTag = ModuleTag.NUMERICAL
    validation: Optional[ValidationResult] = None
    quality: Optional[QualityResult] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "question": self.question,
            "option_a": self.option_a,
            "option_b": self.option_b,
            "option_c": self.option_c,
            "option_d": self.option_d,
            "correct_answer": self.correct_answer,
            "module": self.module.value,
            "document_section": self.document_section,
            "page_number": self.page_number,
            "question_number": self.question_number,
            "preceding_context": self.preceding_context,
        }
        if self.validation:
            data["validation"] = self.validation.to_dict()
        if self.quality:
            data["quality"] = self.quality.to_dict()
        return data


@dataclass
class QualitySummary:
    """Document-level aggregate of per-question quality."""
    total: int
    complete_count: int
    incomplete_count: int
    high_quality_count: int
    average_quality: float
    completion_rate: float
    high_quality_rate: float
    has_minimum_questions: bool
    low_incomplete_rate: bool
    quality_score: int
    needs_review: bool


@dataclass
class ExtractionRunMetadata:
    """Aggregate over one extraction run, persisted with the document."""
    total_extracted: int
    complete_questions: int
    incomplete_questions: int
    processing_time_seconds: float
    chunks_processed: int
    quality_score: int
    needs_review: bool
    profile: DocumentProfile
    discovery_pass_found: int = 0
    questions_with_context: int = 0
    learned_from_corrections: bool = False
    semantic_deduplication_applied: bool = False
    quality: Optional[QualitySummary] = None
    validation_issues: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "totalExtracted": self.total_extracted,
            "completeQuestions": self.complete_questions,
            "incompleteQuestions": self.incomplete_questions,
            "processingTimeSeconds": self.processing_time_seconds,
            "chunksProcessed": self.chunks_processed,
            "qualityScore": self.quality_score,
            "needsReview": self.needs_review,
            "documentProfile": {
                "formattingQuality": self.profile.formatting_quality.value,
                "estimatedQuestionCount": self.profile.estimated_question_count,
                "modelUsed": self.profile.recommended_model,
                "hasContextData": self.profile.has_context_data,
                "usedFallback": self.profile.from_fallback,
            },
            "discoveryPassFound": self.discovery_pass_found,
            "questionsWithContext": self.questions_with_context,
            "learnedFromCorrections": self.learned_from_corrections,
            "semanticDeduplicationApplied": self.semantic_deduplication_applied,
        }
        if self.quality:
            data["qualityMetrics"] = {
                "completionRate": round(self.quality.completion_rate * 100),
                "hasMinimumQuestions": self.quality.has_minimum_questions,
                "lowIncompleteRate": self.quality.low_incomplete_rate,
                "highQualityRate": round(self.quality.high_quality_rate * 100),
                "averageQuality": round(self.quality.average_quality * 100),
                "validationIssues": list(self.validation_issues),
            }
        return data


@dataclass
class ExtractionResult:
    """Output of one pipeline run."""
    questions: List[ExtractedQuestion]
    metadata: ExtractionRunMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questions": [q.to_dict() for q in self.questions],
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class ExtractionContext:
    """
    Context information passed between pipeline stages.

    Lets the extraction call build upon the profile and discovery results.
    """
    module: ModuleTag = ModuleTag.NUMERICAL
    profile: Optional[DocumentProfile] = None
    discovery_hints: List[DiscoveredQuestionStub] = field(default_factory=list)
    correction_guidance: str = ""
