"""
Base module for pipeline stages.

Exports core interfaces, models, and utilities used by all extractors.
"""

from .interfaces import (
    BaseExtractor,
    DocumentProfiler,
    QuestionDiscoverer,
    QuestionExtractor
)

from .models import (
    ModuleTag,
    FormattingQuality,
    QuestionFormat,
    AnswerKeyLocation,
    ANSWER_LETTERS,
    module_guidelines,
    Chunk,
    DocumentProfile,
    DiscoveredQuestionStub,
    RawExtractedQuestion,
    ValidationResult,
    QualityResult,
    ExtractedQuestion,
    QualitySummary,
    ExtractionRunMetadata,
    ExtractionResult,
    ExtractionContext
)

from .config import (
    ExtractorConfig,
    ProfilerConfig,
    DiscoveryConfig,
    QuestionExtractorConfig,
    QualityConfig,
    PipelineConfig
)

from .utils import (
    normalize_text,
    chunk_words,
    levenshtein_distance,
    text_similarity,
    deduplicate_questions,
    log_extraction_stats
)

__all__ = [
    # Interfaces
    "BaseExtractor",
    "DocumentProfiler",
    "QuestionDiscoverer",
    "QuestionExtractor",
    # Models - Enums
    "ModuleTag",
    "FormattingQuality",
    "QuestionFormat",
    "AnswerKeyLocation",
    "ANSWER_LETTERS",
    "module_guidelines",
    # Models - Data Classes
    "Chunk",
    "DocumentProfile",
    "DiscoveredQuestionStub",
    "RawExtractedQuestion",
    "ValidationResult",
    "QualityResult",
    "ExtractedQuestion",
    "QualitySummary",
    "ExtractionRunMetadata",
    "ExtractionResult",
    "ExtractionContext",
    # Config
    "ExtractorConfig",
    "ProfilerConfig",
    "DiscoveryConfig",
    "QuestionExtractorConfig",
    "QualityConfig",
    "PipelineConfig",
    # Utils
    "normalize_text",
    "chunk_words",
    "levenshtein_distance",
    "text_similarity",
    "deduplicate_questions",
    "log_extraction_stats",
]
