"""
Pipeline stages for exam question extraction.

This package provides a strategy-based architecture for turning raw exam
text into scored multiple-choice questions. It supports these stage types:

- DocumentProfiler: Assesses formatting and picks the extraction model
- QuestionDiscoverer: Finds approximate question boundaries
- QuestionExtractor: Extracts full questions, options and answers

Usage:
    from exam_extraction.extractors import ExtractorFactory

    factory = ExtractorFactory()
    extractor = factory.create_question_extractor("multiple_choice")
    questions = extractor.extract(chunk_text, context)
"""

# Export public API
from .base import (
    # Interfaces
    BaseExtractor,
    DocumentProfiler,
    QuestionDiscoverer,
    QuestionExtractor,
    # Models - Enums
    ModuleTag,
    FormattingQuality,
    QuestionFormat,
    AnswerKeyLocation,
    # Models - Data Classes
    Chunk,
    DocumentProfile,
    DiscoveredQuestionStub,
    RawExtractedQuestion,
    ExtractedQuestion,
    ExtractionResult,
    ExtractionRunMetadata,
    ExtractionContext,
    # Config
    ExtractorConfig,
    ProfilerConfig,
    DiscoveryConfig,
    QuestionExtractorConfig,
    QualityConfig,
    PipelineConfig,
)

from .factory import ExtractorFactory
from .quality import QualityScorer
from .question import SemanticDeduplicator, build_correction_guidance

__all__ = [
    # Main API
    "ExtractorFactory",
    "QualityScorer",
    "SemanticDeduplicator",
    "build_correction_guidance",
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
    # Models - Data Classes
    "Chunk",
    "DocumentProfile",
    "DiscoveredQuestionStub",
    "RawExtractedQuestion",
    "ExtractedQuestion",
    "ExtractionResult",
    "ExtractionRunMetadata",
    "ExtractionContext",
    # Config
    "ExtractorConfig",
    "ProfilerConfig",
    "DiscoveryConfig",
    "QuestionExtractorConfig",
    "QualityConfig",
    "PipelineConfig",
]
