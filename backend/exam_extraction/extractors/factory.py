"""
Factory for creating pipeline stage instances - simple dictionaries, no registry.
"""

from typing import Optional
import logging

from exam_extraction.llm import BaseLLMClient

from .base import (
    DocumentProfiler,
    QuestionDiscoverer,
    QuestionExtractor,
    ProfilerConfig,
    DiscoveryConfig,
    QuestionExtractorConfig,
)

# Direct imports of implementations
from .profile.llm_profiler import LLMDocumentProfiler
from .discovery.fast_discovery import FastQuestionDiscoverer
from .question.multiple_choice import MultipleChoiceQuestionExtractor

logger = logging.getLogger(__name__)


class ExtractorFactory:
    """
    Factory for creating pipeline stages using simple dictionaries.

    Usage:
        factory = ExtractorFactory()
        extractor = factory.create_question_extractor("multiple_choice")
        questions = extractor.extract(chunk_text, context)
    """

    # Strategy mappings - simple dictionaries instead of registry
    _PROFILERS = {
        "llm_profile": LLMDocumentProfiler,
    }

    _DISCOVERERS = {
        "fast_discovery": FastQuestionDiscoverer,
    }

    _QUESTION_EXTRACTORS = {
        "multiple_choice": MultipleChoiceQuestionExtractor,
    }

    def __init__(self, client: Optional[BaseLLMClient] = None):
        # Shared client for every stage; each stage builds its own when None
        self.client = client

    def create_profiler(
        self,
        strategy: str = "llm_profile",
        config: Optional[ProfilerConfig] = None
    ) -> DocumentProfiler:
        """Create a document profiler."""
        if strategy not in self._PROFILERS:
            raise ValueError(
                f"Unknown profiler: {strategy}. "
                f"Available: {list(self._PROFILERS.keys())}"
            )

        profiler_class = self._PROFILERS[strategy]
        config = config or ProfilerConfig()

        logger.debug(f"Creating profiler: {strategy}")
        return profiler_class(config=config, client=self.client)

    def create_discoverer(
        self,
        strategy: str = "fast_discovery",
        config: Optional[DiscoveryConfig] = None
    ) -> QuestionDiscoverer:
        """Create a question discoverer."""
        if strategy not in self._DISCOVERERS:
            raise ValueError(
                f"Unknown discoverer: {strategy}. "
                f"Available: {list(self._DISCOVERERS.keys())}"
            )

        discoverer_class = self._DISCOVERERS[strategy]
        config = config or DiscoveryConfig()

        logger.debug(f"Creating discoverer: {strategy}")
        return discoverer_class(config=config, client=self.client)

    def create_question_extractor(
        self,
        strategy: str = "multiple_choice",
        config: Optional[QuestionExtractorConfig] = None,
        **kwargs
    ) -> QuestionExtractor:
        """Create a question extractor."""
        if strategy not in self._QUESTION_EXTRACTORS:
            raise ValueError(
                f"Unknown question extractor: {strategy}. "
                f"Available: {list(self._QUESTION_EXTRACTORS.keys())}"
            )

        extractor_class = self._QUESTION_EXTRACTORS[strategy]
        config = config or QuestionExtractorConfig()

        logger.debug(f"Creating question extractor: {strategy}")
        return extractor_class(config=config, client=self.client, **kwargs)

    @classmethod
    def list_strategies(cls) -> dict:
        return {
            "profiler": list(cls._PROFILERS.keys()),
            "discoverer": list(cls._DISCOVERERS.keys()),
            "question_extractor": list(cls._QUESTION_EXTRACTORS.keys()),
        }
