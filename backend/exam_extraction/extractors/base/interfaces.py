"""
Base interfaces for pipeline stages.

This module defines the abstract base classes that all extractors must implement,
enabling the Strategy pattern for swappable profiling, discovery and
extraction approaches.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any
from .models import (
    DocumentProfile,
    DiscoveredQuestionStub,
    RawExtractedQuestion,
    ExtractionContext
)


class BaseExtractor(ABC):
    """ Base class for all extractors. """

    @abstractmethod
    def extract(self, document_text: str, context: Optional[ExtractionContext] = None) -> Any:
        """ Extract information from document text. """
        pass

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        pass


class DocumentProfiler(BaseExtractor):
    """ Base class for document profiling strategies. """

    @abstractmethod
    def extract(
        self,
        document_text: str,
        context: Optional[ExtractionContext] = None
    ) -> DocumentProfile:
        """ Assess document structure. Must not raise on AI failure. """
        pass


class QuestionDiscoverer(BaseExtractor):
    """ Base class for question boundary discovery strategies. """

    @abstractmethod
    def extract(
        self,
        document_text: str,
        context: Optional[ExtractionContext] = None
    ) -> List[DiscoveredQuestionStub]:
        """ Find approximate question boundaries. Must not raise on AI failure. """
        pass


class QuestionExtractor(BaseExtractor):
    """ Base class for question extraction strategies. """

    @abstractmethod
    def extract(
        self,
        document_text: str,
        context: Optional[ExtractionContext] = None
    ) -> List[RawExtractedQuestion]:
        """ Extract multiple-choice questions from one chunk of text. """
        pass
