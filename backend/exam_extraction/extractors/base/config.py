"""
Configuration classes for the extraction pipeline.

This module defines configuration dataclasses that allow customization
of extractor behavior without modifying code.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("true", "1", "yes")


@dataclass
class ExtractorConfig:
    """
    Base configuration for all extractors.

    Contains common settings shared across all pipeline stages,
    particularly LLM connection details and model tiers.
    """
    # LLM Provider Selection
    llm_provider: Optional[str] = None  # "azure" or "openai"

    # LLM Configuration (provider-agnostic)
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None  # Default quality tier (deployment name on Azure)

    # OpenAI-compatible gateways
    llm_base_url: Optional[str] = None

    # Azure-specific
    llm_endpoint: Optional[str] = None
    llm_api_version: str = "2024-08-01-preview"

    # Model tiers selected from the document profile
    llm_reasoning_model: Optional[str] = None  # terrible formatting / tables
    llm_balanced_model: Optional[str] = None   # very large documents
    llm_analysis_model: Optional[str] = None   # profiling, discovery, semantic checks

    # Generation Parameters
    temperature: float = 0.0  # Deterministic by default
    max_tokens: Optional[int] = None

    # Logging
    verbose: bool = False

    def __post_init__(self):
        """Load from environment based on provider."""
        if self.llm_provider is None:
            self.llm_provider = os.getenv("LLM_PROVIDER", "openai").lower()
        else:
            self.llm_provider = self.llm_provider.lower()

        if self.llm_provider == "azure":
            if self.llm_endpoint is None:
                self.llm_endpoint = os.getenv("OPENAI_ENDPOINT")
            if self.llm_api_key is None:
                self.llm_api_key = os.getenv("OPENAI_KEY")
            if self.llm_model is None:
                self.llm_model = os.getenv("OPENAI_DEPLOYMENT")

        elif self.llm_provider == "openai":
            if self.llm_api_key is None:
                self.llm_api_key = os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY")
            if self.llm_base_url is None:
                self.llm_base_url = os.getenv("LLM_BASE_URL")
            if self.llm_model is None:
                self.llm_model = os.getenv("LLM_MODEL", "google/gemini-2.5-flash")

        # Tiers fall back to the default model when not configured
        if self.llm_reasoning_model is None:
            self.llm_reasoning_model = os.getenv("LLM_REASONING_MODEL", "google/gemini-2.5-pro")
        if self.llm_balanced_model is None:
            self.llm_balanced_model = os.getenv("LLM_BALANCED_MODEL") or self.llm_model
        if self.llm_analysis_model is None:
            self.llm_analysis_model = os.getenv("LLM_ANALYSIS_MODEL", "google/gemini-2.5-flash-lite")

    def validate(self) -> bool:
        """Validate that required configuration is present based on provider."""
        if self.llm_provider == "azure":
            return all([self.llm_endpoint, self.llm_api_key, self.llm_model])
        elif self.llm_provider == "openai":
            return all([self.llm_api_key, self.llm_model])
        return False


@dataclass
class ProfilerConfig(ExtractorConfig):
    """
    Configuration for the document profiler.

    Only the head of the document is sent for analysis.
    """
    sample_size: int = 3000  # Characters sent to the analysis call

    # Model selection rule
    large_document_question_count: int = 100


@dataclass
class DiscoveryConfig(ExtractorConfig):
    """Configuration for the fast discovery pass."""
    enabled: bool = True


@dataclass
class QuestionExtractorConfig(ExtractorConfig):
    """
    Configuration for multiple-choice question extraction.

    Extends base config with chunking, retry and deduplication settings.
    """
    # Chunking Parameters (words, not characters)
    chunk_size: int = 2500
    overlap: int = 200

    # Retry / backoff: 2s, 4s, 8s between attempts
    max_attempts: int = 3
    backoff_multiplier: float = 2.0
    backoff_max: float = 8.0

    # Parallel chunk extraction (1 = sequential)
    max_workers: int = 1

    # Deduplication
    similarity_threshold: float = 0.85  # Strict ">" comparison

    # Semantic deduplication of borderline pairs
    semantic_deduplication: bool = False
    semantic_lower_bound: float = 0.70
    semantic_max_pairs: int = 10

    @classmethod
    def from_env(cls) -> "QuestionExtractorConfig":
        """Create extractor config with tuning values from environment variables."""
        return cls(
            chunk_size=_env_int("CHUNK_SIZE", 2500),
            overlap=_env_int("CHUNK_OVERLAP", 200),
            max_attempts=_env_int("EXTRACTION_MAX_ATTEMPTS", 3),
            max_workers=_env_int("EXTRACTION_MAX_WORKERS", 1),
            similarity_threshold=_env_float("SIMILARITY_THRESHOLD", 0.85),
            semantic_deduplication=_env_bool("ENABLE_SEMANTIC_DEDUP", False),
            # LLM config auto-loaded from base ExtractorConfig
        )


@dataclass
class QualityConfig:
    """
    Weights and thresholds for question and document quality scoring.

    Defaults are empirically chosen; they gate whether a run is auto-approved
    or routed to manual review.
    """
    # Per-question weights
    clarity_weight: float = 0.35
    option_weight: float = 0.30
    answer_weight: float = 0.25
    formatting_weight: float = 0.10

    min_question_length: int = 10
    max_option_length: int = 200

    # Per-question review gates
    review_overall_threshold: float = 0.75
    review_answer_threshold: float = 0.9

    # Review reason thresholds
    clarity_reason_threshold: float = 0.7
    option_reason_threshold: float = 0.7
    answer_reason_threshold: float = 1.0
    formatting_reason_threshold: float = 0.5

    # Document-level score
    high_quality_threshold: float = 0.85
    minimum_questions: int = 5

    # Document-level review gates
    review_score_threshold: int = 70
    review_average_threshold: float = 0.70
    max_incomplete_rate: float = 0.3
    min_total_questions: int = 3


@dataclass
class PipelineConfig:
    """
    Complete configuration for one extraction pipeline.

    Groups the per-stage configs so a single object can be passed around.
    """
    profiler: ProfilerConfig = field(default_factory=ProfilerConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    extraction: QuestionExtractorConfig = field(default_factory=QuestionExtractorConfig)
    quality: QualityConfig = field(default_factory=QualityConfig)

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        return cls(
            discovery=DiscoveryConfig(enabled=_env_bool("ENABLE_DISCOVERY", True)),
            extraction=QuestionExtractorConfig.from_env(),
        )
