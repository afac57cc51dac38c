"""
Question extraction pipeline.

Drives one run: Normalize -> Profile -> Chunk -> Discover (first chunk) ->
Extract each chunk -> Deduplicate -> Score -> aggregate metadata.

Nothing is persisted here. An AI error escaping a chunk after its retries
aborts the whole run; the error is re-raised with the elapsed time attached.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Union

from exam_extraction.llm import BaseLLMClient, AIServiceError
from exam_extraction.extractors import ExtractorFactory
from exam_extraction.extractors.quality import QualityScorer
from exam_extraction.extractors.question import SemanticDeduplicator
from exam_extraction.extractors.base import (
    PipelineConfig,
    ModuleTag,
    Chunk,
    DocumentProfile,
    DiscoveredQuestionStub,
    RawExtractedQuestion,
    ExtractedQuestion,
    ExtractionContext,
    ExtractionResult,
    ExtractionRunMetadata,
    normalize_text,
    chunk_words,
    deduplicate_questions,
    log_extraction_stats
)

logger = logging.getLogger(__name__)


def validation_issues(questions: List[ExtractedQuestion]) -> List[dict]:
    """Describe what is missing from each incomplete question."""
    issues = []
    for q in questions:
        if q.validation is None or q.validation.is_complete:
            continue
        issues.append({
            "question": (q.question or "")[:50] + "...",
            "issues": {
                "missingQuestion": not q.validation.has_question,
                "missingOptions": not q.validation.has_all_options,
                "missingAnswer": not q.validation.has_answer,
                "duplicateOptions": not q.validation.options_distinct,
            }
        })
    return issues


class QuestionExtractionPipeline:
    """
    Multi-pass extraction of multiple-choice questions from raw exam text.

    Usage:
        pipeline = QuestionExtractionPipeline(PipelineConfig.from_env())
        result = pipeline.run(text, "numerical")
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        client: Optional[BaseLLMClient] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize the pipeline stages.

        Args:
            config: Per-stage configuration
            client: LLM client shared by every stage (built from config if None)
            sleep: Backoff sleep used by the extraction retries
            clock: Monotonic clock for elapsed-time metadata
        """
        self.config = config or PipelineConfig()
        self.clock = clock

        factory = ExtractorFactory(client=client)
        self.profiler = factory.create_profiler(config=self.config.profiler)
        self.discoverer = factory.create_discoverer(config=self.config.discovery)
        self.extractor = factory.create_question_extractor(config=self.config.extraction, sleep=sleep)
        self.scorer = QualityScorer(self.config.quality)

        self.semantic_deduplicator = None
        if self.config.extraction.semantic_deduplication:
            self.semantic_deduplicator = SemanticDeduplicator(self.config.extraction, client=client)

    def run(
        self,
        raw_text: str,
        module: Union[ModuleTag, str],
        correction_guidance: str = ""
    ) -> ExtractionResult:
        """
        Run the full pipeline over one document.

        Args:
            raw_text: Unnormalized document text
            module: Module tag (enum or case-insensitive name)
            correction_guidance: Learned guidance appended to the system prompt

        Returns:
            ExtractionResult with scored questions and run metadata

        Raises:
            ValueError: unknown module
            AIServiceError: a chunk failed after retries (elapsed_seconds set)
        """
        module = ModuleTag.parse(module)
        start = self.clock()

        try:
            return self._run(raw_text, module, correction_guidance, start)
        except AIServiceError as e:
            e.elapsed_seconds = round(self.clock() - start, 2)
            logger.error(f"Extraction aborted after {e.elapsed_seconds}s: {e.code}")
            raise

    def _run(
        self,
        raw_text: str,
        module: ModuleTag,
        correction_guidance: str,
        start: float
    ) -> ExtractionResult:
        text = normalize_text(raw_text)

        if not text:
            logger.warning("Empty document text provided")
            profile = DocumentProfile(recommended_model=self.config.extraction.llm_model or "")
            return self._build_result([], module, profile, 0, [], correction_guidance, start)

        logger.info(f"Starting extraction for module: {module.value}, text length: {len(text)} chars")

        # Pass 0: document structure
        context = ExtractionContext(module=module, correction_guidance=correction_guidance)
        profile = self.profiler.extract(text, context)
        context.profile = profile

        chunks = chunk_words(text, self.config.extraction.chunk_size, self.config.extraction.overlap)

        # Pass 1: discovery on first chunk
        hints = self.discoverer.extract(chunks[0].text, context)

        # Pass 2: refined extraction
        raw_questions = self._extract_chunks(chunks, context, hints)

        questions = deduplicate_questions(
            raw_questions,
            similarity_threshold=self.config.extraction.similarity_threshold
        )
        if self.semantic_deduplicator:
            questions = self.semantic_deduplicator.deduplicate(questions)

        return self._build_result(questions, module, profile, len(chunks), hints, correction_guidance, start)

    def _extract_chunks(
        self,
        chunks: List[Chunk],
        context: ExtractionContext,
        hints: List[DiscoveredQuestionStub]
    ) -> List[RawExtractedQuestion]:
        """Extract every chunk, merging results in chunk order."""

        def extract_chunk(chunk: Chunk) -> List[RawExtractedQuestion]:
            chunk_context = ExtractionContext(
                module=context.module,
                profile=context.profile,
                discovery_hints=hints if chunk.index == 0 else [],
                correction_guidance=context.correction_guidance
            )
            logger.info(f"Processing chunk {chunk.index + 1}/{len(chunks)}")
            found = self.extractor.extract(chunk.text, chunk_context)
            for q in found:
                q.chunk_index = chunk.index
            return found

        max_workers = self.config.extraction.max_workers
        if max_workers > 1 and len(chunks) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [executor.submit(extract_chunk, chunk) for chunk in chunks]
                try:
                    for future in as_completed(futures):
                        future.result()
                except AIServiceError:
                    # Cancel chunks not yet started; running ones finish on exit
                    executor.shutdown(wait=False, cancel_futures=True)
                    raise
                per_chunk = [future.result() for future in futures]
        else:
            per_chunk = [extract_chunk(chunk) for chunk in chunks]

        return [q for found in per_chunk for q in found]

    def _build_result(
        self,
        questions: List[RawExtractedQuestion],
        module: ModuleTag,
        profile: DocumentProfile,
        chunks_processed: int,
        hints: List[DiscoveredQuestionStub],
        correction_guidance: str,
        start: float
    ) -> ExtractionResult:
        scored = [self.scorer.score(q, module=module) for q in questions]
        summary = self.scorer.summarize(scored)
        elapsed = round(self.clock() - start, 2)

        metadata = ExtractionRunMetadata(
            total_extracted=summary.total,
            complete_questions=summary.complete_count,
            incomplete_questions=summary.incomplete_count,
            processing_time_seconds=elapsed,
            chunks_processed=chunks_processed,
            quality_score=summary.quality_score,
            needs_review=summary.needs_review,
            profile=profile,
            discovery_pass_found=len(hints),
            questions_with_context=sum(1 for q in scored if q.has_context),
            learned_from_corrections=bool(correction_guidance),
            semantic_deduplication_applied=self.semantic_deduplicator is not None,
            quality=summary,
            validation_issues=validation_issues(scored)
        )

        log_extraction_stats("QuestionExtractionPipeline", len(scored), elapsed)
        return ExtractionResult(questions=scored, metadata=metadata)
