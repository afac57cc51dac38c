"""
Quality scoring for extracted questions.

Each question gets four independent sub-scores in [0, 1] (clarity, option
quality, answer certainty, formatting) combined into a weighted overall
quality. The run as a whole gets an integer score in [0, 100] that decides
whether the extracted set can be auto-approved or must go to manual review.
"""

import re
import logging
from typing import List, Optional, Sequence

from ..base import (
    QualityConfig,
    RawExtractedQuestion,
    ExtractedQuestion,
    ValidationResult,
    QualityResult,
    QualitySummary,
    ModuleTag,
    ANSWER_LETTERS
)

logger = logging.getLogger(__name__)

_EXTRA_WHITESPACE = re.compile(r"\s{3,}")
_LEADING_UPPERCASE = re.compile(r"^[A-Z]")


def _trimmed_options(raw: RawExtractedQuestion) -> List[str]:
    return [(opt or "").strip() for opt in raw.options]


def _options_distinct(options: Sequence[str]) -> bool:
    present = [o.lower() for o in options if o]
    return len(set(present)) == len(present)


def _is_valid_answer(answer: Optional[str]) -> bool:
    return (answer or "").strip().upper() in ANSWER_LETTERS


class QualityScorer:
    """Per-question validation and scoring plus the document-level summary."""

    def __init__(self, config: Optional[QualityConfig] = None):
        self.config = config or QualityConfig()

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate(self, raw: RawExtractedQuestion) -> ValidationResult:
        options = _trimmed_options(raw)
        return ValidationResult(
            has_question=len((raw.question or "").strip()) > self.config.min_question_length,
            has_all_options=all(options),
            has_answer=_is_valid_answer(raw.correct_answer),
            options_distinct=_options_distinct(options)
        )

    # =========================================================================
    # PER-QUESTION SCORING
    # =========================================================================

    def question_clarity(self, question: str) -> float:
        if len(question) <= self.config.min_question_length:
            return 0.0
        return 1.0 if question.endswith((".", "?")) else 0.8

    def option_quality(self, options: Sequence[str]) -> float:
        present = [o for o in options if o]
        score = 0.0
        if all(options):
            score += 0.4
        if _options_distinct(options):
            score += 0.3
        if all(len(o) >= 1 for o in present):
            score += 0.15
        if all(len(o) <= self.config.max_option_length for o in present):
            score += 0.15
        return score

    def formatting_score(self, question: str) -> float:
        spacing = 0.3 if _EXTRA_WHITESPACE.search(question) else 0.5
        capitalization = 0.5 if _LEADING_UPPERCASE.match(question) else 0.3
        return spacing + capitalization

    def score(
        self,
        raw: RawExtractedQuestion,
        module: ModuleTag = ModuleTag.NUMERICAL
    ) -> ExtractedQuestion:
        """
        Validate and score one raw question.

        The answer letter is carried through as extracted; an empty answer
        stays empty and scores zero certainty.
        """
        cfg = self.config
        question = (raw.question or "").strip()

        clarity = self.question_clarity(question)
        options = self.option_quality(_trimmed_options(raw))
        answer = 1.0 if _is_valid_answer(raw.correct_answer) else 0.0
        formatting = self.formatting_score(question)

        overall = (
            clarity * cfg.clarity_weight
            + options * cfg.option_weight
            + answer * cfg.answer_weight
            + formatting * cfg.formatting_weight
        )

        reasons = []
        if clarity < cfg.clarity_reason_threshold:
            reasons.append("Question unclear or incomplete")
        if options < cfg.option_reason_threshold:
            reasons.append("Options missing, duplicate, or invalid")
        if answer < cfg.answer_reason_threshold:
            reasons.append("Correct answer missing or invalid")
        if formatting < cfg.formatting_reason_threshold:
            reasons.append("Poor formatting")

        quality = QualityResult(
            question_clarity=round(clarity, 2),
            option_quality=round(options, 2),
            answer_certainty=round(answer, 2),
            formatting_score=round(formatting, 2),
            overall_quality=round(overall, 2),
            needs_review=overall < cfg.review_overall_threshold or answer < cfg.review_answer_threshold,
            review_reasons=reasons
        )

        return ExtractedQuestion(
            question=raw.question,
            option_a=raw.option_a,
            option_b=raw.option_b,
            option_c=raw.option_c,
            option_d=raw.option_d,
            correct_answer=raw.correct_answer,
            document_section=raw.document_section,
            page_number=raw.page_number,
            question_number=raw.question_number,
            preceding_context=raw.preceding_context,
            chunk_index=raw.chunk_index,
            module=module,
            validation=self.validate(raw),
            quality=quality
        )

    # =========================================================================
    # DOCUMENT-LEVEL SUMMARY
    # =========================================================================

    def summarize(self, questions: Sequence[ExtractedQuestion]) -> QualitySummary:
        """
        Aggregate per-question quality into the run's 0-100 score.

        score = avg*50 + completion*30 + min-questions bonus + high-quality*10,
        rounded and clamped. The bonus is 10 at the minimum question count and
        proportional below it.
        """
        cfg = self.config
        total = len(questions)

        complete_count = sum(1 for q in questions if q.validation and q.validation.is_complete)
        incomplete_count = total - complete_count
        high_quality_count = sum(
            1 for q in questions
            if q.quality and q.quality.overall_quality >= cfg.high_quality_threshold
        )

        if total:
            average_quality = sum(q.quality.overall_quality for q in questions if q.quality) / total
            completion_rate = complete_count / total
            high_quality_rate = high_quality_count / total
        else:
            average_quality = completion_rate = high_quality_rate = 0.0

        has_minimum = total >= cfg.minimum_questions
        bonus = 10.0 if has_minimum else (total / cfg.minimum_questions) * 10

        raw_score = average_quality * 50 + completion_rate * 30 + bonus + high_quality_rate * 10
        quality_score = int(round(min(100.0, max(0.0, raw_score))))

        incomplete_rate = incomplete_count / max(total, 1)

        needs_review = (
            quality_score < cfg.review_score_threshold
            or average_quality < cfg.review_average_threshold
            or incomplete_rate > cfg.max_incomplete_rate
            or total < cfg.min_total_questions
            or complete_count == 0
        )

        logger.info(
            f"Quality Score: {quality_score}/100 | Needs Review: {needs_review} "
            f"({complete_count} complete, {incomplete_count} incomplete)"
        )

        return QualitySummary(
            total=total,
            complete_count=complete_count,
            incomplete_count=incomplete_count,
            high_quality_count=high_quality_count,
            average_quality=average_quality,
            completion_rate=completion_rate,
            high_quality_rate=high_quality_rate,
            has_minimum_questions=has_minimum,
            low_incomplete_rate=incomplete_rate < cfg.max_incomplete_rate,
            quality_score=quality_score,
            needs_review=needs_review
        )
