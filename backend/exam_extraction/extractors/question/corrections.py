"""
Learned correction guidance.

Reviewers' manual edits to extracted question text are mined for recurring
patterns, which are fed back into the extraction system prompt.
"""

import re
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)

# A pattern must recur more than this many times to become guidance
PATTERN_MIN_OCCURRENCES = 3
EXPANSION_RATIO = 1.3

_PATTERN_GUIDANCE = {
    "expand_abbreviated": "- Expand abbreviated terms in questions (common admin correction)",
    "capitalize_questions": "- Ensure questions start with capital letters (common admin correction)",
    "add_question_mark": "- Add question marks to interrogative sentences (common admin correction)",
}


@dataclass
class ContentCorrection:
    """A reviewer's edit of one question's text."""
    original_value: str
    corrected_value: str
    field_changed: str = "question"


def _starts_upper(text: str) -> bool:
    return bool(re.match(r"[A-Z]", text))


def classify_correction(original: str, corrected: str) -> list:
    """Return the pattern names a single correction exhibits."""
    original = original or ""
    corrected = corrected or ""
    patterns = []

    if len(corrected) > len(original) * EXPANSION_RATIO:
        patterns.append("expand_abbreviated")
    if _starts_upper(corrected) and not _starts_upper(original):
        patterns.append("capitalize_questions")
    if "?" in corrected and "?" not in original:
        patterns.append("add_question_mark")

    return patterns


def build_correction_guidance(corrections: Iterable[ContentCorrection]) -> str:
    """
    Turn recent question-text corrections into prompt guidance.

    Returns "" when no pattern recurs often enough.
    """
    counts = Counter()
    for correction in corrections:
        if correction.field_changed != "question":
            continue
        counts.update(classify_correction(correction.original_value, correction.corrected_value))

    lines = [
        guidance for pattern, guidance in _PATTERN_GUIDANCE.items()
        if counts[pattern] > PATTERN_MIN_OCCURRENCES
    ]
    if not lines:
        return ""

    logger.info(f"Applying {len(lines)} learned correction patterns")
    return "\n\nLEARNED FROM PREVIOUS CORRECTIONS:\n" + "\n".join(lines)
