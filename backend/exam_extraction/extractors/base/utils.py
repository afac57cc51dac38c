"""
Shared utility functions for the extraction pipeline.

This module provides common functionality used across different stages,
such as text normalization, word chunking, deduplication, and similarity
detection.
"""

import re
import logging
from typing import List, Sequence
from .models import Chunk, RawExtractedQuestion

logger = logging.getLogger(__name__)


# =============================================================================
# TEXT NORMALIZATION
# =============================================================================

def normalize_text(text: str) -> str:
    """ Collapse line endings, tabs and whitespace runs into single spaces. """
    if not text:
        return ""

    text = text.replace("\r\n", "\n")
    text = text.replace("\t", " ")
    text = re.sub(r"\s+", " ", text)

    return text.strip()


# =============================================================================
# TEXT CHUNKING
# =============================================================================

def chunk_words(text: str, chunk_size: int = 2500, overlap: int = 200) -> List[Chunk]:
    """
    Split text into overlapping word windows.

    Text of at most chunk_size words is returned whole as a single chunk.
    Otherwise windows advance by (chunk_size - overlap) words, so consecutive
    chunks share exactly `overlap` words and a question straddling a boundary
    appears complete in at least one chunk. The last window is clipped to the
    end of the text.
    """
    if overlap >= chunk_size:
        raise ValueError("overlap must be smaller than chunk_size")

    words = text.split()

    if len(words) <= chunk_size:
        return [Chunk(text=text, index=0)]

    chunks = []
    start = 0

    while start < len(words):
        end = min(start + chunk_size, len(words))
        chunks.append(Chunk(text=" ".join(words[start:end]), index=len(chunks)))

        if end >= len(words):
            break

        # Move forward, accounting for overlap
        start += (chunk_size - overlap)

    logger.info(f"Created {len(chunks)} chunks from {len(words)} words")
    return chunks


# =============================================================================
# TEXT SIMILARITY
# =============================================================================

def levenshtein_distance(s1: str, s2: str) -> int:
    """Compute Levenshtein distance between two strings."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)
    if len(s2) == 0:
        return len(s1)

    prev_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        curr_row = [i + 1]
        for j, c2 in enumerate(s2):
            ins = prev_row[j + 1] + 1
            dele = curr_row[j] + 1
            sub = prev_row[j] + (0 if c1 == c2 else 1)
            curr_row.append(min(ins, dele, sub))
        prev_row = curr_row
    return prev_row[-1]


def text_similarity(text1: str, text2: str) -> float:
    """
    Normalized Levenshtein similarity: 1 - distance / max(len1, len2).

    Identical strings (two empty strings included) score 1.0; an empty
    string against a non-empty one scores 0.0.
    """
    if text1 == text2:
        return 1.0
    if not text1 or not text2:
        return 0.0

    max_length = max(len(text1), len(text2))
    distance = levenshtein_distance(text1, text2)

    # (max - d) / max keeps exact fractions like 17/20 equal to their literal
    return (max_length - distance) / max_length


# =============================================================================
# DEDUPLICATION
# =============================================================================

def deduplicate_questions(
    questions: Sequence[RawExtractedQuestion],
    similarity_threshold: float = 0.85
) -> List[RawExtractedQuestion]:
    """
    Remove near-duplicate questions, keeping the first occurrence.

    Each candidate's lowercased question text is compared against every
    question already kept; it is dropped when similarity is strictly above
    the threshold.
    """
    if not questions:
        return []

    unique_questions: List[RawExtractedQuestion] = []

    for q in questions:
        candidate = (q.question or "").lower()

        is_duplicate = any(
            text_similarity(candidate, (existing.question or "").lower()) > similarity_threshold
            for existing in unique_questions
        )

        if not is_duplicate:
            unique_questions.append(q)

    logger.info(f"Deduplicated: {len(questions)} -> {len(unique_questions)} questions")
    return unique_questions


# =============================================================================
# LOGGING HELPERS
# =============================================================================

def log_extraction_stats(
    extractor_name: str,
    num_items: int,
    processing_time: float
):
    """
    Log extraction statistics.

    Args:
        extractor_name: Name of the extractor
        num_items: Number of items extracted
        processing_time: Time taken in seconds
    """
    logger.info(
        f"{extractor_name} extracted {num_items} items in {processing_time:.2f}s"
    )
