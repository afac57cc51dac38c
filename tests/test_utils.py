from __future__ import annotations

import pytest

from exam_extraction.extractors.base import (
    RawExtractedQuestion,
    chunk_words,
    deduplicate_questions,
    levenshtein_distance,
    normalize_text,
    text_similarity,
)


def _words(n: int) -> str:
    return " ".join(f"w{i}" for i in range(n))


class TestNormalizeText:
    def test_collapses_line_endings_tabs_and_runs(self) -> None:
        raw = "  1.\tWhat is 2 + 2?\r\n\r\nA) 3    B) 4 \n"
        assert normalize_text(raw) == "1. What is 2 + 2? A) 3 B) 4"

    def test_empty_and_whitespace_only(self) -> None:
        assert normalize_text("") == ""
        assert normalize_text(" \r\n\t ") == ""


class TestChunkWords:
    def test_short_text_is_single_identical_chunk(self) -> None:
        text = _words(2500)
        chunks = chunk_words(text)
        assert len(chunks) == 1
        assert chunks[0].text == text
        assert chunks[0].index == 0

    def test_large_text_windows_and_overlap(self) -> None:
        text = _words(6000)
        chunks = chunk_words(text, chunk_size=2500, overlap=200)

        assert [c.word_count for c in chunks] == [2500, 2500, 1400]
        assert [c.text.split()[0] for c in chunks] == ["w0", "w2300", "w4600"]
        assert chunks[-1].text.split()[-1] == "w5999"

        for current, following in zip(chunks, chunks[1:]):
            assert current.text.split()[-200:] == following.text.split()[:200]

    def test_every_word_is_covered(self) -> None:
        words = _words(7777).split()
        chunks = chunk_words(" ".join(words), chunk_size=1000, overlap=100)
        covered = set()
        for chunk in chunks:
            covered.update(chunk.text.split())
        assert covered == set(words)

    def test_last_window_ends_exactly_at_text_end(self) -> None:
        # 2500 + 2300 = 4800 words: second window reaches the end exactly
        chunks = chunk_words(_words(4800))
        assert len(chunks) == 2
        assert chunks[1].word_count == 2500

    def test_overlap_must_be_smaller_than_chunk(self) -> None:
        with pytest.raises(ValueError):
            chunk_words(_words(10), chunk_size=5, overlap=5)


class TestTextSimilarity:
    def test_levenshtein(self) -> None:
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3

    def test_identical_and_empty(self) -> None:
        assert text_similarity("same", "same") == 1.0
        assert text_similarity("", "") == 1.0
        assert text_similarity("", "something") == 0.0

    def test_normalized_by_longer_string(self) -> None:
        assert text_similarity("a" * 20, "a" * 17 + "bbb") == 0.85


def _q(text: str) -> RawExtractedQuestion:
    return RawExtractedQuestion(question=text)


class TestDeduplicateQuestions:
    def test_exactly_at_threshold_is_kept(self) -> None:
        questions = [_q("a" * 20), _q("a" * 17 + "bbb")]
        assert len(deduplicate_questions(questions)) == 2

    def test_above_threshold_is_dropped(self) -> None:
        # 43/50 = 0.86
        questions = [_q("a" * 50), _q("a" * 43 + "b" * 7)]
        result = deduplicate_questions(questions)
        assert result == [questions[0]]

    def test_case_insensitive_first_occurrence_wins(self) -> None:
        first = _q("What is the capital of France?")
        second = _q("WHAT IS THE CAPITAL OF FRANCE?")
        assert deduplicate_questions([first, second]) == [first]

    def test_empty_questions_collapse_into_one(self) -> None:
        questions = [_q(""), _q(""), _q("What is 25% of 80?")]
        result = deduplicate_questions(questions)
        assert [q.question for q in result] == ["", "What is 25% of 80?"]

    def test_idempotent(self) -> None:
        questions = [
            _q("What is 25% of 80?"),
            _q("What is 25 % of 80?"),
            _q("Which word is a synonym for 'happy'?"),
            _q("Which word is a synonym for 'sad'?"),
            _q(""),
            _q(""),
        ]
        once = deduplicate_questions(questions)
        assert deduplicate_questions(once) == once

    def test_empty_input(self) -> None:
        assert deduplicate_questions([]) == []
