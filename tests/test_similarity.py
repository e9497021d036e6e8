"""
Tests for learnkit.similarity

Test Coverage:
- jaccard_similarity(): empty-set rules and set semantics
- is_too_similar(): threshold comparison
- regenerate_if_too_similar(): single retry gate
"""
import asyncio

import pytest

from learnkit.similarity import (
    SIMILARITY_THRESHOLD,
    is_too_similar,
    jaccard_similarity,
    regenerate_if_too_similar,
)


class TestJaccardSimilarity:
    def test_both_empty(self):
        assert jaccard_similarity("", "") == 1.0
        assert jaccard_similarity(None, "  ...  ") == 1.0

    def test_one_side_empty(self):
        assert jaccard_similarity("", "a") == 0.0
        assert jaccard_similarity("a", "") == 0.0

    def test_identical(self):
        assert jaccard_similarity("the cat sat", "the cat sat") == 1.0

    def test_partial_overlap(self):
        assert jaccard_similarity("a b c", "a b d") == pytest.approx(0.5)

    def test_case_punctuation_and_duplicates_ignored(self):
        assert jaccard_similarity("The cat, the CAT sat.", "the cat sat") == 1.0

    def test_disjoint(self):
        assert jaccard_similarity("red blue", "green yellow") == 0.0


class TestThreshold:
    def test_constant(self):
        assert SIMILARITY_THRESHOLD == 0.45

    def test_exactly_at_threshold_is_sufficiently_different(self):
        shared = [f"w{i}" for i in range(9)]
        left = " ".join(shared + [f"a{i}" for i in range(6)])
        right = " ".join(shared + [f"b{i}" for i in range(5)])
        assert jaccard_similarity(left, right) == pytest.approx(0.45)
        assert not is_too_similar(left, right)

    def test_above_threshold(self):
        assert is_too_similar("a b c", "a b d")

    def test_custom_threshold(self):
        assert not is_too_similar("a b c", "a b d", threshold=0.5)


class TestRegenerateIfTooSimilar:
    @staticmethod
    def _regenerator(text):
        calls = []

        async def regenerate():
            calls.append(1)
            return text

        return regenerate, calls

    def test_regenerates_once_when_too_similar(self):
        regenerate, calls = self._regenerator("A completely different method")
        out = asyncio.run(regenerate_if_too_similar("step one add", "step one add", regenerate))
        assert out == "A completely different method"
        assert len(calls) == 1

    def test_keeps_candidate_when_different(self):
        regenerate, calls = self._regenerator("unused")
        out = asyncio.run(regenerate_if_too_similar("multiply both sides", "draw a number line", regenerate))
        assert out == "draw a number line"
        assert calls == []

    def test_blank_retry_keeps_original(self):
        regenerate, calls = self._regenerator("   ")
        out = asyncio.run(regenerate_if_too_similar("same words", "same words", regenerate))
        assert out == "same words"
        assert len(calls) == 1

    def test_no_reference_never_regenerates(self):
        regenerate, calls = self._regenerator("unused")
        out = asyncio.run(regenerate_if_too_similar("", "anything", regenerate))
        assert out == "anything"
        assert calls == []
