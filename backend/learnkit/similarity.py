from __future__ import annotations
import logging
import re
from typing import Any, Awaitable, Callable, Set
from .normalize import as_text

logger = logging.getLogger(__name__)

# Scores above this are "too similar" and should be regenerated
SIMILARITY_THRESHOLD: float = 0.45

_NON_WORD_RE = re.compile(r"[^\w\s]")


def _word_set(s: Any) -> Set[str]:
	return set(_NON_WORD_RE.sub(" ", as_text(s).lower()).split())


def jaccard_similarity(a: Any, b: Any) -> float:
	"""Word-level Jaccard similarity used to spot near-duplicate text.

	Returns 1.0 when both sides are empty and 0.0 when only one is.
	"""
	left = _word_set(a)
	right = _word_set(b)
	if not left and not right:
		return 1.0
	if not left or not right:
		return 0.0
	return len(left & right) / len(left | right)


def is_too_similar(reference: Any, candidate: Any, threshold: float = SIMILARITY_THRESHOLD) -> bool:
	return jaccard_similarity(reference, candidate) > threshold


async def regenerate_if_too_similar(
	reference: Any,
	candidate: Any,
	regenerate: Callable[[], Awaitable[str]],
	*,
	threshold: float = SIMILARITY_THRESHOLD,
) -> str:
	"""Retry generation once when ``candidate`` copies ``reference`` too closely.

	``regenerate`` is awaited at most once. A blank retry keeps the first
	candidate. Without a reference there is nothing to compare against and the
	candidate is returned as is.
	"""
	text = as_text(candidate)
	if not as_text(reference).strip():
		return text
	score = jaccard_similarity(reference, text)
	if score <= threshold:
		return text
	logger.warning("Candidate too similar to reference (score=%.3f > %.2f); regenerating", score, threshold)
	retry = as_text(await regenerate()).strip()
	return retry or text
