from __future__ import annotations
import math
from typing import Any
from .matching import round_half_up
from .models import ScoreBreakdown

# Sub-metrics derived from the word-match percentage
PRONUNCIATION_SLOPE: float = 0.90
PRONUNCIATION_OFFSET: float = 10.0
FLUENCY_SLOPE: float = 0.85
FLUENCY_OFFSET: float = 12.0

# Weights of the final score; they sum to 1
WORD_MATCH_WEIGHT: float = 0.55
PRONUNCIATION_WEIGHT: float = 0.20
FLUENCY_WEIGHT: float = 0.15
RELEVANCE_WEIGHT: float = 0.10


def clamp_score(value: int) -> int:
	return max(0, min(100, value))


def _coerce_score(value: Any) -> int:
	# Relevance comes from an external judge; anything unusable counts as 0
	try:
		number = float(value)
	except (TypeError, ValueError):
		return 0
	if math.isnan(number) or math.isinf(number):
		return 0
	return clamp_score(round_half_up(number))


def compute_score(word_match_percent: Any, relevance_score: Any) -> ScoreBreakdown:
	"""Combine word match and relevance into the final speaking score.

	Each sub-metric is rounded and clamped to [0, 100] before it is combined.
	"""
	word_match = _coerce_score(word_match_percent)
	relevance = _coerce_score(relevance_score)
	pronunciation = clamp_score(round_half_up(word_match * PRONUNCIATION_SLOPE + PRONUNCIATION_OFFSET))
	fluency = clamp_score(round_half_up(word_match * FLUENCY_SLOPE + FLUENCY_OFFSET))
	final = round_half_up(
		WORD_MATCH_WEIGHT * word_match
		+ PRONUNCIATION_WEIGHT * pronunciation
		+ FLUENCY_WEIGHT * fluency
		+ RELEVANCE_WEIGHT * relevance
	)
	return ScoreBreakdown(
		word_match=word_match,
		pronunciation=pronunciation,
		fluency=fluency,
		relevance=relevance,
		final=clamp_score(final),
	)
