"""
Edit distance and greedy word alignment
=======================================

Scores how closely a spoken (or typed) answer follows a reference text.

The aligner is greedy on purpose: each expected word takes the closest
still-unused spoken word, earliest position first on ties, and a spoken word
consumed by one expected word is never reassigned. "cat cat" against "cot"
therefore matches only the first "cat" (50%).
"""

from __future__ import annotations

import math
import re
from typing import Any, List

from .models import AlignedWord, AlignmentResult
from .normalize import as_text


# Maximum levenshtein(expected, spoken) / len(expected) still counted as a match
WORD_MATCH_THRESHOLD: float = 0.34

# Anything that is not a letter, digit, apostrophe or whitespace (underscore is in \w)
_NON_WORD_RE = re.compile(r"[^\w'\s]|_")


def round_half_up(value: float) -> int:
	"""Round like JavaScript ``Math.round`` (halves go up), unlike ``round()``."""
	return int(math.floor(value + 0.5))


def levenshtein(a: Any, b: Any) -> int:
	"""Classic single-character insert/delete/substitute edit distance."""
	s, t = as_text(a), as_text(b)
	if len(s) < len(t):
		s, t = t, s
	if not t:
		return len(s)
	previous = list(range(len(t) + 1))
	for i, cs in enumerate(s, start=1):
		current = [i] + [0] * len(t)
		for j, ct in enumerate(t, start=1):
			cost = 0 if cs == ct else 1
			current[j] = min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost)
		previous = current
	return previous[len(t)]


def normalize_words(s: Any) -> List[str]:
	return _NON_WORD_RE.sub(" ", as_text(s).lower()).split()


def align_words(expected: Any, spoken: Any, *, threshold: float = WORD_MATCH_THRESHOLD) -> AlignmentResult:
	"""Greedily align expected words to spoken words.

	Args:
		expected: Reference text the speaker was asked to say
		spoken: Transcript of what was actually said
		threshold: Largest normalized distance still counted as a match

	Returns:
		AlignmentResult with one AlignedWord per expected token and the
		rounded percentage of matched expected tokens
	"""
	exp = normalize_words(expected)
	sp = normalize_words(spoken)
	used = [False] * len(sp)
	words: List[AlignedWord] = []
	matched_count = 0

	for i, e in enumerate(exp):
		best_j = -1
		best_norm = math.inf
		for j, candidate in enumerate(sp):
			if used[j]:
				continue
			norm = levenshtein(e, candidate) / max(1, len(e))
			# Strict "<" keeps the earliest candidate on ties
			if norm < best_norm:
				best_norm = norm
				best_j = j

		if best_j != -1 and best_norm <= threshold:
			used[best_j] = True
			matched_count += 1
			words.append(
				AlignedWord(
					index=i,
					expected=e,
					spoken=sp[best_j],
					matched=True,
					normalized_distance=min(1.0, best_norm),
					confidence=max(0, round_half_up((1 - best_norm) * 100)),
				)
			)
		else:
			words.append(
				AlignedWord(
					index=i,
					expected=e,
					normalized_distance=min(1.0, best_norm),
				)
			)

	percent = round_half_up(matched_count / max(1, len(exp)) * 100)
	return AlignmentResult(word_match_percent=percent, words=words)
