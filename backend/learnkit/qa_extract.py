"""
Question/answer extraction
==========================

Turns pasted or OCR-extracted worksheets into ordered question/answer pairs
without calling a model.

Extraction is a cascade of pure parser strategies run on ``clean_block(raw)``:

1. ``block``: regex scan over the whole text. Used only when it finds at
   least two pairs.
2. ``lines``: line-by-line scan for "question? Ans: answer" on one line or a
   question line followed by an answer-marker line.
3. ``emergency``: when the above leave at most one pair but the raw text
   mentions "Ans", pair every "Ans..." line with the last question line seen.

Colon-heavy text (timestamps, labels) can make the block and line strategies
disagree; the block result wins whenever it has two or more pairs.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, NamedTuple, Tuple

from .models import ExtractionResult, QAPair
from .normalize import as_text, clean_block, sanitize_pairs

logger = logging.getLogger(__name__)


BLOCK_CONFIDENCE: float = 0.9
LINES_CONFIDENCE: float = 0.6
EMERGENCY_CONFIDENCE: float = 0.3

# "1.", "2)", "3:", "4 -"
_ORDINAL = r"\d+\s*[).:\-–]"
# "Q:", "Q1.", "Question 3)"
_Q_LABEL = r"Q(?:uestion)?(?:\s*\d+)?\s*[:.\-)]"
# "Ans", "Answer", "A:", "A." plus optional punctuation; a bare "A" must be punctuated
_ANSWER_MARKER = r"(?:Ans(?:wer)?\b|A\b(?=[ \t]*[:.\-]))[ \t]*[:.\-]?[ \t]*"
_ANSWER_HEAD = r"(?:Ans(?:wer)?\b|A[ \t]*[:.\-])"
_PREFIX = r"(?:" + _ORDINAL + r"\s*)?(?:" + _Q_LABEL + r"\s*)?"

_BLOCK_RE = re.compile(
	r"(?:(?:^|\n)\s*" + _PREFIX + r")?"
	r"(.{5,}?[?:])\s*"
	r"(" + _ANSWER_MARKER + r")"
	r"([\s\S]*?)"
	r"(?=\n\s*(?:" + _ORDINAL + r"|" + _Q_LABEL + r"|" + _ANSWER_HEAD + r")"
	r"|\n[^\n]*[?:][ \t]*(?:\n|\Z)"
	r"|\Z)",
	re.IGNORECASE,
)
_SAME_LINE_RE = re.compile(r"^" + _PREFIX + r"(.+?[?:])\s*" + _ANSWER_MARKER + r"(.+)$", re.IGNORECASE)
_QUESTION_LINE_RE = re.compile(r"^" + _PREFIX + r"(.+?[?:])$", re.IGNORECASE)
_ANSWER_LINE_RE = re.compile(r"^" + _ANSWER_MARKER + r"(.+)$", re.IGNORECASE)
_HEADER_START_RE = re.compile(r"^(?:" + _ORDINAL + r"|" + _Q_LABEL + r"|" + _ANSWER_HEAD + r")", re.IGNORECASE)
_EMERGENCY_ANSWER_RE = re.compile(r"^Ans(?:wer)?\s*[:.\-]?\s*(.*)$", re.IGNORECASE)
_ANS_RE = re.compile(r"ans", re.IGNORECASE)


class ParseOutcome(NamedTuple):
	pairs: Tuple[QAPair, ...]
	confidence: float


class ParseStrategy(NamedTuple):
	name: str
	parse: Callable[[str], ParseOutcome]
	min_pairs: int


def _outcome(raw_pairs: List[Dict[str, str]], confidence: float) -> ParseOutcome:
	pairs = tuple(sanitize_pairs(raw_pairs))
	return ParseOutcome(pairs, confidence if pairs else 0.0)


def _looks_like_header(line: str) -> bool:
	return bool(_HEADER_START_RE.match(line)) or line.endswith(("?", ":"))


def parse_blocks(text: str) -> ParseOutcome:
	"""Whole-text regex pass; answers run until the next question/answer header."""
	raw_pairs = [
		{"question": m.group(1), "answer": m.group(3).strip()}
		for m in _BLOCK_RE.finditer(text)
	]
	return _outcome(raw_pairs, BLOCK_CONFIDENCE)


def parse_lines(text: str) -> ParseOutcome:
	lines = [line.strip() for line in text.split("\n") if line.strip()]
	raw_pairs: List[Dict[str, str]] = []
	i = 0
	while i < len(lines):
		line = lines[i]
		same_line = _SAME_LINE_RE.match(line)
		if same_line:
			raw_pairs.append({"question": same_line.group(1), "answer": same_line.group(2)})
			i += 1
			continue
		question = _QUESTION_LINE_RE.match(line)
		if question and i + 1 < len(lines):
			answer = _ANSWER_LINE_RE.match(lines[i + 1])
			if answer:
				parts = [answer.group(1).strip()]
				j = i + 2
				while j < len(lines) and not _looks_like_header(lines[j]):
					parts.append(lines[j])
					j += 1
				raw_pairs.append({"question": question.group(1), "answer": "\n".join(parts)})
				i = j
				continue
		i += 1
	return _outcome(raw_pairs, LINES_CONFIDENCE)


def parse_answer_lines(raw: Any) -> ParseOutcome:
	"""Last-resort pairing over the raw (uncleaned) lines.

	Remembers the latest line ending in "?" or ":" and pairs it with the next
	line starting with "Ans"/"Answer". Unpaired answers are ignored.
	"""
	lines = [line.strip() for line in re.split(r"\r?\n", as_text(raw)) if line.strip()]
	raw_pairs: List[Dict[str, str]] = []
	pending = None
	for line in lines:
		if line.endswith(("?", ":")):
			pending = line
			continue
		m = _EMERGENCY_ANSWER_RE.match(line)
		if m and pending is not None:
			raw_pairs.append({"question": pending, "answer": m.group(1)})
			pending = None
	return _outcome(raw_pairs, EMERGENCY_CONFIDENCE)


STRATEGIES: Tuple[ParseStrategy, ...] = (
	ParseStrategy("block", parse_blocks, min_pairs=2),
	ParseStrategy("lines", parse_lines, min_pairs=1),
)


def extract_qa(raw: Any) -> ExtractionResult:
	"""Run the strategy cascade and report which strategy produced the pairs.

	Args:
		raw: Pasted or OCR text (non-strings are coerced)

	Returns:
		ExtractionResult; ``pairs`` is empty and ``strategy`` is None when
		nothing could be parsed
	"""
	source = as_text(raw)
	text = clean_block(source)
	result = ExtractionResult()
	if text:
		for strategy in STRATEGIES:
			outcome = strategy.parse(text)
			if len(outcome.pairs) >= strategy.min_pairs:
				result = ExtractionResult(pairs=outcome.pairs, strategy=strategy.name, confidence=outcome.confidence)
				break
	if len(result.pairs) <= 1 and _ANS_RE.search(source):
		outcome = parse_answer_lines(source)
		if outcome.pairs:
			result = ExtractionResult(pairs=outcome.pairs, strategy="emergency", confidence=outcome.confidence)
	logger.debug("QA extraction: %d pair(s) via %s", len(result.pairs), result.strategy)
	return result


def parse_qa_pairs(raw: Any) -> List[QAPair]:
	return list(extract_qa(raw).pairs)
