"""
Text normalization helpers
==========================

Pure string transforms shared by the QA extractor, the word aligner and the
HTTP routers. Everything here accepts arbitrary input (coerced with
``as_text``) and never raises.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Tuple

from .models import QAPair


_ENTITIES = {
	"nbsp": " ",
	"amp": "&",
	"lt": "<",
	"gt": ">",
	"quot": '"',
	"#39": "'",
}
_ENTITY_RE = re.compile(r"&(nbsp|amp|lt|gt|quot|#39);", re.IGNORECASE)
_TAG_RE = re.compile(r"</?[A-Za-z][^<>\n]*>")

_QUOTE_PREFIX_RE = re.compile(r"^(?:[>›]+\s*)+")
_BULLET_PREFIX_RE = re.compile(r"^\s*[*\-•–—]\s+")
_ORDINAL_PREFIX_RE = re.compile(r"^\s*[0-9]+\s*[).:\-–]\s+")
_SPACE_BEFORE_NEWLINE_RE = re.compile(r"[ \t]+\n")
_SPACE_RUN_RE = re.compile(r"[ \t]{2,}")
_TRAILING_NOISE_RE = re.compile(r"[>:\-–—\s]+\Z")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def as_text(value: Any) -> str:
	"""Coerce any value to ``str``; ``None`` becomes the empty string."""
	if value is None:
		return ""
	if isinstance(value, str):
		return value
	return str(value)


def decode_entities(s: Any) -> str:
	# Single pass so "&amp;lt;" decodes to "&lt;" and not "<"
	return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(1).lower()], as_text(s))


def strip_html(s: Any) -> str:
	return _TAG_RE.sub("", as_text(s))


def _strip_prefixes(t: str) -> str:
	# Markers can be stacked in any order ("1. - item", "- > quote")
	while True:
		stripped = _ORDINAL_PREFIX_RE.sub("", _BULLET_PREFIX_RE.sub("", _QUOTE_PREFIX_RE.sub("", t)))
		if stripped == t:
			return t
		t = stripped


def clean_line(s: Any) -> str:
	"""Normalize a single line of pasted or OCR text.

	Removes markup, then any stack of leading quote markers (``>``/``›``),
	bullets and ordinal markers ("1.", "2)", "3 -") in whatever order they
	appear. Run-on spaces are collapsed and trailing ``>``, ``:``, dashes and
	whitespace are dropped.

	Args:
		s: Line to clean (non-strings are coerced)

	Returns:
		The cleaned line, possibly empty
	"""
	t = strip_html(decode_entities(s)).replace("\r", "").strip()
	t = _strip_prefixes(t)
	t = _SPACE_BEFORE_NEWLINE_RE.sub("\n", t)
	t = _SPACE_RUN_RE.sub(" ", t)
	t = _TRAILING_NOISE_RE.sub("", t)
	return t.strip()


def clean_block(s: Any) -> str:
	"""Apply ``clean_line`` to every line of a block and squeeze blank runs to one empty line."""
	text = strip_html(decode_entities(s)).replace("\r\n", "\n")
	joined = "\n".join(clean_line(line) for line in text.split("\n"))
	return _BLANK_LINES_RE.sub("\n\n", joined).strip()


def sanitize_qa(question: Any, answer: Any) -> Tuple[str, str]:
	return clean_line(question), clean_block(answer)


def sanitize_pairs(items: Iterable[Any]) -> List[QAPair]:
	"""Sanitize question/answer items coming from outside the parser.

	Accepts mappings (``{"question": ..., "answer": ...}``) or objects with
	``question``/``answer`` attributes, e.g. pairs produced by an external
	generator. Items with an empty side after cleaning are dropped and ids are
	renumbered from 1.
	"""
	out: List[QAPair] = []
	for item in items or ():
		if isinstance(item, Mapping):
			raw_q, raw_a = item.get("question"), item.get("answer")
		else:
			raw_q, raw_a = getattr(item, "question", None), getattr(item, "answer", None)
		question, answer = sanitize_qa(raw_q, raw_a)
		if question and answer:
			out.append(QAPair(id=len(out) + 1, question=question, answer=answer))
	return out


# Longest phrase first so "a b a b" collapses as a pair, not word by word
_REPEATED_PHRASE_RES = tuple(
	re.compile(r"\b(" + r"\s+".join([r"\w+"] * n) + r")(?:\s+\1\b)+", re.IGNORECASE)
	for n in (3, 2, 1)
)
_WHITESPACE_RE = re.compile(r"\s+")


def dedupe_transcript(text: Any) -> str:
	"""Drop back-to-back repeats of one to three word phrases from a transcript.

	Live captioning tends to emit the same words twice when partial and final
	results overlap. The first occurrence is kept, so "I I went home" becomes
	"I went home". Whitespace is collapsed to single spaces.
	"""
	s = _WHITESPACE_RE.sub(" ", as_text(text)).strip()
	for phrase_re in _REPEATED_PHRASE_RES:
		s = phrase_re.sub(r"\1", s)
	return s


_LATEX_DELIMITER_RE = re.compile(r"\\\(|\\\)|\\\[|\\\]|\\\$|\$\$")
_LATEX_ENV_RE = re.compile(r"\\begin\{.*?\}[\s\S]*?\\end\{.*?\}")
_LATEX_FRAC_RE = re.compile(
	r"\\frac\s*\{\s*([+-]?\d+(?:\.\d+)?)\s*\}\s*\{\s*([+-]?\d+(?:\.\d+)?)\s*\}"
)
_SINGLE_DOLLAR_RE = re.compile(r"\$\s*([\s\S]*?)\s*\$")


def _frac_to_text(m: re.Match) -> str:
	a, b = m.group(1), m.group(2)
	den = float(b)
	if den == 0:
		return f"{a}/{b}"
	dec = float(a) / den
	dec_str = format(dec, ".6f").rstrip("0").rstrip(".")
	return f"{a}/{b} ({dec_str})"


def clean_math_output(text: Any) -> str:
	"""Turn model-written math into plain readable text.

	Drops LaTeX delimiters and environments, rewrites simple ``\\frac{a}{b}``
	as ``a/b (decimal)`` and removes leftover backslashes and ``$`` wrappers.
	"""
	t = as_text(text)
	if not t:
		return t
	t = _LATEX_DELIMITER_RE.sub("", t)
	t = _LATEX_ENV_RE.sub("", t)
	t = _LATEX_FRAC_RE.sub(_frac_to_text, t)
	t = re.sub(r"\\+", "", t)
	t = _SINGLE_DOLLAR_RE.sub(r"\1", t)
	return _BLANK_LINES_RE.sub("\n\n", t).strip()
