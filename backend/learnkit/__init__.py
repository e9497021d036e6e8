"""Text-structuring and fuzzy-matching core for the practice backend."""

from .matching import WORD_MATCH_THRESHOLD, align_words, levenshtein, normalize_words
from .models import AlignedWord, AlignmentResult, ExtractionResult, QAPair, ScoreBreakdown
from .normalize import clean_block, clean_line, decode_entities, strip_html
from .qa_extract import extract_qa, parse_qa_pairs
from .scoring import compute_score
from .similarity import SIMILARITY_THRESHOLD, is_too_similar, jaccard_similarity

__all__ = [
	"SIMILARITY_THRESHOLD",
	"WORD_MATCH_THRESHOLD",
	"AlignedWord",
	"AlignmentResult",
	"ExtractionResult",
	"QAPair",
	"ScoreBreakdown",
	"align_words",
	"clean_block",
	"clean_line",
	"compute_score",
	"decode_entities",
	"extract_qa",
	"is_too_similar",
	"jaccard_similarity",
	"levenshtein",
	"normalize_words",
	"parse_qa_pairs",
	"strip_html",
]
