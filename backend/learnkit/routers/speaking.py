"""
Speaking Practice Scoring
=========================

Scores a spoken attempt (already transcribed by the caller) against the
reference sentence the learner was asked to say.

Scoring pipeline:
1. Greedy word alignment of the transcript against the reference text
2. Pronunciation and fluency derived from the word-match percentage
3. Weighted final score, including an optional relevance score supplied by
   an external judge

API Endpoints:
- POST /speaking/align: Word-by-word alignment only
- POST /speaking/score: Alignment plus the full score breakdown
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..matching import align_words
from ..models import AlignedWord, AlignmentResult, ScoreBreakdown
from ..normalize import dedupe_transcript
from ..scoring import compute_score
from ..settings import settings


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/speaking", tags=["speaking"])


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class AlignRequest(BaseModel):
	"""
	Reference sentence and the learner's transcript.
	"""
	reference_text: Optional[str] = None
	transcript: Optional[str] = None


class ScoreRequest(AlignRequest):
	"""
	Request model for scoring a spoken attempt.

	relevance_score comes from an external judge; when missing it counts as 0.
	"""
	relevance_score: Optional[float] = Field(default=None, description="0–100 relevance of the attempt to the topic")
	topic: str = "General"
	# Collapse ASR interim/final repeats before aligning
	dedupe: bool = False


class ScoreResponse(BaseModel):
	"""
	Final score with its breakdown and the per-word alignment.
	"""
	topic: str
	score: int
	breakdown: ScoreBreakdown
	words: List[AlignedWord]


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def _clip(text: Optional[str]) -> str:
	return (text or "").strip()[: settings.max_input_chars]


# ============================================================================
# API ENDPOINTS
# ============================================================================

@router.post("/align", response_model=AlignmentResult)
async def align(req: AlignRequest):
	"""Align a transcript against the reference text word by word.

	Args:
		req: Reference text and transcript (either may be empty)

	Returns:
		AlignmentResult with the word-match percentage and per-word details
	"""
	return align_words(_clip(req.reference_text), _clip(req.transcript), threshold=settings.word_match_threshold)


@router.post("/score", response_model=ScoreResponse)
async def score(req: ScoreRequest):
	"""Score a spoken attempt against its reference sentence.

	Args:
		req: Reference text, transcript and optional relevance score

	Returns:
		ScoreResponse with the final score, its breakdown and aligned words

	Raises:
		HTTPException: If the transcript is missing
	"""
	transcript = _clip(req.transcript)
	if not transcript:
		raise HTTPException(status_code=400, detail="Transcript missing")
	if req.dedupe:
		transcript = dedupe_transcript(transcript)

	alignment = align_words(_clip(req.reference_text), transcript, threshold=settings.word_match_threshold)
	breakdown = compute_score(alignment.word_match_percent, req.relevance_score)
	logger.info(
		"speaking score topic=%s word_match=%d final=%d",
		req.topic,
		breakdown.word_match,
		breakdown.final,
	)
	return ScoreResponse(
		topic=req.topic,
		score=breakdown.final,
		breakdown=breakdown,
		words=alignment.words,
	)
