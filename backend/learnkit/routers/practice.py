from __future__ import annotations
import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from ..models import QAPair
from ..normalize import sanitize_pairs
from ..qa_extract import extract_qa
from ..settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/practice", tags=["practice"])


class AnalyzeRequest(BaseModel):
	# Pasted text or the output of an OCR step run by the caller
	text: Optional[str] = None


class AnalyzeResponse(BaseModel):
	type: str = "qa"
	source_text: str
	questions: List[QAPair]
	strategy: Optional[str] = None
	confidence: float = 0.0


class QAItem(BaseModel):
	question: Optional[str] = None
	answer: Optional[str] = None


class SanitizeRequest(BaseModel):
	questions: List[QAItem] = Field(default_factory=list)


class SanitizeResponse(BaseModel):
	questions: List[QAPair]


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(req: AnalyzeRequest):
	text = (req.text or "").strip()
	if not text:
		raise HTTPException(status_code=400, detail="No text found in request (provide text).")
	# Optional safety clamp to avoid pathological inputs
	text = text[: settings.max_input_chars]
	logger.debug("extracted text preview: %r", text[: settings.log_preview_chars])

	result = extract_qa(text)
	if not result.pairs:
		# Caller decides whether to fall back to generating questions
		raise HTTPException(status_code=422, detail="Could not extract questions from text")
	logger.info("parsed QAs count: %d (strategy=%s)", len(result.pairs), result.strategy)
	return AnalyzeResponse(
		source_text=text,
		questions=list(result.pairs),
		strategy=result.strategy,
		confidence=result.confidence,
	)


@router.post("/sanitize", response_model=SanitizeResponse)
async def sanitize(req: SanitizeRequest):
	# Clean pairs produced elsewhere (e.g. a generator) the same way parsed ones are
	return SanitizeResponse(questions=sanitize_pairs(req.questions))
