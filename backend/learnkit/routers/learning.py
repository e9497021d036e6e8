from __future__ import annotations
from typing import Optional
from fastapi import APIRouter
from pydantic import BaseModel
from ..normalize import clean_math_output
from ..settings import settings
from ..similarity import jaccard_similarity

router = APIRouter(prefix="/learning", tags=["learning"])


class SimilarityRequest(BaseModel):
	# Text the candidate must not copy (e.g. a worked example shown to the student)
	reference: Optional[str] = None
	candidate: Optional[str] = None


class SimilarityResponse(BaseModel):
	score: float
	threshold: float
	too_similar: bool


class CleanMathRequest(BaseModel):
	text: Optional[str] = None


class CleanMathResponse(BaseModel):
	result: str


@router.post("/similarity", response_model=SimilarityResponse)
async def similarity(req: SimilarityRequest):
	threshold = settings.similarity_threshold
	score = jaccard_similarity(req.reference, req.candidate)
	# Above the threshold the caller should regenerate the candidate
	return SimilarityResponse(score=score, threshold=threshold, too_similar=score > threshold)


@router.post("/clean-math", response_model=CleanMathResponse)
async def clean_math(req: CleanMathRequest):
	text = (req.text or "")[: settings.max_input_chars]
	return CleanMathResponse(result=clean_math_output(text))
