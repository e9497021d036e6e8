from __future__ import annotations
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class QAPair(BaseModel):
	model_config = ConfigDict(frozen=True)
	# 1-based, sequential in document order
	id: int = Field(ge=1)
	question: str = Field(min_length=1)
	answer: str = Field(min_length=1)


class ExtractionResult(BaseModel):
	model_config = ConfigDict(frozen=True)
	pairs: Tuple[QAPair, ...] = ()
	# Name of the parser strategy that produced the pairs (None when nothing parsed)
	strategy: Optional[str] = None
	confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class AlignedWord(BaseModel):
	model_config = ConfigDict(frozen=True)
	# Position in the expected word sequence
	index: int = Field(ge=0)
	expected: str
	spoken: str = ""
	matched: bool = False
	normalized_distance: float = Field(default=1.0, ge=0.0, le=1.0)
	confidence: int = Field(default=0, ge=0, le=100)


class AlignmentResult(BaseModel):
	model_config = ConfigDict(frozen=True)
	word_match_percent: int = Field(ge=0, le=100)
	words: List[AlignedWord] = Field(default_factory=list)


class ScoreBreakdown(BaseModel):
	model_config = ConfigDict(frozen=True)
	word_match: int = Field(ge=0, le=100)
	pronunciation: int = Field(ge=0, le=100)
	fluency: int = Field(ge=0, le=100)
	relevance: int = Field(ge=0, le=100)
	final: int = Field(ge=0, le=100)
