from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from .matching import WORD_MATCH_THRESHOLD
from .similarity import SIMILARITY_THRESHOLD

class Settings(BaseSettings):
	# Jaccard score above which generated text counts as a near-duplicate
	similarity_threshold: float = Field(default=SIMILARITY_THRESHOLD, ge=0.0, le=1.0, validation_alias="SIMILARITY_THRESHOLD")
	# Largest normalized edit distance still counted as a spoken-word match
	word_match_threshold: float = Field(default=WORD_MATCH_THRESHOLD, ge=0.0, le=1.0, validation_alias="WORD_MATCH_THRESHOLD")

	# Longer request texts are truncated before parsing/scoring
	max_input_chars: int = Field(default=8000, ge=1, validation_alias="MAX_INPUT_CHARS")

	# Logging
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	# How much of an incoming text is echoed at DEBUG level
	log_preview_chars: int = Field(default=500, ge=0, validation_alias="LOG_PREVIEW_CHARS")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
