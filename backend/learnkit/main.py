import logging

from fastapi import FastAPI

from .settings import settings
from .routers import health
from .routers import practice
from .routers import speaking
from .routers import learning

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Learnkit Text Core API")
app.include_router(health.router)
app.include_router(practice.router)
app.include_router(speaking.router)
app.include_router(learning.router)


@app.get("/info")
def root():
	return {
		"status": "ok",
		"similarity_threshold": settings.similarity_threshold,
		"word_match_threshold": settings.word_match_threshold,
		"max_input_chars": settings.max_input_chars,
	}
