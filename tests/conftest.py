import sys
from pathlib import Path

import pytest

# Add backend to sys.path so we can import learnkit without installing
BACKEND_PATH = Path(__file__).resolve().parent.parent / "backend"
if BACKEND_PATH.as_posix() not in sys.path:
    sys.path.insert(0, BACKEND_PATH.as_posix())


@pytest.fixture
def client():
    """FastAPI test client for the whole app."""
    from fastapi.testclient import TestClient
    from learnkit.main import app

    return TestClient(app)


@pytest.fixture
def worksheet_text():
    """Two questions with answer markers on their own lines."""
    return "What is 2+2?\nAns: 4\nWhat is the capital of France?\nAnswer: Paris"
