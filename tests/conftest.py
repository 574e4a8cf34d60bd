import pytest
from fastapi.testclient import TestClient

from movie_service.core.config import DEFAULT_MOVIES_PATH, get_settings
from movie_service.core.cors import get_origin_gate
from movie_service.db import MovieRepository, get_repository
from movie_service.main import app


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    # Keep the origin allow-list at its defaults regardless of the host env
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    monkeypatch.delenv("MOVIES_PATH", raising=False)
    get_settings.cache_clear()
    get_origin_gate.cache_clear()
    yield
    get_settings.cache_clear()
    get_origin_gate.cache_clear()


@pytest.fixture
def repo():
    return MovieRepository.from_file(DEFAULT_MOVIES_PATH)


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def new_movie():
    return {
        "title": "X",
        "genre": ["Drama"],
        "year": 2020,
        "director": "D",
        "duration": 100,
        "rate": 7.5,
        "poster": "http://x/p.jpg",
    }
