"""In-memory movie store and dataset loading."""

from __future__ import annotations

import json
import logging
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from movie_service.core.config import get_settings
from movie_service.models import Movie

logger = logging.getLogger(__name__)


class MovieNotFound(Exception):
    """Raised when no movie with the given id is in the collection."""

    def __init__(self, movie_id: str) -> None:
        super().__init__(f"Movie {movie_id!r} not found")
        self.movie_id = movie_id


class MovieDatasetError(Exception):
    """Raised when the seed dataset cannot be read or fails validation."""


def load_movies(path: Path) -> list[Movie]:
    """Read the JSON dataset and validate every record with the full schema."""

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise MovieDatasetError(f"Cannot read movie dataset at {path}: {exc}") from exc
    if not isinstance(raw, list):
        raise MovieDatasetError(f"Movie dataset at {path} must be a JSON array")

    movies = []
    for position, item in enumerate(raw):
        try:
            movies.append(Movie.model_validate(item))
        except ValidationError as exc:
            raise MovieDatasetError(f"Invalid movie at index {position}: {exc}") from exc
    return movies


class MovieRepository:
    """Ordered collection of movies held in process memory.

    FastAPI runs sync endpoints in a thread pool, so every operation takes the
    same lock and a handler never observes a half-applied mutation.
    """

    def __init__(self, movies: Iterable[Movie] = ()) -> None:
        self._movies: list[Movie] = list(movies)
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, path: Path) -> MovieRepository:
        movies = load_movies(path)
        logger.info("Loaded %d movies from %s", len(movies), path)
        return cls(movies)

    def __len__(self) -> int:
        with self._lock:
            return len(self._movies)

    def list_all(self) -> list[Movie]:
        with self._lock:
            return list(self._movies)

    def filter_by_genre(self, genre: str) -> list[Movie]:
        with self._lock:
            return [movie for movie in self._movies if movie.has_genre(genre)]

    def get(self, movie_id: str) -> Movie:
        with self._lock:
            return self._movies[self._index_of(movie_id)]

    def add(self, movie: Movie) -> Movie:
        with self._lock:
            self._movies.append(movie)
        return movie

    def update(self, movie_id: str, changes: dict[str, Any]) -> Movie:
        with self._lock:
            index = self._index_of(movie_id)
            updated = self._movies[index].merged(changes)
            self._movies[index] = updated
        return updated

    def delete(self, movie_id: str) -> Movie:
        with self._lock:
            return self._movies.pop(self._index_of(movie_id))

    def _index_of(self, movie_id: str) -> int:
        for index, movie in enumerate(self._movies):
            if movie.id == movie_id:
                return index
        raise MovieNotFound(movie_id)


@lru_cache(maxsize=1)
def get_repository() -> MovieRepository:
    """FastAPI dependency returning the process-wide store, loaded on first use."""

    return MovieRepository.from_file(get_settings().movies_path)
