"""FastAPI entrypoint wiring the movie store, validation and origin gate."""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI, Header, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from movie_service.core.cors import OriginGate, get_origin_gate
from movie_service.db import MovieNotFound, MovieRepository, get_repository
from movie_service.models import Movie
from movie_service.schemas import (
    MovieValidationError,
    format_error_list,
    validate_movie,
    validate_partial_movie,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Load the seed dataset before serving so a broken file fails fast."""

    repo = get_repository()
    logger.info("Serving %d movies", len(repo))
    yield


def apply_cors_headers(
    response: Response,
    origin: str | None = Header(default=None),
    gate: OriginGate = Depends(get_origin_gate),
) -> None:
    response.headers.update(gate.headers_for(origin))


async def request_has_body(request: Request) -> bool:
    """Tell an absent body apart from a JSON ``null`` one."""

    return bool((await request.body()).strip())


app = FastAPI(title="Movies API", lifespan=lifespan)
router = APIRouter(prefix="/movies", tags=["movies"], dependencies=[Depends(apply_cors_headers)])


@app.get("/")
def read_root() -> dict[str, str]:
    return {"message": "hola mundo"}


@router.get("", response_model=list[Movie])
def list_movies(
    genre: str | None = None,
    repo: MovieRepository = Depends(get_repository),
) -> list[Movie]:
    """Return every movie, or only those tagged with ``genre`` (any case)."""

    if genre:
        return repo.filter_by_genre(genre)
    return repo.list_all()


@router.get("/{movie_id}", response_model=Movie)
def get_movie(movie_id: str, repo: MovieRepository = Depends(get_repository)) -> Movie:
    return repo.get(movie_id)


@router.post("", response_model=Movie, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=Movie, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_movie(
    payload: Any = Body(default=None),
    repo: MovieRepository = Depends(get_repository),
) -> Movie:
    data = validate_movie(payload).unwrap()
    movie = repo.add(Movie(id=str(uuid.uuid4()), **data))
    logger.info("Created movie %s (%s)", movie.id, movie.title)
    return movie


@router.patch("/{movie_id}", response_model=Movie)
def update_movie(
    movie_id: str,
    payload: Any = Body(default=None),
    has_body: bool = Depends(request_has_body),
    repo: MovieRepository = Depends(get_repository),
) -> Movie:
    """Merge the submitted fields over the stored movie.

    The body is validated before the id is looked up, so an invalid body on an
    unknown id reports 400 rather than 404. A request without a body is an
    empty update; a JSON ``null`` body is rejected like any other non-object.
    """

    changes = validate_partial_movie(payload if has_body else {}).unwrap()
    movie = repo.update(movie_id, changes)
    logger.info("Updated movie %s fields=%s", movie_id, sorted(changes))
    return movie


@router.delete("/{movie_id}")
def delete_movie(movie_id: str, repo: MovieRepository = Depends(get_repository)) -> dict[str, str]:
    repo.delete(movie_id)
    logger.info("Deleted movie %s", movie_id)
    return {"message": "Movie deleted"}


@router.options("/{movie_id}")
def preflight_movie(
    movie_id: str,
    origin: str | None = Header(default=None),
    gate: OriginGate = Depends(get_origin_gate),
) -> Response:
    return Response(status_code=status.HTTP_200_OK, headers=gate.headers_for(origin, preflight=True))


app.include_router(router)


@app.exception_handler(MovieNotFound)
async def movie_not_found_handler(request: Request, exc: MovieNotFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": "Movie not found"},
        headers=_cors_headers_for(request),
    )


@app.exception_handler(MovieValidationError)
async def movie_validation_handler(request: Request, exc: MovieValidationError) -> JSONResponse:
    logger.debug("Rejected movie payload: %s", exc.errors)
    return _bad_request(request, exc.errors)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _bad_request(request, format_error_list(list(exc.errors())))


def _bad_request(request: Request, errors: list[dict[str, Any]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": errors},
        headers=_cors_headers_for(request),
    )


def _cors_headers_for(request: Request) -> dict[str, str]:
    if not request.url.path.startswith(router.prefix):
        return {}
    return get_origin_gate().headers_for(request.headers.get("origin"))
