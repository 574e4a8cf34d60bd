"""Request payload validation.

``validate_movie`` and ``validate_partial_movie`` never raise on bad input;
they return a ``ValidationResult`` that either carries the normalised data or
the list of field-level violations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from movie_service.models import Director, Duration, Genres, Poster, Rate, Title, Year


class MovieValidationError(Exception):
    """Raised by handlers when a request body fails validation."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


@dataclass(slots=True, frozen=True)
class ValidationResult:
    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None

    @property
    def success(self) -> bool:
        return self.errors is None

    def unwrap(self) -> dict[str, Any]:
        """Return the validated data or raise ``MovieValidationError``."""

        if self.errors is not None:
            raise MovieValidationError(self.errors)
        return self.data or {}


class MovieCreate(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    title: Title
    genre: Genres
    year: Year
    director: Director
    duration: Duration
    rate: Rate = 5.0
    poster: Poster


class MovieUpdate(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    title: Title | None = None
    genre: Genres | None = None
    year: Year | None = None
    director: Director | None = None
    duration: Duration | None = None
    rate: Rate | None = None
    poster: Poster | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # Omitting a field leaves it untouched; null is not a way to clear it.
        if value is None:
            raise ValueError("must not be null")
        return value


def validate_movie(payload: Any) -> ValidationResult:
    """Validate a complete movie payload for creation."""

    try:
        movie = MovieCreate.model_validate(payload)
    except ValidationError as exc:
        return ValidationResult(errors=_format_errors(exc))
    return ValidationResult(data=movie.model_dump())


def validate_partial_movie(payload: Any) -> ValidationResult:
    """Validate an update payload; only the submitted fields end up in ``data``."""

    try:
        changes = MovieUpdate.model_validate(payload)
    except ValidationError as exc:
        return ValidationResult(errors=_format_errors(exc))
    return ValidationResult(data=changes.model_dump(exclude_unset=True))


def format_error_list(raw_errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten pydantic-style error dicts into the API error shape."""

    formatted = []
    for error in raw_errors:
        loc = [str(part) for part in error.get("loc", ())]
        formatted.append(
            {
                "field": ".".join(loc) or "body",
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "value_error"),
            }
        )
    return formatted


def _format_errors(exc: ValidationError) -> list[dict[str, Any]]:
    return format_error_list(exc.errors(include_url=False))
