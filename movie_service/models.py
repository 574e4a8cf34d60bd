"""Movie record model.

Every record held by the in-memory store is a ``Movie``. The annotated field
types below are shared with the request schemas so that the stored records and
incoming payloads obey exactly the same rules.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, get_args

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    HttpUrl,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)

Genre = Literal[
    "Action",
    "Adventure",
    "Animation",
    "Biography",
    "Comedy",
    "Crime",
    "Drama",
    "Fantasy",
    "Horror",
    "Romance",
    "Sci-Fi",
    "Thriller",
]
GENRES: tuple[str, ...] = get_args(Genre)

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_poster_url(value: str) -> str:
    # Keep the submitted string; HttpUrl would normalise it.
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("Poster must be a valid URL") from None
    return value


def _integral_float_to_int(value: Any) -> Any:
    # JSON has one number type; 2020.0 is a year, 2020.5 is not.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Title = Annotated[Text, Field(description="Movie title")]
Genres = Annotated[list[Genre], Field(min_length=1, description="Genre tags")]
Year = Annotated[int, BeforeValidator(_integral_float_to_int), Field(ge=1900, le=2100, description="Release year")]
Director = Text
Duration = Annotated[int, BeforeValidator(_integral_float_to_int), Field(gt=0, description="Running time in minutes")]
Rate = Annotated[float, Field(ge=0, le=10)]
Poster = Annotated[str, AfterValidator(_check_poster_url)]


class Movie(BaseModel):
    """A movie as stored in the catalogue."""

    model_config = ConfigDict(strict=True, extra="ignore")

    id: str
    title: Title
    genre: Genres
    year: Year
    director: Director
    duration: Duration
    rate: Rate
    poster: Poster

    def merged(self, changes: dict[str, Any]) -> Movie:
        """Return a copy with ``changes`` written over the current fields."""

        changes = {key: value for key, value in changes.items() if key != "id"}
        return self.model_copy(update=changes)

    def has_genre(self, genre: str) -> bool:
        wanted = genre.lower()
        return any(tag.lower() == wanted for tag in self.genre)
