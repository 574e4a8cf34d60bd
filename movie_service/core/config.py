"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MOVIES_PATH = Path(__file__).resolve().parent.parent / "data" / "movies.json"
DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:8080",
    "http://localhost:1234",
    "http://movies.com",
)


class Settings(BaseSettings):
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=1234, alias="PORT")
    allowed_origins: tuple[str, ...] = Field(
        default=DEFAULT_ALLOWED_ORIGINS, alias="ALLOWED_ORIGINS"
    )
    movies_path: Path = Field(default=DEFAULT_MOVIES_PATH, alias="MOVIES_PATH")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
