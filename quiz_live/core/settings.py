"""Runtime configuration, read from ``QUIZ_LIVE_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from quiz_live.constants.network_constants import (
    CORS_ALLOWED_ORIGINS,
    DEFAULT_HOST,
    DEFAULT_PORT,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="QUIZ_LIVE_", env_file=".env", extra="ignore")

    manager_password: str = "PASSWORD"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    questions_file: Path = Path("data") / "questions.json"
    cors_allowed_origins: str = CORS_ALLOWED_ORIGINS
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
