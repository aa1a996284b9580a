"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    sfc4q_env: str = "development"
    sfc4q_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Defaults for requests that omit them
    default_level: float = 2.0
    default_curve: str = "morton"
    default_base: str = "4h"

    # Largest level the HTTP surface accepts
    max_level: float = 16.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
