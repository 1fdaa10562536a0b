"""Application configuration loaded from the environment."""

from __future__ import annotations

import os
from typing import List

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Config:
    ENV_NAME = os.getenv("FUTUREWORTH_ENV", "development")
    CORS_ORIGINS = _split_origins(os.getenv("FUTUREWORTH_CORS_ORIGINS", DEFAULT_CORS_ORIGINS))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    API_VERSION = os.getenv("API_VERSION", "1.0.0")
    TESTING = False


class TestingConfig(Config):
    ENV_NAME = "testing"
    LOG_LEVEL = "DEBUG"
    TESTING = True
