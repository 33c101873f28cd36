"""
Configuration and application state management.
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from fastapi import HTTPException

if TYPE_CHECKING:
    from .database import Database

# Load environment variables
load_dotenv()


def _parse_origins(value: str | None) -> list[str]:
    """Parse a comma separated list of CORS origins."""
    if not value:
        return ["*"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Config:
    """Application configuration from environment."""
    DB_PATH: Path = Path(os.getenv("DB_PATH", "./data/inkfeed.db"))
    UPLOAD_DIR: Path = Path(os.getenv("UPLOAD_DIR", "./data/uploads"))
    PORT: int = int(os.getenv("PORT", "9080"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Signs bearer tokens. Override in production.
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-change-me")
    TOKEN_MAX_AGE: int = int(os.getenv("TOKEN_MAX_AGE", str(7 * 24 * 3600)))  # seconds
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Requests per minute per IP, <= 0 disables limiting
    RATE_LIMIT_PER_MINUTE: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "120"))
    # Views and likes per minute per IP for one article
    COUNTER_RATE_LIMIT_PER_MINUTE: int = int(os.getenv("COUNTER_RATE_LIMIT_PER_MINUTE", "30"))

    CORS_ORIGINS: list[str] = _parse_origins(os.getenv("CORS_ORIGINS"))

    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))


config = Config()


class AppState:
    """Shared application state."""
    db: "Database | None" = None


state = AppState()


def get_db() -> "Database":
    """Dependency to get database instance."""
    if not state.db:
        raise HTTPException(status_code=500, detail="Database not initialized")
    return state.db
