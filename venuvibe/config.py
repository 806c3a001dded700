"""
VenuVibe — Centralized configuration.

Loads all settings from .env and validates them.
Storage adapters and the auth service fall back to these values when
they are not given explicit arguments.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (one level up from venuvibe/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

STORAGE_BACKENDS = ("sqlite", "memory")


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Storage backend: "sqlite" | "memory"
    STORAGE_BACKEND: str = "sqlite"

    # SQLite key-value file (only used when STORAGE_BACKEND=sqlite)
    DATABASE_PATH: str = "data/venuvibe.db"

    # Password hashing work factor
    BCRYPT_ROUNDS: int = 12

    LOG_LEVEL: str = "INFO"

    @field_validator("STORAGE_BACKEND", mode="before")
    @classmethod
    def normalize_backend(cls, v: str) -> str:
        return str(v).strip().lower()

    @field_validator("BCRYPT_ROUNDS", mode="before")
    @classmethod
    def parse_rounds(cls, v: str | int) -> int:
        return int(v)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return str(v).strip().upper()


def _load_settings() -> Settings:
    """Load settings from environment, validating backend and hash cost."""
    backend = os.getenv("STORAGE_BACKEND", "sqlite").strip().lower()
    rounds = os.getenv("BCRYPT_ROUNDS", "12")

    if backend not in STORAGE_BACKENDS:
        print(
            f"ERROR: STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}",
            file=sys.stderr,
        )
        sys.exit(1)

    if not rounds.strip().isdigit() or not 4 <= int(rounds) <= 31:
        print("ERROR: BCRYPT_ROUNDS must be an integer between 4 and 31", file=sys.stderr)
        sys.exit(1)

    return Settings(
        STORAGE_BACKEND=backend,
        DATABASE_PATH=os.getenv("DATABASE_PATH", "data/venuvibe.db"),
        BCRYPT_ROUNDS=rounds,
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
    )


# Singleton — imported by all other modules as:
#   from venuvibe.config import settings
settings = _load_settings()
