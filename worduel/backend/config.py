"""Configuration helpers for backend runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class BackendSettings:
    database_url: str | None
    host: str
    port: int
    default_rounds: int = 3
    words_file: Path | None = None
    log_level: str = "INFO"


def load_settings() -> BackendSettings:
    port_raw = os.getenv("WORDUEL_PORT", "8000")
    rounds_raw = os.getenv("WORDUEL_DEFAULT_ROUNDS", "3")
    words_file = os.getenv("WORDUEL_WORDS_FILE")
    return BackendSettings(
        database_url=os.getenv("WORDUEL_DATABASE_URL"),
        host=os.getenv("WORDUEL_HOST", "127.0.0.1"),
        port=int(port_raw),
        default_rounds=int(rounds_raw),
        words_file=Path(words_file) if words_file else None,
        log_level=os.getenv("WORDUEL_LOG_LEVEL", "INFO").upper(),
    )
