"""Create the games and invites tables in PostgreSQL."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from worduel.backend.config import load_settings
from worduel.backend.server import LOG_FORMAT

SCHEMA_FILE = Path(__file__).with_name("db_schema.sql")

logger = logging.getLogger(__name__)


def apply_schema(conn: Any, schema_file: Path = SCHEMA_FILE) -> None:
    with conn.cursor() as cur:
        cur.execute(schema_file.read_text(encoding="utf-8"))
    conn.commit()
    logger.info("Applied schema %s", schema_file.name)


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    if not settings.database_url:
        raise RuntimeError("WORDUEL_DATABASE_URL is required for migration")

    import psycopg

    with psycopg.connect(settings.database_url) as conn:
        apply_schema(conn)


if __name__ == "__main__":
    main()
