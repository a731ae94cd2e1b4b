import logging

import pytest

from worduel.backend import migrate


class _RecordingCursor:
    def __init__(self) -> None:
        self.statements: list[str] = []

    def execute(self, sql: str) -> None:
        self.statements.append(sql)

    def __enter__(self) -> "_RecordingCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


class _RecordingConnection:
    def __init__(self) -> None:
        self.cursor_instance = _RecordingCursor()
        self.committed = False

    def cursor(self) -> _RecordingCursor:
        return self.cursor_instance

    def commit(self) -> None:
        self.committed = True


def test_apply_schema_runs_bundled_sql_and_commits(caplog) -> None:
    conn = _RecordingConnection()

    with caplog.at_level(logging.INFO, logger="worduel.backend.migrate"):
        migrate.apply_schema(conn)

    assert len(conn.cursor_instance.statements) == 1
    assert "CREATE TABLE IF NOT EXISTS games" in conn.cursor_instance.statements[0]
    assert "invites_one_pending_idx" in conn.cursor_instance.statements[0]
    assert conn.committed is True
    assert "Applied schema db_schema.sql" in caplog.text


def test_main_requires_database_url(monkeypatch) -> None:
    monkeypatch.delenv("WORDUEL_DATABASE_URL", raising=False)

    with pytest.raises(RuntimeError, match="WORDUEL_DATABASE_URL"):
        migrate.main()
