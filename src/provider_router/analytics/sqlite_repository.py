"""SQLite-backed analytics repository."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Tuple

from .interfaces import AttemptRecord, IAnalyticsRepository

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS attempts (
    id TEXT PRIMARY KEY,
    timestamp REAL NOT NULL,
    provider_id TEXT NOT NULL,
    model TEXT NOT NULL,
    success INTEGER NOT NULL,
    latency_ms INTEGER NOT NULL,
    fallback INTEGER NOT NULL
);
"""

_INSERT_SQL = """
INSERT INTO attempts (id, timestamp, provider_id, model, success, latency_ms, fallback)
VALUES (?, ?, ?, ?, ?, ?, ?)
ON CONFLICT(id) DO UPDATE SET
    timestamp=excluded.timestamp,
    provider_id=excluded.provider_id,
    model=excluded.model,
    success=excluded.success,
    latency_ms=excluded.latency_ms,
    fallback=excluded.fallback;
"""

_SELECT_COLUMNS = "SELECT id, timestamp, provider_id, model, success, latency_ms, fallback FROM attempts"

_SELECT_BY_DATE_SQL = f"""
{_SELECT_COLUMNS}
WHERE timestamp BETWEEN ? AND ?
ORDER BY timestamp ASC;
"""

_SELECT_BY_PROVIDER_SQL = f"""
{_SELECT_COLUMNS}
WHERE provider_id = ?
ORDER BY timestamp ASC;
"""

_SELECT_ALL_SQL = f"""
{_SELECT_COLUMNS}
ORDER BY rowid ASC;
"""

_Row = Tuple[str, float, str, str, int, int, int]


class SQLiteRepository(IAnalyticsRepository):
    """Lightweight repository focused on persistence only."""

    def __init__(self, db_path: str | Path):
        self._db_path = str(db_path)
        self._ensure_schema()

    def save(self, record: AttemptRecord) -> None:
        with sqlite3.connect(self._db_path) as conn:
            conn.execute(
                _INSERT_SQL,
                (
                    record.id,
                    record.timestamp.timestamp(),
                    record.provider_id,
                    record.model,
                    1 if record.success else 0,
                    int(record.latency * 1000),
                    1 if record.fallback else 0,
                ),
            )
            conn.commit()

    def find_by_date(self, start: datetime, end: datetime) -> List[AttemptRecord]:
        with sqlite3.connect(self._db_path) as conn:
            rows = conn.execute(
                _SELECT_BY_DATE_SQL,
                (start.timestamp(), end.timestamp()),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def find_by_provider(self, provider_id: str) -> List[AttemptRecord]:
        with sqlite3.connect(self._db_path) as conn:
            rows = conn.execute(_SELECT_BY_PROVIDER_SQL, (provider_id,)).fetchall()
        return [self._row_to_record(row) for row in rows]

    def all(self) -> List[AttemptRecord]:
        with sqlite3.connect(self._db_path) as conn:
            rows = conn.execute(_SELECT_ALL_SQL).fetchall()
        return [self._row_to_record(row) for row in rows]

    def _ensure_schema(self) -> None:
        with sqlite3.connect(self._db_path) as conn:
            conn.execute(_CREATE_TABLE_SQL)
            conn.commit()

    @staticmethod
    def _row_to_record(row: _Row) -> AttemptRecord:
        id_, timestamp, provider_id, model, success, latency_ms, fallback = row
        return AttemptRecord(
            id=id_,
            timestamp=datetime.fromtimestamp(float(timestamp), tz=timezone.utc),
            provider_id=provider_id,
            model=model,
            success=bool(success),
            latency=latency_ms / 1000,
            fallback=bool(fallback),
        )
