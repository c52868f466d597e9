"""Process-local analytics repository used when no database is configured."""

from __future__ import annotations

from datetime import datetime
from threading import Lock
from typing import List

from .interfaces import AttemptRecord, IAnalyticsRepository


class InMemoryRepository(IAnalyticsRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._records: List[AttemptRecord] = []

    def save(self, record: AttemptRecord) -> None:
        with self._lock:
            self._records.append(record)

    def find_by_date(self, start: datetime, end: datetime) -> List[AttemptRecord]:
        with self._lock:
            return [r for r in self._records if start <= r.timestamp <= end]

    def find_by_provider(self, provider_id: str) -> List[AttemptRecord]:
        with self._lock:
            return [r for r in self._records if r.provider_id == provider_id]

    def all(self) -> List[AttemptRecord]:
        with self._lock:
            return list(self._records)
