"""Process-wide running reliability score per provider."""

from __future__ import annotations

from dataclasses import dataclass, replace
from threading import Lock
from typing import Dict

INITIAL_SCORE = 5.0
MIN_SCORE = 1.0
MAX_SCORE = 10.0
SUCCESS_REWARD = 0.1
FAILURE_PENALTY = 0.2


@dataclass(frozen=True)
class PerformanceEntry:
    score: float = INITIAL_SCORE
    successes: int = 0
    failures: int = 0

    @property
    def attempts(self) -> int:
        return self.successes + self.failures


class PerformanceLedger:
    """Thread-safe map of provider id to ``PerformanceEntry``.

    Failures are penalized twice as fast as successes are rewarded. Entries
    are created on the first recorded outcome and live as long as the ledger.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: Dict[str, PerformanceEntry] = {}

    def get_score(self, provider_id: str) -> float:
        with self._lock:
            entry = self._entries.get(provider_id)
        return entry.score if entry is not None else INITIAL_SCORE

    def record_outcome(self, provider_id: str, success: bool) -> None:
        with self._lock:
            entry = self._entries.get(provider_id, PerformanceEntry())
            if success:
                entry = replace(
                    entry,
                    score=min(MAX_SCORE, entry.score + SUCCESS_REWARD),
                    successes=entry.successes + 1,
                )
            else:
                entry = replace(
                    entry,
                    score=max(MIN_SCORE, entry.score - FAILURE_PENALTY),
                    failures=entry.failures + 1,
                )
            self._entries[provider_id] = entry

    def entry(self, provider_id: str) -> PerformanceEntry:
        with self._lock:
            return self._entries.get(provider_id, PerformanceEntry())

    def snapshot(self) -> Dict[str, PerformanceEntry]:
        with self._lock:
            return dict(self._entries)
