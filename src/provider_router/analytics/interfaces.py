"""Analytics contracts that separate persistence from aggregation logic."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AttemptRecord(BaseModel):
    """Immutable record of a single provider invocation."""

    id: str
    timestamp: datetime = Field(default_factory=_utcnow)
    provider_id: str
    model: str
    success: bool
    latency: float = Field(..., ge=0)
    fallback: bool = False

    model_config = ConfigDict(frozen=True)


class IAnalyticsRepository(Protocol):
    """Persistence contract for analytics storage layers."""

    def save(self, record: AttemptRecord) -> None:
        """Persist the provided attempt record."""

    def find_by_date(self, start: datetime, end: datetime) -> List[AttemptRecord]:
        """Return records whose timestamps fall within the inclusive window."""

    def find_by_provider(self, provider_id: str) -> List[AttemptRecord]:
        """Return records for the specified provider id."""

    def all(self) -> List[AttemptRecord]:
        """Return every stored record in insertion order."""


class IAnalyticsAggregator(Protocol):
    """Business-logic layer that derives metrics from persisted records."""

    def calculate_success_rate(self, records: Sequence[AttemptRecord]) -> float:
        """Fraction of successful attempts, 0.0 when there are none."""

    def group_by_provider(
        self, records: Sequence[AttemptRecord]
    ) -> Dict[str, List[AttemptRecord]]:
        """Bucket records by provider id for downstream aggregations."""

    def calculate_percentiles(
        self, records: Sequence[AttemptRecord], metric: str
    ) -> Dict[str, float]:
        """Return p50/p95/p99 for the requested metric."""
