"""Pure business-logic helpers for analytics aggregation."""

from __future__ import annotations

from typing import Dict, List, Sequence

from provider_router.analytics.interfaces import AttemptRecord, IAnalyticsAggregator


class AnalyticsAggregator(IAnalyticsAggregator):
    """Performs read-only calculations on attempt records."""

    def calculate_success_rate(self, records: Sequence[AttemptRecord]) -> float:
        if not records:
            return 0.0
        successes = sum(1 for record in records if record.success)
        return round(successes / len(records), 6)

    def calculate_average_latency(self, records: Sequence[AttemptRecord]) -> float:
        if not records:
            return 0.0
        return round(sum(record.latency for record in records) / len(records), 6)

    def group_by_provider(
        self, records: Sequence[AttemptRecord]
    ) -> Dict[str, List[AttemptRecord]]:
        grouped: Dict[str, List[AttemptRecord]] = {}
        for record in records:
            grouped.setdefault(record.provider_id, []).append(record)
        return grouped

    def calculate_percentiles(
        self, records: Sequence[AttemptRecord], metric: str
    ) -> Dict[str, float]:
        if metric != "latency":
            raise ValueError("metric must be 'latency'")
        if not records:
            return {"p50": 0.0, "p95": 0.0, "p99": 0.0}
        values = sorted(record.latency for record in records)
        return {
            "p50": self._percentile(values, 0.5),
            "p95": self._percentile(values, 0.95),
            "p99": self._percentile(values, 0.99),
        }

    @staticmethod
    def _percentile(values: Sequence[float], quantile: float) -> float:
        if not values:
            return 0.0
        index = (len(values) - 1) * quantile
        lower = int(index)
        upper = min(lower + 1, len(values) - 1)
        weight = index - lower
        return round(values[lower] * (1 - weight) + values[upper] * weight, 6)
