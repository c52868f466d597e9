"""Usage tracking facade that coordinates repository + aggregator."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from uuid import uuid4

from provider_router.analytics.aggregator import AnalyticsAggregator
from provider_router.analytics.interfaces import AttemptRecord, IAnalyticsRepository
from provider_router.domain.interfaces import IUsageTracker, ProviderStats, UsageSummary
from provider_router.domain.models import ProviderCapability


class UsageTracker(IUsageTracker):
    """High-level facade for recording attempts and producing summaries."""

    PERIOD_WINDOWS = {
        "last_hour": timedelta(hours=1),
        "last_24_hours": timedelta(days=1),
        "last_7_days": timedelta(days=7),
        "last_30_days": timedelta(days=30),
    }

    def __init__(
        self,
        repository: IAnalyticsRepository,
        aggregator: AnalyticsAggregator | None = None,
    ) -> None:
        self._repository = repository
        self._aggregator = aggregator or AnalyticsAggregator()

    def track_attempt(
        self,
        capability: ProviderCapability,
        *,
        success: bool,
        latency: float,
        fallback: bool = False,
    ) -> None:
        record = AttemptRecord(
            id=str(uuid4()),
            timestamp=datetime.now(timezone.utc),
            provider_id=capability.id,
            model=capability.model_id,
            success=success,
            latency=max(0.0, latency),
            fallback=fallback,
        )
        self._repository.save(record)

    def get_summary(self, period: str = "last_7_days") -> UsageSummary:
        """Return aggregate metrics for the requested period."""

        start, end = self._period_window(period)
        records = self._repository.find_by_date(start, end)
        return UsageSummary(
            period=period,
            total_attempts=len(records),
            successful_attempts=sum(1 for record in records if record.success),
            fallback_attempts=sum(1 for record in records if record.fallback),
            average_latency=self._aggregator.calculate_average_latency(records),
        )

    def provider_stats(self) -> Dict[str, ProviderStats]:
        grouped = self._aggregator.group_by_provider(self._repository.all())
        return {
            provider_id: ProviderStats(
                provider_id=provider_id,
                call_count=len(records),
                success_count=sum(1 for record in records if record.success),
                average_latency=self._aggregator.calculate_average_latency(records),
            )
            for provider_id, records in grouped.items()
        }

    def to_dataframe(self) -> Any:
        """Export recent attempts to a pandas DataFrame."""

        try:
            import pandas as pd  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pandas is required for dataframe export") from exc

        start, end = self._period_window("last_30_days")
        records = self._repository.find_by_date(start, end)
        data = [record.model_dump() for record in records]
        return pd.DataFrame(data)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _period_window(self, period: str) -> tuple[datetime, datetime]:
        delta = self.PERIOD_WINDOWS.get(period)
        if delta is None:
            raise ValueError(f"Unsupported period '{period}'")
        end = datetime.now(timezone.utc)
        start = end - delta
        return start, end
