import builtins
import sys
from datetime import datetime, timedelta, timezone

import pytest

from provider_router.analytics.interfaces import AttemptRecord
from provider_router.analytics.memory_repository import InMemoryRepository
from provider_router.analytics.tracker import UsageTracker
from provider_router.domain.models import ProviderCapability


def _capability(provider_id: str) -> ProviderCapability:
    return ProviderCapability(
        id=provider_id,
        family=provider_id.split(":", 1)[0],
        cost_efficiency=5,
        speed=5,
        accuracy=5,
        context_window_tokens=10_000,
    )


def _record(provider_id: str, minutes_ago: int, success: bool = True) -> AttemptRecord:
    return AttemptRecord(
        id=f"{provider_id}-{minutes_ago}",
        timestamp=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        provider_id=provider_id,
        model=provider_id.split(":", 1)[-1],
        latency=0.2,
        success=success,
    )


def test_track_attempt_persists_record():
    repo = InMemoryRepository()
    tracker = UsageTracker(repo)

    tracker.track_attempt(
        _capability("openai:gpt-4o"), success=False, latency=1.5, fallback=True
    )

    record = repo.all()[0]
    assert record.provider_id == "openai:gpt-4o"
    assert record.model == "gpt-4o"
    assert record.success is False
    assert record.fallback is True
    assert record.latency == 1.5
    assert record.id


def test_get_summary_counts_window_only():
    repo = InMemoryRepository()
    repo.save(_record("openai:gpt-4o", 1))
    repo.save(_record("gemini:gemini-2.5-flash", 2, success=False))
    repo.save(_record("openai:gpt-4o", 60 * 48))
    tracker = UsageTracker(repo)

    summary = tracker.get_summary("last_24_hours")

    assert summary.period == "last_24_hours"
    assert summary.total_attempts == 2
    assert summary.successful_attempts == 1
    assert summary.fallback_attempts == 0
    assert summary.average_latency == pytest.approx(0.2)


def test_get_summary_rejects_unknown_period():
    tracker = UsageTracker(InMemoryRepository())
    with pytest.raises(ValueError):
        tracker.get_summary("last_century")


def test_provider_stats_groups_by_provider():
    repo = InMemoryRepository()
    repo.save(_record("openai:gpt-4o", 1))
    repo.save(_record("openai:gpt-4o", 2, success=False))
    repo.save(_record("gemma:gemma-2-9b", 3))
    tracker = UsageTracker(repo)

    stats = tracker.provider_stats()

    assert stats["openai:gpt-4o"].call_count == 2
    assert stats["openai:gpt-4o"].success_rate == pytest.approx(0.5)
    assert stats["gemma:gemma-2-9b"].success_count == 1


def test_to_dataframe_returns_rows(monkeypatch):
    repo = InMemoryRepository()
    repo.save(_record("openai:gpt-4o", 5))
    tracker = UsageTracker(repo)

    class FakePandasModule:
        def __init__(self):
            self.data = None

        def DataFrame(self, data):
            self.data = data
            return data

    fake_pd = FakePandasModule()
    monkeypatch.setitem(sys.modules, "pandas", fake_pd)

    df = tracker.to_dataframe()

    assert df[0]["provider_id"] == "openai:gpt-4o"
    assert fake_pd.data == df


def test_to_dataframe_raises_without_pandas(monkeypatch):
    tracker = UsageTracker(InMemoryRepository())

    real_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "pandas":
            raise ImportError("no pandas")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)

    with pytest.raises(RuntimeError):
        tracker.to_dataframe()
