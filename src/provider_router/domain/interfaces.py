"""Domain-level interfaces defining contracts for routing collaborators."""

from __future__ import annotations

from typing import Dict, Protocol, Sequence

from pydantic import BaseModel

from .models import ProviderCapability, ScoredCandidate, TaskDescriptor


class ProviderStats(BaseModel):
    """Per-provider usage counters derived from recorded attempts."""

    provider_id: str
    call_count: int
    success_count: int
    average_latency: float

    @property
    def success_rate(self) -> float:
        if not self.call_count:
            return 0.0
        return self.success_count / self.call_count


class UsageSummary(BaseModel):
    """Aggregated usage metrics across a reporting window."""

    period: str
    total_attempts: int
    successful_attempts: int
    fallback_attempts: int
    average_latency: float


class IProviderClient(Protocol):
    """Contract every provider family client must satisfy."""

    def invoke(self, model_id: str, prompt: str, timeout: float) -> str:
        """Send the prompt to ``model_id`` and return the generated text.

        Raises ``ProviderInvocationError`` (or any exception) on failure and
        ``ProviderTimeoutError`` when ``timeout`` seconds elapse.
        """


class IPerformanceLedger(Protocol):
    """Running per-provider reliability score."""

    def get_score(self, provider_id: str) -> float:
        """Return the current score, 5.0 for providers never seen."""

    def record_outcome(self, provider_id: str, success: bool) -> None:
        """Nudge the provider's score up on success, down on failure."""


class ICandidateFilter(Protocol):
    def filter(
        self, capabilities: Sequence[ProviderCapability], task: TaskDescriptor
    ) -> list[ProviderCapability]:
        """Return the capabilities structurally able to handle the task."""


class IScorer(Protocol):
    def score(
        self, candidates: Sequence[ProviderCapability], task: TaskDescriptor
    ) -> list[ScoredCandidate]:
        """Assign a suitability score to each candidate."""


class IUsageTracker(Protocol):
    """Collects per-attempt usage signals for observability."""

    def track_attempt(
        self,
        capability: ProviderCapability,
        *,
        success: bool,
        latency: float,
        fallback: bool = False,
    ) -> None:
        """Record a single provider invocation."""

    def get_summary(self, period: str) -> UsageSummary:
        """Retrieve aggregated usage data for the requested period label."""

    def provider_stats(self) -> Dict[str, ProviderStats]:
        """Return call/success counters and average latency per provider."""
