"""Structural filtering of catalog entries before scoring."""

from __future__ import annotations

from typing import List, Sequence

from provider_router.domain.interfaces import ICandidateFilter
from provider_router.domain.models import ProviderCapability, TaskDescriptor

REAL_TIME_MIN_SPEED = 7
STRUCTURED_OUTPUT_MIN_ACCURACY = 8
STRUCTURED_OUTPUT_TAG = "structured-output"


class CandidateFilter(ICandidateFilter):
    """Keeps providers that can structurally serve a task.

    A provider declared optimal for the task type is always kept. Any other
    provider is dropped when its context window, speed, or structured-output
    support falls short of the task's requirements.
    """

    def filter(
        self, capabilities: Sequence[ProviderCapability], task: TaskDescriptor
    ) -> List[ProviderCapability]:
        return [
            capability
            for capability in capabilities
            if self._is_candidate(capability, task)
        ]

    def _is_candidate(
        self, capability: ProviderCapability, task: TaskDescriptor
    ) -> bool:
        if task.type.value in capability.optimal_for:
            return True
        if (
            task.token_limit is not None
            and capability.context_window_tokens < task.token_limit
        ):
            return False
        if task.requires_real_time and capability.speed < REAL_TIME_MIN_SPEED:
            return False
        if (
            task.needs_structured_output
            and STRUCTURED_OUTPUT_TAG not in capability.strengths
            and capability.accuracy < STRUCTURED_OUTPUT_MIN_ACCURACY
        ):
            return False
        return True
