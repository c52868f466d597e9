"""Heuristic suitability scoring for provider candidates.

The weights below are a fixed contract shared with the CRM front end;
changing any of them changes which provider callers get.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from provider_router.domain.interfaces import IPerformanceLedger, IScorer
from provider_router.domain.models import (
    CallerProfile,
    CommunicationStyle,
    Level,
    ProviderCapability,
    ResponseLength,
    ScoredCandidate,
    TaskDescriptor,
)

ACCURACY_WEIGHT = 0.3
SPEED_WEIGHT = 0.2
COST_WEIGHT = 0.2

OPTIMAL_TASK_BONUS = 2.0
STRENGTH_MATCH_BONUS = 1.0
URGENCY_WEIGHT = 0.3
HIGH_COMPLEXITY_ACCURACY_WEIGHT = 0.4
LOW_COMPLEXITY_WEIGHT = 0.3
HISTORY_WEIGHT = 0.1

PREFERRED_PROVIDER_BONUS = 1.0
TECHNICAL_STYLE_BONUS = 0.5
COMPREHENSIVE_LENGTH_BONUS = 0.5
LARGE_CONTEXT_THRESHOLD = 50_000
AI_SCORE_BONUS = 0.3
HIGH_AI_SCORE = 80
LOW_AI_SCORE = 50
HIGH_ACCURACY = 9
HIGH_SPEED = 8


class TaskScorer(IScorer):
    """Scores candidates from their ratings, the task shape and past outcomes."""

    def __init__(self, ledger: IPerformanceLedger) -> None:
        self._ledger = ledger

    def score(
        self, candidates: Sequence[ProviderCapability], task: TaskDescriptor
    ) -> List[ScoredCandidate]:
        return [
            ScoredCandidate(capability=capability, score=self.score_one(capability, task))
            for capability in candidates
        ]

    def score_one(self, capability: ProviderCapability, task: TaskDescriptor) -> float:
        score = 0.0
        score += capability.accuracy * ACCURACY_WEIGHT
        score += capability.speed * SPEED_WEIGHT
        score += capability.cost_efficiency * COST_WEIGHT

        task_type = task.type.value
        if task_type in capability.optimal_for:
            score += OPTIMAL_TASK_BONUS
        # A strength counts when its text appears inside the task type label.
        if any(strength in task_type for strength in capability.strengths):
            score += STRENGTH_MATCH_BONUS

        if task.urgency is Level.HIGH:
            score += capability.speed * URGENCY_WEIGHT
        elif task.urgency is Level.LOW:
            score += capability.cost_efficiency * URGENCY_WEIGHT

        if task.complexity is Level.HIGH:
            score += capability.accuracy * HIGH_COMPLEXITY_ACCURACY_WEIGHT
        elif task.complexity is Level.LOW:
            score += capability.speed * LOW_COMPLEXITY_WEIGHT
            score += capability.cost_efficiency * LOW_COMPLEXITY_WEIGHT

        score += self._ledger.get_score(capability.id) * HISTORY_WEIGHT
        return score


class ProfileWeighting:
    """Additive adjustments derived from the caller's profile."""

    def apply(
        self,
        scored: Sequence[ScoredCandidate],
        profile: Optional[CallerProfile],
    ) -> List[ScoredCandidate]:
        if profile is None:
            return list(scored)
        return [
            ScoredCandidate(
                capability=candidate.capability,
                score=candidate.score + self.bonus(candidate.capability, profile),
            )
            for candidate in scored
        ]

    @staticmethod
    def bonus(capability: ProviderCapability, profile: CallerProfile) -> float:
        bonus = 0.0
        if capability.id in profile.history.preferred_providers:
            bonus += PREFERRED_PROVIDER_BONUS

        preferences = profile.preferences
        if (
            preferences.communication_style is CommunicationStyle.TECHNICAL
            and "code-generation" in capability.strengths
        ):
            bonus += TECHNICAL_STYLE_BONUS
        if (
            preferences.response_length is ResponseLength.COMPREHENSIVE
            and capability.context_window_tokens > LARGE_CONTEXT_THRESHOLD
        ):
            bonus += COMPREHENSIVE_LENGTH_BONUS

        if profile.ai_score > HIGH_AI_SCORE and capability.accuracy >= HIGH_ACCURACY:
            bonus += AI_SCORE_BONUS
        elif profile.ai_score < LOW_AI_SCORE and capability.speed >= HIGH_SPEED:
            bonus += AI_SCORE_BONUS
        return bonus
