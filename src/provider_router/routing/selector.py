"""Provider selection orchestrating filtering, scoring and profile weighting."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from provider_router.domain.exceptions import NoCandidateError
from provider_router.domain.interfaces import ICandidateFilter, IScorer
from provider_router.domain.models import (
    CallerProfile,
    Level,
    ProviderCapability,
    ScoredCandidate,
    SelectionResult,
    TaskDescriptor,
    TaskType,
)

from .candidate_filter import CandidateFilter
from .catalog import ProviderCatalog
from .scorer import ProfileWeighting

logger = logging.getLogger(__name__)


class ProviderSelector:
    """Picks the best-suited provider for a task.

    Filter, score, apply profile weighting, then rank. The ranking is a stable
    sort so equal scores keep catalog declaration order.
    """

    def __init__(
        self,
        catalog: ProviderCatalog,
        scorer: IScorer,
        *,
        candidate_filter: Optional[ICandidateFilter] = None,
        weighting: Optional[ProfileWeighting] = None,
    ) -> None:
        self._catalog = catalog
        self._scorer = scorer
        self._filter = candidate_filter or CandidateFilter()
        self._weighting = weighting or ProfileWeighting()

    def select(self, task: TaskDescriptor) -> SelectionResult:
        capabilities = self._catalog.list_capabilities()
        used_unfiltered = False
        try:
            candidates = self._candidates(capabilities, task)
        except NoCandidateError as exc:
            logger.warning(
                "candidate_set_empty",
                extra={"task_type": task.type.value, "context": dict(exc.context)},
            )
            candidates = list(capabilities)
            used_unfiltered = True

        scored = self._scorer.score(candidates, task)
        profile = task.caller_profile
        if profile is not None:
            scored = self._weighting.apply(scored, profile)
        ranked = self._rank(scored)

        result = SelectionResult(
            chosen=ranked[0].capability,
            ranked=ranked,
            adjusted_by_profile=profile is not None,
            used_unfiltered_catalog=used_unfiltered,
        )
        logger.info(
            "provider_selected",
            extra={
                "provider_id": result.chosen.id,
                "score": round(result.top_score, 4),
                "task_type": task.type.value,
                "task_context": task.context,
                "candidates": len(ranked),
            },
        )
        return result

    def recommend(self, profile: CallerProfile, limit: int = 3) -> List[ProviderCapability]:
        """Top providers for a general analysis task carrying this profile."""

        if limit <= 0:
            raise ValueError("limit must be greater than zero")
        task = TaskDescriptor(
            type=TaskType.ANALYSIS,
            complexity=Level.MEDIUM,
            urgency=Level.MEDIUM,
            caller_profile=profile,
            context="recommendations",
        )
        scored = self._scorer.score(self._catalog.list_capabilities(), task)
        ranked = self._rank(self._weighting.apply(scored, profile))
        return [candidate.capability for candidate in ranked[:limit]]

    def explain(self, result: SelectionResult) -> str:
        chosen = result.chosen
        explanation = (
            f"Selected {chosen.model_id} from provider family {chosen.family} "
            f"with score {result.top_score:.2f}."
        )
        alternatives = [
            f"{candidate.capability.id} ({candidate.score:.2f})"
            for candidate in result.ranked[1:4]
        ]
        if alternatives:
            explanation += f" Alternatives considered: {', '.join(alternatives)}."
        if result.adjusted_by_profile:
            explanation += " Scores include caller profile preferences."
        if result.used_unfiltered_catalog:
            explanation += " No provider met every requirement; ranked the full catalog."
        return explanation

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _candidates(
        self, capabilities: Sequence[ProviderCapability], task: TaskDescriptor
    ) -> List[ProviderCapability]:
        candidates = self._filter.filter(capabilities, task)
        if not candidates:
            raise NoCandidateError(
                context={
                    "token_limit": task.token_limit,
                    "requires_real_time": task.requires_real_time,
                    "needs_structured_output": task.needs_structured_output,
                }
            )
        return candidates

    @staticmethod
    def _rank(scored: Sequence[ScoredCandidate]) -> Tuple[ScoredCandidate, ...]:
        return tuple(sorted(scored, key=lambda candidate: candidate.score, reverse=True))
