"""Router facade: the single entry point for AI provider routing."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from provider_router.core.config import RouterConfig
from provider_router.core.executor import Executor
from provider_router.core.middleware import IMiddleware, MiddlewareChain, RouteRequest
from provider_router.domain.interfaces import IUsageTracker
from provider_router.domain.models import (
    CallerProfile,
    ProviderCapability,
    RouteResult,
    SelectionResult,
    TaskDescriptor,
)
from provider_router.providers.registry import ProviderClientRegistry
from provider_router.routing.catalog import ProviderCatalog
from provider_router.routing.ledger import PerformanceEntry, PerformanceLedger
from provider_router.routing.scorer import TaskScorer
from provider_router.routing.selector import ProviderSelector
from provider_router.utils.validators import validate_timeout

logger = logging.getLogger(__name__)

HEALTH_CHECK_PROMPT = "Reply with OK."


class Router:
    """High-level API: select a provider for a task, run it, report who served it.

    Each instance owns its ledger, so separate routers (for example one per
    test) never share performance history.
    """

    def __init__(
        self,
        catalog: ProviderCatalog,
        ledger: PerformanceLedger,
        clients: ProviderClientRegistry,
        *,
        config: Optional[RouterConfig] = None,
        selector: Optional[ProviderSelector] = None,
        executor: Optional[Executor] = None,
        tracker: Optional[IUsageTracker] = None,
        middleware: Optional[MiddlewareChain] = None,
        middlewares: Optional[Sequence[IMiddleware]] = None,
    ) -> None:
        if middleware and middlewares:
            raise ValueError("Provide either 'middleware' or 'middlewares', not both")
        self._config = config or RouterConfig()
        self._catalog = catalog
        self._ledger = ledger
        self._clients = clients
        self._tracker = tracker
        self._selector = selector or ProviderSelector(catalog, TaskScorer(ledger))
        self._executor = executor or Executor(
            catalog,
            ledger,
            clients,
            self._config.fallback_provider_id,
            tracker=tracker,
            default_timeout=self._config.timeout_seconds,
        )
        self._middleware = middleware or MiddlewareChain(middlewares or [])

    def route(
        self,
        task: TaskDescriptor,
        payload: str,
        *,
        timeout: Optional[float] = None,
    ) -> RouteResult:
        """Run ``payload`` on the best provider for ``task``.

        Raises ``ExecutionError`` only when both the selected provider and the
        fallback provider failed.
        """

        request = RouteRequest(task=task, payload=payload, timeout=timeout)

        def handler(processed: RouteRequest) -> RouteResult:
            selection = self._selector.select(processed.task)
            outcome = self._executor.execute(
                selection.chosen,
                processed.task,
                processed.payload,
                timeout=processed.timeout,
            )
            return RouteResult(
                text=outcome.text,
                provider_id=outcome.served_by.id,
                model_id=outcome.served_by.model_id,
                fallback_used=outcome.fallback_used,
                attempts=outcome.attempts,
                latency=outcome.latency,
            )

        return self._middleware.execute(request, handler)

    def select(self, task: TaskDescriptor) -> SelectionResult:
        return self._selector.select(task)

    def explain(self, task: TaskDescriptor) -> str:
        return self._selector.explain(self._selector.select(task))

    def recommend(self, profile: CallerProfile, limit: int = 3) -> List[ProviderCapability]:
        return self._selector.recommend(profile, limit)

    def performance(self) -> Dict[str, PerformanceEntry]:
        return self._ledger.snapshot()

    def check_health(self, timeout: Optional[float] = None) -> Dict[str, bool]:
        """Probe each registered family once; True when its client answered.

        The probe uses the family's first catalog entry and leaves the ledger
        and usage tracker untouched. A family with no catalog entry is
        reported as unavailable.
        """

        probe_timeout = self._config.timeout_seconds if timeout is None else timeout
        validate_timeout(probe_timeout)
        results: Dict[str, bool] = {}
        for family in self._clients.families():
            capability = next(
                (c for c in self._catalog if c.family == family), None
            )
            if capability is None:
                logger.warning("health_check_skipped", extra={"family": family})
                results[family] = False
                continue
            try:
                client = self._clients.resolve(capability)
                client.invoke(capability.model_id, HEALTH_CHECK_PROMPT, probe_timeout)
            except Exception as exc:
                logger.warning(
                    "health_check_failed",
                    extra={
                        "family": family,
                        "provider_id": capability.id,
                        "error_type": type(exc).__name__,
                    },
                )
                results[family] = False
            else:
                results[family] = True
        return results
    @property
    def catalog(self) -> ProviderCatalog:
        return self._catalog

    @property
    def ledger(self) -> PerformanceLedger:
        return self._ledger

    @property
    def analytics(self) -> IUsageTracker:
        if not self._tracker:
            raise RuntimeError("Analytics tracker not configured")
        return self._tracker
