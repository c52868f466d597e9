"""Provider invocation with ledger bookkeeping and a single fixed fallback."""

from __future__ import annotations

import logging
import time
from typing import Optional

from provider_router.domain.exceptions import ExecutionError, StartupConfigError
from provider_router.domain.interfaces import IPerformanceLedger, IUsageTracker
from provider_router.domain.models import (
    ExecutionOutcome,
    ProviderCapability,
    TaskDescriptor,
)
from provider_router.providers.registry import ProviderClientRegistry
from provider_router.routing.catalog import ProviderCatalog
from provider_router.utils.prompts import contextualize_prompt
from provider_router.utils.validators import validate_timeout

logger = logging.getLogger(__name__)


class Executor:
    """Runs a task on the chosen provider, falling back once on failure.

    The fallback target is one designated provider regardless of the task;
    it is never re-scored. At most two invocations happen per ``execute``.
    """

    def __init__(
        self,
        catalog: ProviderCatalog,
        ledger: IPerformanceLedger,
        clients: ProviderClientRegistry,
        fallback_provider_id: str,
        *,
        tracker: Optional[IUsageTracker] = None,
        default_timeout: float = 30.0,
    ) -> None:
        if fallback_provider_id not in catalog:
            raise StartupConfigError(
                "Fallback provider is not in the catalog",
                context={"fallback_provider_id": fallback_provider_id},
            )
        validate_timeout(default_timeout)
        self._ledger = ledger
        self._clients = clients
        self._fallback = catalog.get(fallback_provider_id)
        self._tracker = tracker
        self._default_timeout = default_timeout

    @property
    def fallback_provider(self) -> ProviderCapability:
        return self._fallback

    def execute(
        self,
        chosen: ProviderCapability,
        task: TaskDescriptor,
        payload: str,
        *,
        timeout: Optional[float] = None,
    ) -> ExecutionOutcome:
        effective_timeout = self._default_timeout if timeout is None else timeout
        validate_timeout(effective_timeout)
        prompt = contextualize_prompt(payload, task.caller_profile)
        started = time.perf_counter()

        try:
            text = self._attempt(chosen, prompt, effective_timeout, fallback=False)
        except Exception as primary_error:
            logger.warning(
                "provider_attempt_failed",
                extra={
                    "provider_id": chosen.id,
                    "error_type": type(primary_error).__name__,
                    "error": str(primary_error),
                },
            )
            if chosen.id == self._fallback.id:
                raise ExecutionError(
                    "Fallback provider failed and no other fallback exists",
                    primary_error=primary_error,
                    context={"provider_id": chosen.id},
                ) from primary_error
            return self._execute_fallback(
                chosen, prompt, effective_timeout, started, primary_error
            )

        return ExecutionOutcome(
            text=text,
            served_by=chosen,
            attempts=1,
            fallback_used=False,
            latency=time.perf_counter() - started,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _execute_fallback(
        self,
        chosen: ProviderCapability,
        prompt: str,
        timeout: float,
        started: float,
        primary_error: Exception,
    ) -> ExecutionOutcome:
        fallback = self._fallback
        logger.info(
            "fallback_attempt",
            extra={"failed_provider_id": chosen.id, "provider_id": fallback.id},
        )
        try:
            text = self._attempt(fallback, prompt, timeout, fallback=True)
        except Exception as fallback_error:
            logger.error(
                "fallback_attempt_failed",
                extra={
                    "provider_id": fallback.id,
                    "error_type": type(fallback_error).__name__,
                    "error": str(fallback_error),
                },
            )
            raise ExecutionError(
                "Primary and fallback providers both failed",
                primary_error=primary_error,
                fallback_error=fallback_error,
                context={"provider_id": chosen.id, "fallback_provider_id": fallback.id},
            ) from fallback_error

        return ExecutionOutcome(
            text=text,
            served_by=fallback,
            attempts=2,
            fallback_used=True,
            latency=time.perf_counter() - started,
        )

    def _attempt(
        self,
        capability: ProviderCapability,
        prompt: str,
        timeout: float,
        *,
        fallback: bool,
    ) -> str:
        attempt_started = time.perf_counter()
        try:
            client = self._clients.resolve(capability)
            text = client.invoke(capability.model_id, prompt, timeout)
        except Exception:
            self._ledger.record_outcome(capability.id, False)
            self._track(capability, False, attempt_started, fallback)
            raise
        self._ledger.record_outcome(capability.id, True)
        self._track(capability, True, attempt_started, fallback)
        return text

    def _track(
        self,
        capability: ProviderCapability,
        success: bool,
        attempt_started: float,
        fallback: bool,
    ) -> None:
        # Usage tracking never decides whether an attempt failed.
        if self._tracker is None:
            return
        try:
            self._tracker.track_attempt(
                capability,
                success=success,
                latency=time.perf_counter() - attempt_started,
                fallback=fallback,
            )
        except Exception:
            logger.exception(
                "usage_tracking_failed",
                extra={"provider_id": capability.id, "success": success},
            )
