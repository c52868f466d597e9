"""Exception hierarchy for provider routing failures."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple


class RouterError(Exception):
    """Base class for all domain-level errors in the provider router."""

    default_message = "Provider router error occurred"

    def __init__(
        self, message: str | None = None, *, context: Mapping[str, Any] | None = None
    ):
        self.message = message or self.default_message
        self.context: Mapping[str, Any] = dict(context or {})
        formatted = self._format_message()
        super().__init__(formatted)

    def _format_message(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


class StartupConfigError(RouterError):
    """Catalog or router configuration violates its invariants."""

    default_message = "Invalid router configuration"


class RoutingError(RouterError):
    """Failures while evaluating routing logic."""

    default_message = "Routing error"


class NoCandidateError(RoutingError):
    """No catalog entry survived candidate filtering.

    The selector recovers from this internally by ranking the whole catalog,
    so callers of ``Router.route`` never see it.
    """

    default_message = "No provider satisfies the task requirements"


class ProviderInvocationError(RouterError):
    """A single provider call failed (network, status code, bad payload)."""

    default_message = "Provider invocation failed"


class ProviderTimeoutError(ProviderInvocationError):
    """Provider did not answer within the caller-supplied timeout."""

    default_message = "Provider invocation timed out"


class ProviderUnavailableError(ProviderInvocationError):
    """Provider service is down or unreachable."""

    default_message = "Provider is unavailable"


class ProviderRateLimitError(ProviderInvocationError):
    """Provider refuses request due to rate limiting."""

    default_message = "Provider rate limit exceeded"


class ProviderAuthError(ProviderInvocationError):
    """Authentication or authorization with provider failed."""

    default_message = "Provider authentication failed"


class MalformedResponseError(ProviderInvocationError):
    """Provider answered with a payload we could not extract text from."""

    default_message = "Malformed provider response"


class ClientNotRegisteredError(ProviderInvocationError):
    """No client is registered for the provider family."""

    default_message = "No client registered for provider family"


class ExecutionError(RouterError):
    """Terminal failure: the selected provider and the fallback both failed.

    Callers should treat this as retryable with backoff rather than as a
    permanent failure.
    """

    default_message = "AI execution failed"
    retryable = True

    def __init__(
        self,
        message: str | None = None,
        *,
        primary_error: BaseException,
        fallback_error: Optional[BaseException] = None,
        context: Mapping[str, Any] | None = None,
    ):
        self.primary_error = primary_error
        self.fallback_error = fallback_error
        super().__init__(message, context=context)

    @property
    def causes(self) -> Tuple[BaseException, ...]:
        if self.fallback_error is None:
            return (self.primary_error,)
        return (self.primary_error, self.fallback_error)
