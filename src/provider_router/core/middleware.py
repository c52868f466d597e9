"""Middleware system for routing cross-cutting concerns."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Sequence

from pydantic import BaseModel, ConfigDict

from provider_router.domain.models import RouteResult, TaskDescriptor
from provider_router.utils.validators import MAX_PAYLOAD_LENGTH, validate_payload


class RouteRequest(BaseModel):
    """A task plus the payload to send, as seen by middleware."""

    model_config = ConfigDict(frozen=True)

    task: TaskDescriptor
    payload: str
    timeout: Optional[float] = None


class IMiddleware(Protocol):
    """Protocol describing middleware hooks."""

    def process_request(self, request: RouteRequest) -> RouteRequest: ...

    def process_response(self, response: RouteResult) -> RouteResult: ...


class LoggingMiddleware(IMiddleware):
    """Logs inbound requests and outbound results."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def process_request(self, request: RouteRequest) -> RouteRequest:
        task = request.task
        self._logger.info(
            "routing_request",
            extra={
                "payload_preview": request.payload[:100],
                "task_type": task.type.value,
                "complexity": task.complexity.value,
                "urgency": task.urgency.value,
                "task_context": task.context,
            },
        )
        return request

    def process_response(self, response: RouteResult) -> RouteResult:
        self._logger.info(
            "routing_response",
            extra={
                "provider_id": response.provider_id,
                "model": response.model_id,
                "latency": response.latency,
                "fallback_used": response.fallback_used,
            },
        )
        return response


class ValidationMiddleware(IMiddleware):
    """Ensures incoming payloads meet minimal criteria."""

    def __init__(self, max_payload_chars: int = MAX_PAYLOAD_LENGTH) -> None:
        self._max_payload_chars = max_payload_chars

    def process_request(self, request: RouteRequest) -> RouteRequest:
        validate_payload(request.payload, self._max_payload_chars)
        if request.timeout is not None and request.timeout <= 0:
            raise ValueError("timeout must be greater than zero")
        return request

    def process_response(self, response: RouteResult) -> RouteResult:
        return response


class MiddlewareChain:
    """Applies middleware around a handler using chain of responsibility."""

    def __init__(self, middlewares: Sequence[IMiddleware]) -> None:
        self._middlewares = list(middlewares)

    def execute(
        self, request: RouteRequest, handler: Callable[[RouteRequest], RouteResult]
    ) -> RouteResult:
        for middleware in self._middlewares:
            request = middleware.process_request(request)

        response = handler(request)

        for middleware in reversed(self._middlewares):
            response = middleware.process_response(response)

        return response
