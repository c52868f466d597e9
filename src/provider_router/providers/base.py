"""Provider client abstractions and shared HTTP behavior."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import httpx

from provider_router.domain.exceptions import (
    MalformedResponseError,
    ProviderAuthError,
    ProviderInvocationError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from provider_router.utils.validators import validate_timeout


@dataclass(frozen=True)
class ProviderConfig:
    """Credentials and endpoint shared by all clients of one family."""

    api_key: str
    base_url: str

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key must be provided")
        if not self.base_url:
            raise ValueError("base_url must be provided")


class BaseProviderClient(ABC):
    """Template-method base class: one HTTP call per invocation, no retries.

    Retrying is the executor's job (a single fallback), so transport and
    status failures are translated into ``ProviderInvocationError`` subclasses
    and raised immediately.
    """

    FAMILY = "custom"
    DISPLAY_NAME = "Provider"

    def __init__(
        self,
        http_client: httpx.Client,
        config: ProviderConfig,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self._http = http_client
        self.logger = logger or logging.getLogger(
            f"{__name__}.{self.__class__.__name__}"
        )

    def invoke(self, model_id: str, prompt: str, timeout: float) -> str:
        validate_timeout(timeout)
        url, payload, headers = self._build_request(model_id, prompt)
        self.log_request(model_id, prompt)
        started = time.perf_counter()
        try:
            http_response = self._http.post(
                url, json=payload, headers=headers, timeout=httpx.Timeout(timeout)
            )
        except httpx.TimeoutException as exc:
            raise ProviderTimeoutError(
                f"{self.DISPLAY_NAME} did not respond in time",
                context={"model": model_id, "timeout": timeout},
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(
                f"{self.DISPLAY_NAME} transport error",
                context={"model": model_id, "error": str(exc)},
            ) from exc

        # httpx bounds each phase separately; the timeout covers the whole call.
        elapsed = time.perf_counter() - started
        if elapsed > timeout:
            raise ProviderTimeoutError(
                f"{self.DISPLAY_NAME} exceeded the call deadline",
                context={
                    "model": model_id,
                    "timeout": timeout,
                    "elapsed": round(elapsed, 3),
                },
            )

        data = self._decode(http_response, model_id)
        self._raise_for_status(http_response.status_code, data, model_id)
        text = self._extract_text(data)
        self.log_response(model_id, http_response, text)
        return text

    @abstractmethod
    def _build_request(
        self, model_id: str, prompt: str
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        """Return the (url, json payload, headers) for one generation call."""

    @abstractmethod
    def _extract_text(self, data: Dict[str, Any]) -> str:
        """Pull the generated text out of a successful response body."""

    def log_request(self, model_id: str, prompt: str) -> None:
        self.logger.debug(
            "provider_request",
            extra={
                "model": model_id,
                "prompt_chars": len(prompt),
                "provider": self.__class__.__name__,
            },
        )

    def log_response(
        self, model_id: str, http_response: httpx.Response, text: str
    ) -> None:
        self.logger.debug(
            "provider_response",
            extra={
                "model": model_id,
                "latency": self._safe_elapsed(http_response),
                "response_chars": len(text),
                "provider": self.__class__.__name__,
            },
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _decode(self, http_response: httpx.Response, model_id: str) -> Dict[str, Any]:
        try:
            data = http_response.json()
        except ValueError as exc:
            if http_response.status_code >= 400:
                return {}
            raise MalformedResponseError(
                f"{self.DISPLAY_NAME} returned a non-JSON body",
                context={"model": model_id, "status_code": http_response.status_code},
            ) from exc
        return data if isinstance(data, dict) else {"data": data}

    def _raise_for_status(
        self, status: int, data: Dict[str, Any], model_id: str
    ) -> None:
        context = {"status_code": status, "model": model_id}
        if status == 429:
            raise ProviderRateLimitError(
                f"{self.DISPLAY_NAME} rate limit exceeded", context=context
            )
        if status in {401, 403}:
            raise ProviderAuthError(
                f"{self.DISPLAY_NAME} rejected the credentials", context=context
            )
        if status >= 500:
            raise ProviderUnavailableError(
                f"{self.DISPLAY_NAME} service unavailable", context=context
            )
        if status >= 400:
            error = data.get("error")
            message = error.get("message") if isinstance(error, dict) else error
            raise ProviderInvocationError(
                message or f"{self.DISPLAY_NAME} request failed", context=context
            )

    @staticmethod
    def _safe_elapsed(http_response: httpx.Response) -> float:
        try:
            elapsed = http_response.elapsed
        except RuntimeError:
            return 0.0
        return elapsed.total_seconds() if elapsed else 0.0
