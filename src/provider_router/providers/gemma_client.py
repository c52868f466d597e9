"""Gemma client calling the CRM's ``gemma-chat`` edge function."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from provider_router.domain.exceptions import MalformedResponseError
from provider_router.domain.models import ProviderFamily

from .base import BaseProviderClient

GEMMA_FUNCTION_PATH = "/functions/v1/gemma-chat"
_TEXT_KEYS = ("response", "text", "content", "result")


class GemmaClient(BaseProviderClient):
    FAMILY = ProviderFamily.GEMMA.value
    DISPLAY_NAME = "Gemma"

    def _build_request(
        self, model_id: str, prompt: str
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        url = f"{self.config.base_url.rstrip('/')}{GEMMA_FUNCTION_PATH}"
        payload = {"prompt": prompt, "model": model_id}
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        return url, payload, headers

    def _extract_text(self, data: Dict[str, Any]) -> str:
        # The edge function has answered under several keys across deployments.
        for key in _TEXT_KEYS:
            value = data.get(key)
            if isinstance(value, str):
                return value
        raise MalformedResponseError(
            "Gemma edge function response carried no text", context={"data": data}
        )
