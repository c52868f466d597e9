"""OpenAI client speaking the chat completions API."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from provider_router.domain.exceptions import MalformedResponseError
from provider_router.domain.models import ProviderFamily

from .base import BaseProviderClient

OPENAI_BASE_URL = "https://api.openai.com"
OPENAI_CHAT_COMPLETIONS_PATH = "/v1/chat/completions"


class OpenAIClient(BaseProviderClient):
    FAMILY = ProviderFamily.OPENAI.value
    DISPLAY_NAME = "OpenAI"

    def _build_request(
        self, model_id: str, prompt: str
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        url = f"{self.config.base_url.rstrip('/')}{OPENAI_CHAT_COMPLETIONS_PATH}"
        payload: Dict[str, Any] = {
            "model": model_id,
            "messages": [
                {"role": "user", "content": prompt},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        return url, payload, headers

    def _extract_text(self, data: Dict[str, Any]) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise MalformedResponseError(
                "Malformed OpenAI response", context={"data": data}
            ) from exc
        if not isinstance(content, str):
            raise MalformedResponseError(
                "OpenAI response carried no text", context={"data": data}
            )
        return content
