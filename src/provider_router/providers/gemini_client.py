"""Google Gemini client for the generateContent API."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from provider_router.domain.exceptions import MalformedResponseError
from provider_router.domain.models import ProviderFamily

from .base import BaseProviderClient

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"
GEMINI_GENERATE_PATH_TEMPLATE = "/v1beta/models/{model}:generateContent"


class GeminiClient(BaseProviderClient):
    FAMILY = ProviderFamily.GEMINI.value
    DISPLAY_NAME = "Google Gemini"

    def _build_request(
        self, model_id: str, prompt: str
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        path = GEMINI_GENERATE_PATH_TEMPLATE.format(model=model_id)
        url = f"{self.config.base_url.rstrip('/')}{path}"
        payload: Dict[str, Any] = {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": prompt},
                    ],
                }
            ],
        }
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.config.api_key,
        }
        return url, payload, headers

    def _extract_text(self, data: Dict[str, Any]) -> str:
        try:
            candidate = data["candidates"][0]
            content = candidate["content"]
            parts = content.get("parts", []) if isinstance(content, dict) else []
        except (KeyError, IndexError, TypeError) as exc:
            raise MalformedResponseError(
                "Malformed Google Gemini response", context={"data": data}
            ) from exc
        texts = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        if not texts:
            raise MalformedResponseError(
                "Google Gemini response carried no text", context={"data": data}
            )
        return "\n".join(filter(None, texts))
