"""Helpers for decoding structured output returned by providers."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```(?:json|javascript|js)?\s*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\s*```\s*$")


def strip_code_fences(content: str) -> str:
    """Remove a leading/trailing markdown code fence around provider output."""

    cleaned = content.strip()
    cleaned = _OPENING_FENCE.sub("", cleaned)
    cleaned = _CLOSING_FENCE.sub("", cleaned)
    return cleaned.strip()


def parse_json_safely(content: str) -> Any:
    """Decode JSON from model output.

    Models frequently wrap JSON in fences or surround it with prose. The
    fenced body is tried first, then the outermost ``{...}`` span. When both
    fail the cleaned string itself is returned so callers can still show it.
    """

    cleaned = strip_code_fences(content)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        logger.debug("json_parse_retry", extra={"preview": cleaned[:100]})

    start = cleaned.find("{")
    end = cleaned.rfind("}") + 1
    if start >= 0 and end > start:
        try:
            return json.loads(cleaned[start:end])
        except json.JSONDecodeError:
            logger.warning("json_parse_failed", extra={"preview": cleaned[:100]})
    return cleaned
