"""Input validation helpers used across the router."""

from __future__ import annotations

MAX_PAYLOAD_LENGTH = 20000


def validate_payload(payload: str, max_length: int = MAX_PAYLOAD_LENGTH) -> None:
    if not payload or not payload.strip():
        raise ValueError("Payload must be non-empty")
    if len(payload) > max_length:
        raise ValueError("Payload exceeds maximum supported length")


def validate_timeout(timeout: float) -> None:
    if timeout <= 0:
        raise ValueError("timeout must be greater than zero")
