"""Prompt contextualization applied before a provider is invoked."""

from __future__ import annotations

from typing import Optional

from provider_router.domain.models import CallerProfile


def contextualize_prompt(payload: str, profile: Optional[CallerProfile]) -> str:
    """Prefix the payload with the caller's profile header when one is known."""

    if profile is None:
        return payload

    name = profile.name or profile.id
    header = f"Customer Profile: {name}"
    if profile.industry:
        header += f" ({profile.industry})"
    preferences = profile.preferences
    return (
        f"{header}\n"
        f"Communication Style: {preferences.communication_style.value}\n"
        f"Response Length: {preferences.response_length.value}\n"
        f"Tone: {preferences.tone.value}\n"
        f"\n"
        f"{payload}"
    )
