"""Task descriptor presets for the CRM's AI endpoints."""

from __future__ import annotations

from typing import Optional

from provider_router.domain.models import CallerProfile, Level, TaskDescriptor, TaskType

REAL_TIME_ENDPOINTS = frozenset({"email-composer", "text-generator", "call-script"})
STRUCTURED_OUTPUT_ENDPOINTS = frozenset(
    {"deal-analyzer", "contact-scorer", "market-analysis"}
)


def describe_endpoint(
    endpoint: str,
    *,
    task_type: TaskType | str = TaskType.CONTENT_GENERATION,
    complexity: Level | str = Level.MEDIUM,
    urgency: Level | str = Level.MEDIUM,
    caller_profile: Optional[CallerProfile] = None,
    token_limit: Optional[int] = None,
) -> TaskDescriptor:
    """Build the descriptor a CRM feature endpoint routes with."""

    return TaskDescriptor(
        type=task_type,
        complexity=complexity,
        urgency=urgency,
        token_limit=token_limit,
        requires_real_time=endpoint in REAL_TIME_ENDPOINTS,
        needs_structured_output=endpoint in STRUCTURED_OUTPUT_ENDPOINTS,
        caller_profile=caller_profile,
        context=endpoint,
    )
