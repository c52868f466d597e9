"""Basic routing example using the built-in DI container."""

import os

from provider_router.core.container import DIContainer
from provider_router.domain.models import CallerProfile, TaskType
from provider_router.utils.tasks import describe_endpoint


def main() -> None:
    router = DIContainer.create_router(
        openai_key=os.getenv("OPENAI_API_KEY"),
        gemini_key=os.getenv("GEMINI_API_KEY"),
    )
    profile = CallerProfile(
        id="contact-42",
        name="Acme Corp",
        industry="Manufacturing",
        ai_score=85,
        preferences={"response_length": "comprehensive"},
    )
    task = describe_endpoint(
        "deal-analyzer",
        task_type=TaskType.ANALYSIS,
        complexity="high",
        caller_profile=profile,
    )

    print(router.explain(task))
    result = router.route(task, "Analyze the Q3 renewal deal and list the top risks as JSON.")
    print("Provider:", result.provider_id)
    print("Fallback used:", result.fallback_used)
    print("Parsed:", result.parse_json())


if __name__ == "__main__":
    main()
