"""Demonstrates serving a new provider family without touching the router."""

from provider_router.core.config import RouterConfig
from provider_router.core.container import DIContainer
from provider_router.domain.models import ProviderCapability, TaskDescriptor
from provider_router.routing.catalog import ProviderCatalog


class EchoClient:
    """Stand-in client for an in-house model deployment."""

    def invoke(self, model_id: str, prompt: str, timeout: float) -> str:
        return f"[{model_id}] {prompt}"


def main() -> None:
    catalog = ProviderCatalog.from_entries(
        [
            {
                "id": "inhouse:echo-1",
                "family": "inhouse",
                "strengths": ["privacy"],
                "optimal_for": ["conversation"],
                "cost_efficiency": 10,
                "speed": 10,
                "accuracy": 5,
                "context_window_tokens": 4_096,
            }
        ]
    )
    router = DIContainer.create_custom_router(
        clients={"inhouse": EchoClient()},
        catalog=catalog,
        config=RouterConfig(fallback_provider_id="inhouse:echo-1"),
    )

    result = router.route(TaskDescriptor(type="conversation"), "Hello there")
    print(result.provider_id, "->", result.text)


if __name__ == "__main__":
    main()
