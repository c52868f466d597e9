"""Static registry of the provider capabilities available for routing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Mapping, Sequence, Tuple

from pydantic import ValidationError

from provider_router.domain.exceptions import StartupConfigError
from provider_router.domain.models import ProviderCapability

DEFAULT_CATALOG_ENTRIES: Tuple[Dict[str, Any], ...] = (
    {
        "id": "openai:gpt-4o",
        "family": "openai",
        "model": "gpt-4o",
        "strengths": ["reasoning", "code-generation", "complex-analysis", "structured-output"],
        "weaknesses": ["cost", "speed-for-simple-tasks"],
        "optimal_for": ["analysis", "reasoning", "structured-data", "code"],
        "cost_efficiency": 4,
        "speed": 6,
        "accuracy": 9,
        "context_window_tokens": 128_000,
    },
    {
        "id": "openai:gpt-3.5-turbo",
        "family": "openai",
        "model": "gpt-3.5-turbo",
        "strengths": ["speed", "cost-efficiency", "conversation", "simple-tasks"],
        "weaknesses": ["complex-reasoning", "long-context"],
        "optimal_for": ["conversation", "content-generation"],
        "cost_efficiency": 8,
        "speed": 9,
        "accuracy": 7,
        "context_window_tokens": 16_000,
    },
    {
        "id": "gemini:gemini-2.5-flash",
        "family": "gemini",
        "model": "gemini-2.5-flash",
        "strengths": ["speed", "multimodal", "real-time", "cost-effective"],
        "weaknesses": ["complex-reasoning", "structured-output"],
        "optimal_for": ["content-generation", "research", "creative"],
        "cost_efficiency": 9,
        "speed": 10,
        "accuracy": 8,
        "context_window_tokens": 1_000_000,
    },
    {
        "id": "gemini:gemini-2.5-pro",
        "family": "gemini",
        "model": "gemini-2.5-pro",
        "strengths": ["reasoning", "analysis", "multimodal", "large-context"],
        "weaknesses": ["cost", "speed"],
        "optimal_for": ["analysis", "reasoning", "research"],
        "cost_efficiency": 6,
        "speed": 7,
        "accuracy": 9,
        "context_window_tokens": 2_000_000,
    },
    {
        "id": "gemma:gemma-2-9b",
        "family": "gemma",
        "model": "gemma-2-9b",
        "strengths": ["efficiency", "privacy", "local-deployment", "specialized-tasks"],
        "weaknesses": ["general-knowledge", "complex-reasoning"],
        "optimal_for": ["conversation", "content-generation"],
        "cost_efficiency": 10,
        "speed": 8,
        "accuracy": 6,
        "context_window_tokens": 8_000,
    },
)

DEFAULT_FALLBACK_PROVIDER_ID = "gemini:gemini-2.5-flash"


class ProviderCatalog:
    """Immutable, ordered collection of provider capabilities.

    Declaration order is significant: the selector uses it to break score ties.
    """

    def __init__(self, capabilities: Iterable[ProviderCapability]) -> None:
        entries = tuple(capabilities)
        if not entries:
            raise StartupConfigError("Provider catalog must not be empty")
        by_id: Dict[str, ProviderCapability] = {}
        for capability in entries:
            if capability.id in by_id:
                raise StartupConfigError(
                    "Duplicate provider id in catalog",
                    context={"provider_id": capability.id},
                )
            by_id[capability.id] = capability
        self._entries = entries
        self._by_id = by_id

    @classmethod
    def from_entries(cls, entries: Sequence[Mapping[str, Any]]) -> "ProviderCatalog":
        capabilities = []
        for index, raw in enumerate(entries):
            try:
                capabilities.append(ProviderCapability(**dict(raw)))
            except (ValidationError, TypeError) as exc:
                raise StartupConfigError(
                    "Invalid provider catalog entry",
                    context={"index": index, "id": raw.get("id"), "error": str(exc)},
                ) from exc
        return cls(capabilities)

    @classmethod
    def from_file(cls, path: str | Path) -> "ProviderCatalog":
        file_path = Path(path)
        if not file_path.exists():
            raise StartupConfigError(
                "Catalog file not found", context={"path": str(file_path)}
            )
        raw = file_path.read_text()
        suffix = file_path.suffix.lower()
        if suffix == ".json":
            data = json.loads(raw)
        elif suffix in {".yaml", ".yml"}:
            data = cls._load_yaml(raw)
        else:
            raise StartupConfigError("Unsupported catalog format. Use JSON or YAML.")
        if isinstance(data, Mapping):
            data = data.get("providers", [])
        if not isinstance(data, list):
            raise StartupConfigError("Catalog file must contain a list of providers")
        return cls.from_entries(data)

    @classmethod
    def default(cls) -> "ProviderCatalog":
        return cls.from_entries(DEFAULT_CATALOG_ENTRIES)

    def list_capabilities(self) -> Tuple[ProviderCapability, ...]:
        return self._entries

    def get(self, provider_id: str) -> ProviderCapability:
        try:
            return self._by_id[provider_id]
        except KeyError as exc:
            raise KeyError(f"Unknown provider '{provider_id}'") from exc

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._by_id

    def __iter__(self) -> Iterator[ProviderCapability]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _load_yaml(raw: str) -> Any:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to parse YAML catalog files") from exc
        return yaml.safe_load(raw) or []
