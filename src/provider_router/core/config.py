"""Router configuration management helpers."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from provider_router.routing.catalog import DEFAULT_FALLBACK_PROVIDER_ID
from provider_router.utils.validators import MAX_PAYLOAD_LENGTH


def _str_to_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _str_to_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Invalid integer value: {value}") from exc


def _str_to_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Invalid number value: {value}") from exc


def _optional_str(value: str | None) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class RouterConfig:
    """Immutable configuration object loaded from env or files."""

    fallback_provider_id: str = DEFAULT_FALLBACK_PROVIDER_ID
    timeout_seconds: float = 30.0
    enable_analytics: bool = True
    analytics_db_path: Optional[str] = None
    catalog_path: Optional[str] = None
    max_payload_chars: int = MAX_PAYLOAD_LENGTH

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def from_env(cls) -> "RouterConfig":
        defaults = cls()
        return cls(
            fallback_provider_id=os.getenv(
                "ROUTER_FALLBACK_PROVIDER", defaults.fallback_provider_id
            ),
            timeout_seconds=_str_to_float(
                os.getenv("ROUTER_TIMEOUT_SECONDS"), defaults.timeout_seconds
            ),
            enable_analytics=_str_to_bool(
                os.getenv("ROUTER_ENABLE_ANALYTICS"), defaults.enable_analytics
            ),
            analytics_db_path=_optional_str(os.getenv("ROUTER_ANALYTICS_DB")),
            catalog_path=_optional_str(os.getenv("ROUTER_CATALOG_PATH")),
            max_payload_chars=_str_to_int(
                os.getenv("ROUTER_MAX_PAYLOAD_CHARS"), defaults.max_payload_chars
            ),
        )

    @classmethod
    def from_file(cls, path: str) -> "RouterConfig":
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        raw = file_path.read_text()
        data: Dict[str, Any]
        suffix = file_path.suffix.lower()
        if suffix == ".json":
            data = json.loads(raw)
        elif suffix in {".yaml", ".yml"}:
            data = cls._load_yaml(raw)
        else:
            raise ValueError("Unsupported config format. Use JSON or YAML.")
        return cls(**cls._merge_with_defaults(data))

    def validate(self) -> None:
        if not self.fallback_provider_id or not self.fallback_provider_id.strip():
            raise ValueError("fallback_provider_id must be provided")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        if self.max_payload_chars <= 0:
            raise ValueError("max_payload_chars must be greater than zero")

    @classmethod
    def _merge_with_defaults(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        defaults = cls()
        return {
            "fallback_provider_id": data.get(
                "fallback_provider_id", defaults.fallback_provider_id
            ),
            "timeout_seconds": data.get("timeout_seconds", defaults.timeout_seconds),
            "enable_analytics": data.get("enable_analytics", defaults.enable_analytics),
            "analytics_db_path": data.get(
                "analytics_db_path", defaults.analytics_db_path
            ),
            "catalog_path": data.get("catalog_path", defaults.catalog_path),
            "max_payload_chars": data.get(
                "max_payload_chars", defaults.max_payload_chars
            ),
        }

    @staticmethod
    def _load_yaml(raw: str) -> Dict[str, Any]:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to parse YAML config files") from exc
        return yaml.safe_load(raw) or {}
