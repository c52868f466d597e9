import json
from pathlib import Path

import pytest

from provider_router.core.config import RouterConfig


def test_router_config_defaults():
    config = RouterConfig()
    assert config.fallback_provider_id == "gemini:gemini-2.5-flash"
    assert config.timeout_seconds == 30.0
    assert config.enable_analytics is True
    assert config.analytics_db_path is None
    assert config.catalog_path is None
    assert config.max_payload_chars == 20000


def test_router_config_from_env(monkeypatch):
    monkeypatch.setenv("ROUTER_FALLBACK_PROVIDER", "openai:gpt-3.5-turbo")
    monkeypatch.setenv("ROUTER_TIMEOUT_SECONDS", "45")
    monkeypatch.setenv("ROUTER_ENABLE_ANALYTICS", "false")
    monkeypatch.setenv("ROUTER_ANALYTICS_DB", "/tmp/attempts.db")
    monkeypatch.setenv("ROUTER_CATALOG_PATH", "  ")
    monkeypatch.setenv("ROUTER_MAX_PAYLOAD_CHARS", "500")

    config = RouterConfig.from_env()

    assert config.fallback_provider_id == "openai:gpt-3.5-turbo"
    assert config.timeout_seconds == 45
    assert config.enable_analytics is False
    assert config.analytics_db_path == "/tmp/attempts.db"
    assert config.catalog_path is None
    assert config.max_payload_chars == 500


def test_router_config_from_env_rejects_bad_numbers(monkeypatch):
    monkeypatch.setenv("ROUTER_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ValueError):
        RouterConfig.from_env()


def test_router_config_from_file_json(tmp_path: Path):
    data = {
        "fallback_provider_id": "openai:gpt-4o",
        "enable_analytics": False,
        "timeout_seconds": 12,
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))

    config = RouterConfig.from_file(str(path))

    assert config.fallback_provider_id == "openai:gpt-4o"
    assert config.enable_analytics is False
    assert config.timeout_seconds == 12
    assert config.max_payload_chars == 20000


def test_router_config_from_file_yaml(tmp_path: Path):
    yaml = pytest.importorskip("yaml")
    data = {"catalog_path": "providers.yaml", "timeout_seconds": 60}
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))

    config = RouterConfig.from_file(str(path))

    assert config.catalog_path == "providers.yaml"
    assert config.timeout_seconds == 60


def test_router_config_from_file_rejects_unknown_format(tmp_path: Path):
    path = tmp_path / "config.toml"
    path.write_text("timeout_seconds = 1")

    with pytest.raises(ValueError):
        RouterConfig.from_file(str(path))
    with pytest.raises(FileNotFoundError):
        RouterConfig.from_file(str(tmp_path / "missing.json"))


@pytest.mark.parametrize(
    "overrides",
    [
        {"fallback_provider_id": " "},
        {"timeout_seconds": 0},
        {"max_payload_chars": -1},
    ],
)
def test_router_config_validate_rejects_invalid_values(overrides):
    with pytest.raises(ValueError):
        RouterConfig(**overrides)
