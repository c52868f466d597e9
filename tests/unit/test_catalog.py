import json
from pathlib import Path

import pytest

from provider_router.domain.exceptions import StartupConfigError
from provider_router.routing.catalog import (
    DEFAULT_FALLBACK_PROVIDER_ID,
    ProviderCatalog,
)


def _entry(provider_id: str, **overrides):
    entry = {
        "id": provider_id,
        "family": "openai",
        "cost_efficiency": 5,
        "speed": 5,
        "accuracy": 5,
        "context_window_tokens": 8_000,
    }
    entry.update(overrides)
    return entry


def test_default_catalog_preserves_declaration_order():
    catalog = ProviderCatalog.default()

    ids = [capability.id for capability in catalog.list_capabilities()]

    assert ids == [
        "openai:gpt-4o",
        "openai:gpt-3.5-turbo",
        "gemini:gemini-2.5-flash",
        "gemini:gemini-2.5-pro",
        "gemma:gemma-2-9b",
    ]
    assert DEFAULT_FALLBACK_PROVIDER_ID in catalog
    assert catalog.get("gemma:gemma-2-9b").cost_efficiency == 10


def test_catalog_rejects_duplicate_ids():
    with pytest.raises(StartupConfigError) as excinfo:
        ProviderCatalog.from_entries([_entry("a"), _entry("a")])

    assert excinfo.value.context["provider_id"] == "a"


def test_catalog_rejects_out_of_range_rating():
    with pytest.raises(StartupConfigError):
        ProviderCatalog.from_entries([_entry("a", speed=11)])


def test_catalog_rejects_empty_list():
    with pytest.raises(StartupConfigError):
        ProviderCatalog([])


def test_catalog_get_unknown_provider_raises_key_error():
    catalog = ProviderCatalog.from_entries([_entry("a")])

    with pytest.raises(KeyError):
        catalog.get("missing")
    assert "missing" not in catalog
    assert len(catalog) == 1


def test_catalog_from_json_file(tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"providers": [_entry("a"), _entry("b", family="gemini")]}))

    catalog = ProviderCatalog.from_file(path)

    assert [c.id for c in catalog] == ["a", "b"]
    assert catalog.get("b").family == "gemini"


def test_catalog_from_yaml_file(tmp_path: Path):
    yaml = pytest.importorskip("yaml")
    path = tmp_path / "catalog.yaml"
    path.write_text(yaml.safe_dump([_entry("only", strengths=["structured-output"])]))

    catalog = ProviderCatalog.from_file(path)

    assert "structured-output" in catalog.get("only").strengths


def test_catalog_from_missing_file_is_startup_error(tmp_path: Path):
    with pytest.raises(StartupConfigError):
        ProviderCatalog.from_file(tmp_path / "nope.json")


def test_catalog_from_unsupported_format(tmp_path: Path):
    path = tmp_path / "catalog.toml"
    path.write_text("")

    with pytest.raises(StartupConfigError):
        ProviderCatalog.from_file(path)
