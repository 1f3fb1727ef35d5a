"""Tests for the app-facing provider exporters."""

import json
from pathlib import Path

import yaml

from auth_providers import providers
from auth_providers.collection import build_collection
from auth_providers.export.json import export_app_providers_json
from auth_providers.export.yaml import export_app_providers_yaml
from auth_providers.models.descriptors import AppProvider


def _app_providers() -> list[AppProvider]:
    collection = build_collection(
        providers.github(client_id="id", client_secret="secret"),
        providers.credentials(authorize=lambda submitted: None),
    )
    return collection.app_providers("https://app.test")


def test_json(tmp_path: Path) -> None:
    output = tmp_path / "providers.json"
    export_app_providers_json(_app_providers(), output)
    data = json.loads(output.read_text())
    assert data == [
        {
            "id": "github",
            "name": "GitHub",
            "type": "oauth",
            "signinUrl": "https://app.test/signin/github",
            "callbackUrl": "https://app.test/callback/github",
        },
        {
            "id": "credentials",
            "name": "Credentials",
            "type": "credentials",
            "signinUrl": "https://app.test/signin/credentials",
            "callbackUrl": "https://app.test/callback/credentials",
        },
    ]


def test_yaml(tmp_path: Path) -> None:
    output = tmp_path / "providers.yaml"
    export_app_providers_yaml(_app_providers(), output)
    data = yaml.safe_load(output.read_text())
    assert [p["id"] for p in data] == ["github", "credentials"]
    assert data[1]["type"] == "credentials"
    assert list(data[0]) == ["id", "name", "type", "signinUrl", "callbackUrl"]


def test_empty_list(tmp_path: Path) -> None:
    output = tmp_path / "providers.json"
    export_app_providers_json([], output)
    assert json.loads(output.read_text()) == []
