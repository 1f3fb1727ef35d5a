"""YAML export of the app-facing provider list."""

from __future__ import annotations

from pathlib import Path

import yaml

from auth_providers.models.descriptors import AppProvider


def export_app_providers_yaml(providers: list[AppProvider], output_path: Path) -> None:
    """Export app-facing providers as YAML, camelCase keys."""
    data = [provider.model_dump(mode="json", by_alias=True) for provider in providers]
    output_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))
