"""JSON export of the app-facing provider list."""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter

from auth_providers.models.descriptors import AppProvider

_APP_PROVIDERS = TypeAdapter(list[AppProvider])


def export_app_providers_json(providers: list[AppProvider], output_path: Path) -> None:
    """Export app-facing providers as JSON, camelCase keys."""
    output_path.write_bytes(_APP_PROVIDERS.dump_json(providers, by_alias=True, indent=2))
