"""Common options merging shared by every provider factory."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from auth_providers.errors import ConfigurationError
from auth_providers.models.options import OAuthOptions

COMMON_REQUIRED = ("client_id", "client_secret")


def is_unset(value: Any) -> bool:
    """None, an empty string and an empty mapping all count as "not supplied"."""
    if value is None:
        return True
    if isinstance(value, (str, Mapping)):
        return len(value) == 0
    return False


def require(provider_id: str, values: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise for the first field in ``fields`` that ``values`` leaves unset."""
    for field in fields:
        if is_unset(values.get(field)):
            raise ConfigurationError(provider_id, field)


def merge_common(provider_id: str, options: OAuthOptions, display_name: str) -> dict[str, Any]:
    """Resolve name, client_id and client_secret for an OAuth provider.

    The secret is passed through untouched; its shape is the factory's concern.
    """
    values = {field: getattr(options, field) for field in COMMON_REQUIRED}
    require(provider_id, values, COMMON_REQUIRED)
    values["name"] = display_name if is_unset(options.name) else options.name
    return values


def overlay(
    defaults: Mapping[str, Any], overrides: Mapping[str, Any]
) -> tuple[dict[str, Any], list[str]]:
    """Shallow, field-by-field merge where a supplied caller value always wins.

    Returns the merged mapping and the names of the fields the caller overrode.
    """
    merged = dict(defaults)
    overridden: list[str] = []
    for key, value in overrides.items():
        if is_unset(value):
            continue
        merged[key] = value
        if key in defaults:
            overridden.append(key)
    return merged, overridden
