"""The ordered set of descriptors handed to the framework."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from auth_providers.discriminator import ProviderDescriptor, validate_descriptor
from auth_providers.errors import ConfigurationError
from auth_providers.models.descriptors import AppProvider
from auth_providers.models.identity import ProviderType

logger = logging.getLogger(__name__)


def provider_urls(base_url: str, provider_id: str) -> tuple[str, str]:
    """Sign-in and callback URLs for one provider under ``base_url``."""
    base = base_url.rstrip("/")
    return f"{base}/signin/{provider_id}", f"{base}/callback/{provider_id}"


def app_provider(descriptor: ProviderDescriptor, base_url: str) -> AppProvider:
    """Project a descriptor onto the secret-free view a client renderer may see."""
    signin_url, callback_url = provider_urls(base_url, descriptor.id)
    return AppProvider(
        id=descriptor.id,
        name=descriptor.name,
        type=descriptor.type,
        signin_url=signin_url,
        callback_url=callback_url,
    )


class ProviderCollection:
    """Ordered, immutable sequence of descriptors with unique ids.

    Built all at once: if any item is invalid or reuses an id, nothing is built.
    Items may be descriptors or raw descriptor mappings for custom providers.
    """

    def __init__(self, descriptors: Iterable[ProviderDescriptor | dict[str, Any]] = ()) -> None:
        by_id: dict[str, ProviderDescriptor] = {}
        for item in descriptors:
            descriptor = validate_descriptor(item)
            if descriptor.id in by_id:
                raise ConfigurationError(descriptor.id, "id", "already used by another provider")
            by_id[descriptor.id] = descriptor
        self._by_id = by_id
        self._items = tuple(by_id.values())
        logger.info("Configured %d provider(s): %s", len(self._items), ", ".join(by_id) or "none")

    def __iter__(self) -> Iterator[ProviderDescriptor]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._by_id

    def __getitem__(self, index: int) -> ProviderDescriptor:
        return self._items[index]

    def __repr__(self) -> str:
        return f"ProviderCollection({list(self._by_id)!r})"

    def get(self, provider_id: str) -> ProviderDescriptor | None:
        return self._by_id.get(provider_id)

    def ids(self) -> list[str]:
        return list(self._by_id)

    def of_type(self, kind: ProviderType | str) -> list[ProviderDescriptor]:
        return [d for d in self._items if d.type == kind]

    def app_providers(self, base_url: str) -> list[AppProvider]:
        return [app_provider(d, base_url) for d in self._items]


def build_collection(*descriptors: ProviderDescriptor | dict[str, Any]) -> ProviderCollection:
    """Assemble descriptors, in call order, into a collection."""
    return ProviderCollection(descriptors)
