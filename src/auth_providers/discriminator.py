"""Branch on a descriptor's ``type`` safely.

Statically, ``narrow`` and the ``is_*`` guards give type checkers the variant.
At run time, ``validate_descriptor`` turns raw mappings (custom providers)
into the right model and rejects anything whose ``type`` is not one of the
three known kinds.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import partial
from typing import Annotated, Any, Literal, TypeGuard, TypeVar, overload

from pydantic import Discriminator, Tag, TypeAdapter, ValidationError

from auth_providers.errors import ConfigurationError
from auth_providers.models.descriptors import (
    AppleProvider,
    BattleNetProvider,
    CredentialsProvider,
    DomainOAuthProvider,
    EmailProvider,
    OAuthProvider,
)
from auth_providers.models.identity import ProviderType

T = TypeVar("T")

_KNOWN_TYPES = frozenset(kind.value for kind in ProviderType)


def _descriptor_tag(value: Any) -> str | None:
    """Pick the concrete model for a descriptor, OAuth extensions included.

    Only the ``apple`` id maps to the structured-secret variant, so a mapping
    secret on any other OAuth id is rejected as a non-string ``client_secret``.
    """
    get = value.get if isinstance(value, Mapping) else partial(getattr, value)
    kind = get("type", None)
    if kind != ProviderType.OAUTH:
        return kind
    if get("id", None) == "apple":
        return "apple"
    if get("region", None):
        return "battlenet"
    if get("domain", None):
        return "domain"
    return "oauth"


ProviderDescriptor = Annotated[
    Annotated[OAuthProvider, Tag("oauth")]
    | Annotated[DomainOAuthProvider, Tag("domain")]
    | Annotated[BattleNetProvider, Tag("battlenet")]
    | Annotated[AppleProvider, Tag("apple")]
    | Annotated[EmailProvider, Tag("email")]
    | Annotated[CredentialsProvider, Tag("credentials")],
    Discriminator(_descriptor_tag),
]

_ADAPTER: TypeAdapter[ProviderDescriptor] = TypeAdapter(ProviderDescriptor)

_DESCRIPTOR_TYPES = (OAuthProvider, EmailProvider, CredentialsProvider)


def validate_descriptor(obj: Any) -> ProviderDescriptor:
    """Return ``obj`` as a descriptor, building it from a mapping if needed."""
    if isinstance(obj, _DESCRIPTOR_TYPES):
        if obj.type not in _KNOWN_TYPES:
            raise ConfigurationError(obj.id, "type", f"unrecognized provider type {obj.type!r}")
        return obj
    if not isinstance(obj, Mapping):
        raise ConfigurationError(
            None, "type", f"not a provider descriptor: {type(obj).__name__}"
        )

    provider_id = obj.get("id")
    kind = obj.get("type")
    if kind not in _KNOWN_TYPES:
        raise ConfigurationError(provider_id, "type", f"unrecognized provider type {kind!r}")
    try:
        return _ADAPTER.validate_python(obj)
    except ValidationError as exc:
        loc = exc.errors()[0].get("loc", ())
        skip = 1 if loc and loc[0] == _descriptor_tag(obj) else 0
        raise ConfigurationError.from_validation(provider_id, exc, skip=skip) from exc


def is_oauth(descriptor: ProviderDescriptor) -> TypeGuard[OAuthProvider]:
    return descriptor.type == ProviderType.OAUTH


def is_email(descriptor: ProviderDescriptor) -> TypeGuard[EmailProvider]:
    return descriptor.type == ProviderType.EMAIL


def is_credentials(descriptor: ProviderDescriptor) -> TypeGuard[CredentialsProvider]:
    return descriptor.type == ProviderType.CREDENTIALS


@overload
def narrow(descriptor: ProviderDescriptor, kind: Literal["oauth"]) -> OAuthProvider: ...
@overload
def narrow(descriptor: ProviderDescriptor, kind: Literal["email"]) -> EmailProvider: ...
@overload
def narrow(descriptor: ProviderDescriptor, kind: Literal["credentials"]) -> CredentialsProvider: ...
def narrow(descriptor: ProviderDescriptor, kind: str) -> ProviderDescriptor:
    """Return ``descriptor`` typed as the ``kind`` variant, or raise if it is another kind."""
    if kind not in _KNOWN_TYPES:
        raise ConfigurationError(descriptor.id, "type", f"unrecognized provider type {kind!r}")
    if descriptor.type != kind:
        raise ConfigurationError(
            descriptor.id, "type", f"expected a {kind} provider, got {descriptor.type}"
        )
    return descriptor


def dispatch(
    descriptor: ProviderDescriptor,
    *,
    oauth: Callable[[OAuthProvider], T],
    email: Callable[[EmailProvider], T],
    credentials: Callable[[CredentialsProvider], T],
) -> T:
    """Call the handler for the descriptor's kind. Every kind must be handled."""
    match descriptor.type:
        case ProviderType.OAUTH:
            return oauth(descriptor)  # type: ignore[arg-type]
        case ProviderType.EMAIL:
            return email(descriptor)  # type: ignore[arg-type]
        case ProviderType.CREDENTIALS:
            return credentials(descriptor)  # type: ignore[arg-type]
        case other:
            raise ConfigurationError(descriptor.id, "type", f"unrecognized provider type {other!r}")
