"""Provider factory registry: one generic merge routine per provider family.

A factory call runs the same steps for every provider. It validates the
options, starts from the default table, overlays caller fields, attaches the
literal id and type, then applies the provider's structural rules.
Nothing here performs I/O; the result is a frozen descriptor.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from auth_providers.defaults import CREDENTIALS_DEFAULTS, EMAIL_DEFAULTS, get_defaults
from auth_providers.errors import ConfigurationError
from auth_providers.merge import is_unset, merge_common, overlay, require
from auth_providers.models.descriptors import AppleProvider, Descriptor
from auth_providers.models.identity import ProviderType
from auth_providers.models.options import EmailServer, OptionsModel

logger = logging.getLogger(__name__)

_COMMON_FIELDS = frozenset({"name", "client_id", "client_secret"})


@dataclass(frozen=True)
class ProviderSpec:
    """Everything the generic merge needs to know about one provider."""

    provider_id: str
    kind: ProviderType
    options_model: type[OptionsModel]
    descriptor_model: type[Descriptor]
    required: tuple[str, ...] = ()
    url_context: Callable[[Any], dict[str, str]] | None = None


def _field_values(options: OptionsModel) -> dict[str, Any]:
    # getattr keeps nested models (AppleSecret, EmailServer) as instances
    return {name: getattr(options, name) for name in type(options).model_fields}


def _construct(spec: ProviderSpec, descriptor_id: str, fields: dict[str, Any]) -> Descriptor:
    try:
        return spec.descriptor_model.model_validate(fields)
    except ValidationError as exc:
        raise ConfigurationError.from_validation(descriptor_id, exc) from exc


def build_oauth(spec: ProviderSpec, options: OptionsModel) -> Descriptor:
    values = _field_values(options)
    require(spec.provider_id, values, spec.required)
    descriptor_id = values.pop("id", None) or spec.provider_id

    defaults = get_defaults(spec.provider_id)
    common = merge_common(descriptor_id, options, defaults.name)
    context = spec.url_context(options) if spec.url_context else {}
    table = defaults.render(**context).as_fields()

    overrides = {key: value for key, value in values.items() if key not in _COMMON_FIELDS}
    fields, overridden = overlay(table, overrides)
    fields.update(common)
    fields["id"] = descriptor_id

    if spec.descriptor_model is AppleProvider and isinstance(fields["client_secret"], str):
        raise ConfigurationError(
            descriptor_id,
            "client_secret",
            "Apple requires a structured secret (apple_id, team_id, private_key, key_id)",
        )

    logger.debug(
        "Configured %s from %s defaults; caller overrode %s",
        descriptor_id,
        spec.provider_id,
        ", ".join(overridden) or "nothing",
    )
    return _construct(spec, descriptor_id, fields)


def build_email(spec: ProviderSpec, options: OptionsModel) -> Descriptor:
    values = _field_values(options)
    provider_id = EMAIL_DEFAULTS["id"]
    if values["send_verification_request"] is None:
        raise ConfigurationError(provider_id, "send_verification_request")
    if isinstance(values["server"], EmailServer) and is_unset(values["from_"]):
        raise ConfigurationError(
            provider_id, "from", "a sender address is required with a structured server"
        )

    fields, overridden = overlay(EMAIL_DEFAULTS, values)
    fields["id"] = provider_id
    logger.debug("Configured email provider; caller overrode %s", ", ".join(overridden) or "nothing")
    return _construct(spec, provider_id, fields)


def build_credentials(spec: ProviderSpec, options: OptionsModel) -> Descriptor:
    values = _field_values(options)
    fields, overridden = overlay(CREDENTIALS_DEFAULTS, values)
    provider_id = fields["id"]
    if values["authorize"] is None:
        raise ConfigurationError(provider_id, "authorize")

    logger.debug(
        "Configured credentials provider %s; caller overrode %s",
        provider_id,
        ", ".join(overridden) or "nothing",
    )
    return _construct(spec, provider_id, fields)


_BUILDERS: dict[ProviderType, Callable[[ProviderSpec, OptionsModel], Descriptor]] = {
    ProviderType.OAUTH: build_oauth,
    ProviderType.EMAIL: build_email,
    ProviderType.CREDENTIALS: build_credentials,
}


class ProviderRegistry:
    """Maps provider identifiers to their specs and builds descriptors from options.

    Construction fails if an OAuth provider has no Default Table entry, so a
    missing entry is caught when the registry is built rather than on first use.
    """

    def __init__(self, specs: Iterable[ProviderSpec]) -> None:
        self._specs: dict[str, ProviderSpec] = {}
        for spec in specs:
            if spec.provider_id in self._specs:
                raise ConfigurationError(spec.provider_id, "id", "registered twice")
            if spec.kind == ProviderType.OAUTH:
                get_defaults(spec.provider_id)
            self._specs[spec.provider_id] = spec

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._specs

    def ids(self) -> list[str]:
        return list(self._specs)

    def spec(self, provider_id: str) -> ProviderSpec:
        try:
            return self._specs[provider_id]
        except KeyError:
            raise ConfigurationError(
                provider_id, "provider", f"unknown provider; expected one of {', '.join(self._specs)}"
            ) from None

    def parse_options(
        self, provider_id: str, options: Mapping[str, Any] | OptionsModel | None = None, **kwargs: Any
    ) -> OptionsModel:
        """Validate raw options against the provider's options struct."""
        spec = self.spec(provider_id)
        if isinstance(options, spec.options_model) and not kwargs:
            return options
        if isinstance(options, OptionsModel):
            options = _field_values(options)
        raw = {**(options or {}), **kwargs}
        try:
            return spec.options_model.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError.from_validation(provider_id, exc) from exc

    def build(
        self, provider_id: str, options: Mapping[str, Any] | OptionsModel | None = None, **kwargs: Any
    ) -> Descriptor:
        spec = self.spec(provider_id)
        parsed = self.parse_options(provider_id, options, **kwargs)
        return _BUILDERS[spec.kind](spec, parsed)

    def factory(self, provider_id: str) -> Callable[..., Descriptor]:
        spec = self.spec(provider_id)

        def _factory(
            options: Mapping[str, Any] | OptionsModel | None = None, /, **kwargs: Any
        ) -> Descriptor:
            return self.build(spec.provider_id, options, **kwargs)

        _factory.__name__ = spec.provider_id.replace("-", "_")
        return _factory
