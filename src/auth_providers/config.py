"""YAML configuration for a provider collection.

    base_url: https://app.example.com/api/auth
    providers:
      - provider: github
        options:
          client_id: ${GITHUB_ID}
          client_secret: ${GITHUB_SECRET}
      - provider: credentials
        options:
          authorize: myapp.auth:check_password

``${VAR}`` placeholders come from the environment. Callback options are
``module:attribute`` import paths.
"""

from __future__ import annotations

import importlib
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from auth_providers.collection import ProviderCollection
from auth_providers.errors import ConfigurationError
from auth_providers.providers import REGISTRY

_ENV_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

CALLBACK_OPTIONS = frozenset(
    {
        "profile",
        "authorize",
        "send_verification_request",
        "sendVerificationRequest",
    }
)


def expand_env(value: Any, environ: Mapping[str, str] | None = None) -> Any:
    """Replace ``${VAR}`` placeholders in every string of a nested structure."""
    env = os.environ if environ is None else environ
    if isinstance(value, str):

        def _sub(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in env:
                raise ConfigurationError(None, name, "environment variable is not set")
            return env[name]

        return _ENV_PLACEHOLDER.sub(_sub, value)
    if isinstance(value, Mapping):
        return {key: expand_env(item, env) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item, env) for item in value]
    return value


def import_callable(path: str, provider_id: str | None = None, field: str = "callback") -> Any:
    """Resolve ``package.module:attribute`` to the object it names."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(provider_id, field, f"expected 'module:attribute', got {path!r}")
    try:
        target: Any = importlib.import_module(module_name)
        for part in attr.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(provider_id, field, f"cannot import {path!r}: {exc}") from exc
    if not callable(target):
        raise ConfigurationError(provider_id, field, f"{path!r} is not callable")
    return target


class ProviderEntry(BaseModel):
    """One provider in the config file: which factory, and its options."""

    provider: str
    options: dict[str, Any] = Field(default_factory=dict)

    def resolved_options(self) -> dict[str, Any]:
        resolved = dict(self.options)
        for key in CALLBACK_OPTIONS & resolved.keys():
            if isinstance(resolved[key], str):
                resolved[key] = import_callable(resolved[key], self.provider, key)
        return resolved


class ProvidersConfig(BaseModel):
    base_url: str | None = None
    providers: list[ProviderEntry] = Field(default_factory=list)

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], environ: Mapping[str, str] | None = None
    ) -> ProvidersConfig:
        try:
            return cls.model_validate(expand_env(dict(data), environ))
        except ValidationError as exc:
            raise ConfigurationError.from_validation(None, exc) from exc

    @classmethod
    def from_yaml(cls, path: Path, environ: Mapping[str, str] | None = None) -> ProvidersConfig:
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            raise ConfigurationError(None, "config", f"cannot parse {path}: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ConfigurationError(None, "config", f"{path} must contain a mapping")
        return cls.from_mapping(data, environ)

    def build(self) -> ProviderCollection:
        """Run every entry through its factory, in file order."""
        descriptors = [
            REGISTRY.build(entry.provider, entry.resolved_options()) for entry in self.providers
        ]
        return ProviderCollection(descriptors)
