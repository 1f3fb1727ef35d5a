"""Per-family option structs accepted by the provider factories.

Every field a caller may override is optional here; which of them are
actually required is decided per provider by the registry, so that a missing
value surfaces as a ConfigurationError naming the field. Unknown fields are
rejected outright.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import ConfigDict, Field

from auth_providers.models.identity import CamelModel, User

ProfileMapper = Callable[[dict[str, Any], Any], User]


class AppleSecret(CamelModel):
    """The structured client secret Apple requires instead of a plain string."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    apple_id: str
    team_id: str
    private_key: str
    key_id: str


class EmailServerAuth(CamelModel):
    model_config = ConfigDict(frozen=True)

    user: str
    pass_: str = Field(alias="pass")


class EmailServer(CamelModel):
    """Structured SMTP connection target."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int
    auth: EmailServerAuth


class CredentialInput(CamelModel):
    """Sign-in form metadata for one submitted field. Purely descriptive."""

    model_config = ConfigDict(frozen=True)

    label: str | None = None
    type: str | None = None
    value: str | None = None
    placeholder: str | None = None


class OptionsModel(CamelModel):
    model_config = ConfigDict(extra="forbid")


class OAuthOptions(OptionsModel):
    """Common OAuth options. Anything left unset falls back to the Default Table."""

    name: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    version: str | None = None
    scope: str | None = None
    params: dict[str, str] | None = None
    access_token_url: str | None = None
    request_token_url: str | None = None
    authorization_url: str | None = None
    profile_url: str | None = None
    profile: ProfileMapper | None = None


class AppleOptions(OAuthOptions):
    # A plain string is accepted here only so the factory can reject it by name.
    client_secret: AppleSecret | str | None = None


class DomainOptions(OAuthOptions):
    """Auth0, Okta and Cognito live on a tenant-specific domain."""

    domain: str | None = None


class IdentityServer4Options(DomainOptions):
    id: str | None = None


class BattleNetOptions(OAuthOptions):
    region: str | None = None


class EmailOptions(OptionsModel):
    name: str | None = None
    server: str | EmailServer | None = None
    from_: str | None = Field(default=None, alias="from")
    max_age: int | None = Field(default=None, gt=0)
    send_verification_request: Callable[..., Any] | None = None


class CredentialsOptions(OptionsModel):
    id: str | None = None
    name: str | None = None
    credentials: dict[str, CredentialInput] | None = None
    authorize: Callable[[dict[str, str]], User | None] | None = None
