"""Canonical provider descriptors, one frozen model per ``type`` value.

              type           extension
    OAuth     "oauth"        DomainOAuthProvider (domain), BattleNetProvider
                             (region), AppleProvider (structured secret)
    Email     "email"
    Local     "credentials"

Extensions only add fields to the OAuth shape; they never change ``type``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, WrapSerializer

from auth_providers.models.identity import CamelModel, ProviderType, User
from auth_providers.models.options import (
    AppleSecret,
    CredentialInput,
    EmailServer,
    ProfileMapper,
)


class TokenParams(BaseModel):
    """Extra parameters sent with the token request. Keys stay snake_case on the wire."""

    model_config = ConfigDict(frozen=True, extra="allow")

    grant_type: str = "authorization_code"


class Descriptor(CamelModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str


# ---------------------------------------------------------------------------
# OAuth family
# ---------------------------------------------------------------------------


class OAuthProvider(Descriptor):
    type: Literal["oauth"] = "oauth"
    version: str
    scope: str
    params: TokenParams
    access_token_url: str
    request_token_url: str | None = None
    authorization_url: str
    profile_url: str | None = None
    profile: ProfileMapper
    client_id: str
    client_secret: str


class DomainOAuthProvider(OAuthProvider):
    """Auth0, Okta, Cognito and IdentityServer4 descriptors."""

    domain: str


class BattleNetProvider(OAuthProvider):
    region: str


class AppleProvider(OAuthProvider):
    """Sign in with Apple. The profile arrives in the ID token, so there is no profile URL."""

    id: Literal["apple"] = "apple"  # type: ignore[assignment]
    client_secret: AppleSecret  # type: ignore[assignment]
    protection: Literal["none"] = "none"
    id_token: Literal[True] = True


# ---------------------------------------------------------------------------
# Email and credentials
# ---------------------------------------------------------------------------


class EmailProvider(Descriptor):
    type: Literal["email"] = "email"
    server: str | EmailServer | None = None
    from_: str | None = Field(default=None, alias="from")
    max_age: int
    send_verification_request: Callable[..., Any]


# Read-only once validated; dumps as a plain dict
FormFields = Annotated[
    Mapping[str, CredentialInput],
    AfterValidator(MappingProxyType),
    WrapSerializer(lambda value, handler: handler(dict(value))),
]


class CredentialsProvider(Descriptor):
    type: Literal["credentials"] = "credentials"
    credentials: FormFields
    authorize: Callable[[dict[str, str]], User | None]


# ---------------------------------------------------------------------------
# Views handed to collaborators
# ---------------------------------------------------------------------------


class AppProvider(CamelModel):
    """Secret-free projection of a descriptor for client-side rendering."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: ProviderType
    signin_url: str
    callback_url: str


class VerificationRequest(CamelModel):
    """What an email provider's send_verification_request callback receives."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    url: str
    base_url: str
    token: str
    provider: EmailProvider


class VerificationOutcome(StrEnum):
    SENT = "sent"
    FAILED = "failed"


SendVerificationRequest = Callable[[VerificationRequest], VerificationOutcome]
