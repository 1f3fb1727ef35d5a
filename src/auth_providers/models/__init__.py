"""Provider descriptors, per-family options, and the normalized user."""

from auth_providers.models.descriptors import (
    AppleProvider,
    AppProvider,
    BattleNetProvider,
    CredentialsProvider,
    Descriptor,
    DomainOAuthProvider,
    EmailProvider,
    OAuthProvider,
    SendVerificationRequest,
    TokenParams,
    VerificationOutcome,
    VerificationRequest,
)
from auth_providers.models.identity import CamelModel, ProviderType, User
from auth_providers.models.options import (
    AppleOptions,
    AppleSecret,
    BattleNetOptions,
    CredentialInput,
    CredentialsOptions,
    DomainOptions,
    EmailOptions,
    EmailServer,
    EmailServerAuth,
    IdentityServer4Options,
    OAuthOptions,
    OptionsModel,
    ProfileMapper,
)

__all__ = [
    "AppProvider",
    "AppleOptions",
    "AppleProvider",
    "AppleSecret",
    "BattleNetOptions",
    "BattleNetProvider",
    "CamelModel",
    "CredentialInput",
    "CredentialsOptions",
    "CredentialsProvider",
    "Descriptor",
    "DomainOAuthProvider",
    "DomainOptions",
    "EmailOptions",
    "EmailProvider",
    "EmailServer",
    "EmailServerAuth",
    "IdentityServer4Options",
    "OAuthOptions",
    "OAuthProvider",
    "OptionsModel",
    "ProfileMapper",
    "ProviderType",
    "SendVerificationRequest",
    "TokenParams",
    "User",
    "VerificationOutcome",
    "VerificationRequest",
]
