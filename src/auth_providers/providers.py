"""Built-in provider factories.

Each factory takes that provider's options, as keywords (snake_case or
camelCase) or as a mapping, and returns a frozen descriptor:

    >>> github(client_id="abc", client_secret="s3cret").scope
    'user'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from auth_providers.defaults import bare_host, battlenet_region_host
from auth_providers.models.descriptors import (
    AppleProvider,
    BattleNetProvider,
    CredentialsProvider,
    DomainOAuthProvider,
    EmailProvider,
    OAuthProvider,
)
from auth_providers.models.identity import ProviderType
from auth_providers.models.options import (
    AppleOptions,
    BattleNetOptions,
    CredentialsOptions,
    DomainOptions,
    EmailOptions,
    IdentityServer4Options,
    OAuthOptions,
)
from auth_providers.registry import ProviderRegistry, ProviderSpec

Options = Mapping[str, Any] | None


def _domain_context(options: DomainOptions) -> dict[str, str]:
    return {"domain": bare_host(options.domain or "")}


def _region_context(options: BattleNetOptions) -> dict[str, str]:
    return {"region_host": battlenet_region_host(options.region or "")}


def _plain(provider_id: str) -> ProviderSpec:
    return ProviderSpec(provider_id, ProviderType.OAUTH, OAuthOptions, OAuthProvider)


def _domain_scoped(provider_id: str, *required: str) -> ProviderSpec:
    return ProviderSpec(
        provider_id,
        ProviderType.OAUTH,
        IdentityServer4Options if "id" in required else DomainOptions,
        DomainOAuthProvider,
        required=(*required, "domain"),
        url_context=_domain_context,
    )


SPECS: tuple[ProviderSpec, ...] = (
    ProviderSpec("apple", ProviderType.OAUTH, AppleOptions, AppleProvider),
    _domain_scoped("auth0"),
    _plain("basecamp"),
    ProviderSpec(
        "battlenet",
        ProviderType.OAUTH,
        BattleNetOptions,
        BattleNetProvider,
        required=("region",),
        url_context=_region_context,
    ),
    _plain("box"),
    _domain_scoped("cognito"),
    ProviderSpec("credentials", ProviderType.CREDENTIALS, CredentialsOptions, CredentialsProvider),
    _plain("discord"),
    ProviderSpec("email", ProviderType.EMAIL, EmailOptions, EmailProvider),
    _plain("facebook"),
    _plain("github"),
    _plain("gitlab"),
    _plain("google"),
    _domain_scoped("identity-server4", "id", "scope"),
    _plain("linkedin"),
    _plain("mixer"),
    _domain_scoped("okta"),
    _plain("reddit"),
    _plain("slack"),
    _plain("spotify"),
    _plain("twitch"),
    _plain("twitter"),
    _plain("yandex"),
)

REGISTRY = ProviderRegistry(SPECS)


def apple(options: Options = None, /, **kwargs: Any) -> AppleProvider:
    """Sign in with Apple. ``client_secret`` must be an AppleSecret or an equivalent mapping."""
    return cast(AppleProvider, REGISTRY.build("apple", options, **kwargs))


def auth0(options: Options = None, /, **kwargs: Any) -> DomainOAuthProvider:
    return cast(DomainOAuthProvider, REGISTRY.build("auth0", options, **kwargs))


def basecamp(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("basecamp", options, **kwargs))


def battlenet(options: Options = None, /, **kwargs: Any) -> BattleNetProvider:
    """Battle.net. ``region`` is one of US, EU, KR, TW or CN."""
    return cast(BattleNetProvider, REGISTRY.build("battlenet", options, **kwargs))


def box(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("box", options, **kwargs))


def cognito(options: Options = None, /, **kwargs: Any) -> DomainOAuthProvider:
    """Amazon Cognito user pool; ``domain`` is the pool's hosted UI domain."""
    return cast(DomainOAuthProvider, REGISTRY.build("cognito", options, **kwargs))


def credentials(options: Options = None, /, **kwargs: Any) -> CredentialsProvider:
    """Local credentials check. ``authorize`` is mandatory and is never called here."""
    return cast(CredentialsProvider, REGISTRY.build("credentials", options, **kwargs))


def discord(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("discord", options, **kwargs))


def email(options: Options = None, /, **kwargs: Any) -> EmailProvider:
    """Passwordless email sign-in.

    ``send_verification_request`` is mandatory. ``max_age`` defaults to 24 hours.
    A structured ``server`` needs a ``from`` address.
    """
    return cast(EmailProvider, REGISTRY.build("email", options, **kwargs))


def facebook(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("facebook", options, **kwargs))


def github(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("github", options, **kwargs))


def gitlab(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("gitlab", options, **kwargs))


def google(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("google", options, **kwargs))


def identity_server4(options: Options = None, /, **kwargs: Any) -> DomainOAuthProvider:
    """IdentityServer4. The caller picks the ``id`` and must state ``scope`` explicitly."""
    return cast(DomainOAuthProvider, REGISTRY.build("identity-server4", options, **kwargs))


def linkedin(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("linkedin", options, **kwargs))


def mixer(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("mixer", options, **kwargs))


def okta(options: Options = None, /, **kwargs: Any) -> DomainOAuthProvider:
    return cast(DomainOAuthProvider, REGISTRY.build("okta", options, **kwargs))


def reddit(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("reddit", options, **kwargs))


def slack(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("slack", options, **kwargs))


def spotify(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("spotify", options, **kwargs))


def twitch(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("twitch", options, **kwargs))


def twitter(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    """Twitter uses OAuth 1.0A, hence the request token URL."""
    return cast(OAuthProvider, REGISTRY.build("twitter", options, **kwargs))


def yandex(options: Options = None, /, **kwargs: Any) -> OAuthProvider:
    return cast(OAuthProvider, REGISTRY.build("yandex", options, **kwargs))
