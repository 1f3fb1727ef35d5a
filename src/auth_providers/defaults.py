"""Built-in provider endpoints, scopes and profile mappers.

URL fields of tenant- or region-scoped providers are ``str.format`` templates
over ``{domain}`` (bare host) or ``{region_host}`` (scheme and host) and are
rendered by the registry before the caller's overrides are applied.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict

from auth_providers.errors import ConfigurationError
from auth_providers.models.descriptors import TokenParams
from auth_providers.models.identity import User
from auth_providers.models.options import ProfileMapper

_URL_FIELDS = ("access_token_url", "request_token_url", "authorization_url", "profile_url")


class ProviderDefaults(BaseModel):
    """Every OAuth descriptor field except id, client_id and client_secret."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = "2.0"
    scope: str = ""
    params: TokenParams = TokenParams()
    access_token_url: str
    request_token_url: str | None = None
    authorization_url: str
    profile_url: str | None = None
    profile: ProfileMapper

    def render(self, **context: str) -> ProviderDefaults:
        """Fill URL templates with ``context``. Returns self when there is nothing to fill."""
        if not context:
            return self
        update = {
            field: getattr(self, field).format(**context)
            for field in _URL_FIELDS
            if getattr(self, field) is not None
        }
        return self.model_copy(update=update)

    def as_fields(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "scope": self.scope,
            "params": self.params,
            "access_token_url": self.access_token_url,
            "request_token_url": self.request_token_url,
            "authorization_url": self.authorization_url,
            "profile_url": self.profile_url,
            "profile": self.profile,
        }


# ---------------------------------------------------------------------------
# Profile mappers: raw remote profile (plus tokens) to User
# ---------------------------------------------------------------------------


def _sub_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    """OIDC-style userinfo: the subject claim is the id."""
    return User(
        id=str(profile["sub"]),
        name=profile.get("name") or profile.get("nickname") or profile.get("username"),
        email=profile.get("email"),
        image=profile.get("picture"),
    )


def _apple_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    name = profile.get("name")
    if isinstance(name, dict):
        full_name = f"{name.get('firstName', '')} {name.get('lastName', '')}".strip()
    else:
        full_name = None
    return User(
        id=str(profile["sub"]),
        name=full_name or str(profile["sub"]),
        email=profile.get("email"),
    )


def _auth0_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(
        id=str(profile["sub"]),
        name=profile.get("nickname"),
        email=profile.get("email"),
        image=profile.get("picture"),
    )


def _basecamp_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    identity = profile["identity"]
    name = f"{identity.get('first_name', '')} {identity.get('last_name', '')}".strip()
    return User(id=str(identity["id"]), name=name or None, email=identity.get("email_address"))


def _battlenet_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(id=str(profile["id"]), name=profile.get("battletag"))


def _box_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(
        id=str(profile["id"]),
        name=profile.get("name"),
        email=profile.get("login"),
        image=profile.get("avatar_url"),
    )


def _cognito_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(id=str(profile["sub"]), name=profile.get("username"), email=profile.get("email"))


def _discord_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    user_id = str(profile["id"])
    avatar = profile.get("avatar")
    if avatar:
        fmt = "gif" if avatar.startswith("a_") else "png"
        image = f"https://cdn.discordapp.com/avatars/{user_id}/{avatar}.{fmt}"
    else:
        discriminator = int(profile.get("discriminator") or 0)
        image = f"https://cdn.discordapp.com/embed/avatars/{discriminator % 5}.png"
    return User(id=user_id, name=profile.get("username"), email=profile.get("email"), image=image)


def _facebook_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    picture = (profile.get("picture") or {}).get("data") or {}
    return User(
        id=str(profile["id"]),
        name=profile.get("name"),
        email=profile.get("email"),
        image=picture.get("url"),
    )


def _github_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(
        id=str(profile["id"]),
        name=profile.get("name") or profile.get("login"),
        email=profile.get("email"),
        image=profile.get("avatar_url"),
    )


def _gitlab_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(
        id=str(profile["id"]),
        name=profile.get("username"),
        email=profile.get("email"),
        image=profile.get("avatar_url"),
    )


def _google_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(
        id=str(profile["id"]),
        name=profile.get("name"),
        email=profile.get("email"),
        image=profile.get("picture"),
    )


def _linkedin_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    name = f"{profile.get('localizedFirstName', '')} {profile.get('localizedLastName', '')}"
    return User(id=str(profile["id"]), name=name.strip() or None)


def _mixer_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(
        id=str(profile["id"]),
        name=profile.get("username"),
        email=profile.get("email"),
        image=profile.get("avatarUrl"),
    )


def _reddit_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(id=str(profile["id"]), name=profile.get("name"))


def _slack_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    user = profile["user"]
    return User(
        id=str(user["id"]),
        name=user.get("name"),
        email=user.get("email"),
        image=user.get("image_512"),
    )


def _spotify_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    images = profile.get("images") or []
    return User(
        id=str(profile["id"]),
        name=profile.get("display_name"),
        email=profile.get("email"),
        image=images[0].get("url") if images else None,
    )


def _twitch_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    data = profile["data"][0]
    return User(
        id=str(data["id"]),
        name=data.get("display_name"),
        email=data.get("email"),
        image=data.get("profile_image_url"),
    )


_TWITTER_AVATAR_SUFFIX = re.compile(r"_normal\.(jpg|png|gif)$")


def _twitter_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    image = profile.get("profile_image_url_https")
    if image:
        # Full-size avatar instead of the 48x48 thumbnail
        image = _TWITTER_AVATAR_SUFFIX.sub(r".\1", image)
    return User(
        id=str(profile["id_str"]),
        name=profile.get("name"),
        email=profile.get("email"),
        image=image,
    )


def _yandex_profile(profile: dict[str, Any], tokens: Any = None) -> User:
    return User(
        id=str(profile["id"]),
        name=profile.get("real_name"),
        email=profile.get("default_email"),
    )


# ---------------------------------------------------------------------------
# The table
# ---------------------------------------------------------------------------

DEFAULTS: Mapping[str, ProviderDefaults] = MappingProxyType(
    {
        "apple": ProviderDefaults(
            name="Apple",
            scope="name email",
            access_token_url="https://appleid.apple.com/auth/token",
            authorization_url=(
                "https://appleid.apple.com/auth/authorize"
                "?response_type=code&id_token&response_mode=form_post"
            ),
            profile=_apple_profile,
        ),
        "auth0": ProviderDefaults(
            name="Auth0",
            scope="openid email profile",
            access_token_url="https://{domain}/oauth/token",
            authorization_url="https://{domain}/authorize?response_type=code",
            profile_url="https://{domain}/userinfo",
            profile=_auth0_profile,
        ),
        "basecamp": ProviderDefaults(
            name="Basecamp",
            access_token_url="https://launchpad.37signals.com/authorization/token?type=web_server",
            authorization_url="https://launchpad.37signals.com/authorization/new?type=web_server",
            profile_url="https://launchpad.37signals.com/authorization.json",
            profile=_basecamp_profile,
        ),
        "battlenet": ProviderDefaults(
            name="Battle.net",
            scope="openid",
            access_token_url="{region_host}/oauth/token",
            authorization_url="{region_host}/oauth/authorize?response_type=code",
            profile_url="{region_host}/oauth/userinfo",
            profile=_battlenet_profile,
        ),
        "box": ProviderDefaults(
            name="Box",
            access_token_url="https://api.box.com/oauth2/token",
            authorization_url="https://account.box.com/api/oauth2/authorize?response_type=code",
            profile_url="https://api.box.com/2.0/users/me",
            profile=_box_profile,
        ),
        "cognito": ProviderDefaults(
            name="Cognito",
            scope="openid profile email",
            access_token_url="https://{domain}/oauth2/token",
            authorization_url="https://{domain}/oauth2/authorize?response_type=code",
            profile_url="https://{domain}/oauth2/userInfo",
            profile=_cognito_profile,
        ),
        "discord": ProviderDefaults(
            name="Discord",
            scope="identify email",
            access_token_url="https://discord.com/api/oauth2/token",
            authorization_url=(
                "https://discord.com/api/oauth2/authorize?response_type=code&prompt=consent"
            ),
            profile_url="https://discord.com/api/users/@me",
            profile=_discord_profile,
        ),
        "facebook": ProviderDefaults(
            name="Facebook",
            scope="email",
            access_token_url="https://graph.facebook.com/oauth/access_token",
            authorization_url="https://www.facebook.com/v7.0/dialog/oauth?response_type=code",
            profile_url="https://graph.facebook.com/me?fields=email,name,picture",
            profile=_facebook_profile,
        ),
        "github": ProviderDefaults(
            name="GitHub",
            scope="user",
            access_token_url="https://github.com/login/oauth/access_token",
            authorization_url="https://github.com/login/oauth/authorize",
            profile_url="https://api.github.com/user",
            profile=_github_profile,
        ),
        "gitlab": ProviderDefaults(
            name="GitLab",
            scope="read_user",
            access_token_url="https://gitlab.com/oauth/token",
            authorization_url="https://gitlab.com/oauth/authorize?response_type=code",
            profile_url="https://gitlab.com/api/v4/user",
            profile=_gitlab_profile,
        ),
        "google": ProviderDefaults(
            name="Google",
            scope=(
                "https://www.googleapis.com/auth/userinfo.profile "
                "https://www.googleapis.com/auth/userinfo.email"
            ),
            access_token_url="https://accounts.google.com/o/oauth2/token",
            request_token_url="https://accounts.google.com/o/oauth2/auth",
            authorization_url="https://accounts.google.com/o/oauth2/auth?response_type=code",
            profile_url="https://www.googleapis.com/oauth2/v1/userinfo?alt=json",
            profile=_google_profile,
        ),
        "identity-server4": ProviderDefaults(
            name="IdentityServer4",
            scope="openid profile email",
            access_token_url="https://{domain}/connect/token",
            authorization_url="https://{domain}/connect/authorize?response_type=code",
            profile_url="https://{domain}/connect/userinfo",
            profile=_sub_profile,
        ),
        "linkedin": ProviderDefaults(
            name="LinkedIn",
            scope="r_liteprofile",
            access_token_url="https://www.linkedin.com/oauth/v2/accessToken",
            authorization_url="https://www.linkedin.com/oauth/v2/authorization?response_type=code",
            profile_url=(
                "https://api.linkedin.com/v2/me"
                "?projection=(id,localizedFirstName,localizedLastName)"
            ),
            profile=_linkedin_profile,
        ),
        "mixer": ProviderDefaults(
            name="Mixer",
            scope="user:read:self",
            access_token_url="https://mixer.com/api/v1/oauth/token",
            authorization_url="https://mixer.com/oauth/authorize?response_type=code",
            profile_url="https://mixer.com/api/v1/users/current",
            profile=_mixer_profile,
        ),
        "okta": ProviderDefaults(
            name="Okta",
            scope="openid profile email",
            access_token_url="https://{domain}/v1/token",
            authorization_url="https://{domain}/v1/authorize/?response_type=code",
            profile_url="https://{domain}/v1/userinfo/",
            profile=_sub_profile,
        ),
        "reddit": ProviderDefaults(
            name="Reddit",
            scope="identity",
            access_token_url="https://www.reddit.com/api/v1/access_token",
            authorization_url="https://www.reddit.com/api/v1/authorize?response_type=code",
            profile_url="https://oauth.reddit.com/api/v1/me",
            profile=_reddit_profile,
        ),
        "slack": ProviderDefaults(
            name="Slack",
            scope="identity.basic identity.email identity.avatar",
            access_token_url="https://slack.com/api/oauth.access",
            authorization_url="https://slack.com/oauth/authorize",
            profile_url="https://slack.com/api/users.identity",
            profile=_slack_profile,
        ),
        "spotify": ProviderDefaults(
            name="Spotify",
            scope="user-read-email",
            access_token_url="https://accounts.spotify.com/api/token",
            authorization_url="https://accounts.spotify.com/authorize?response_type=code",
            profile_url="https://api.spotify.com/v1/me",
            profile=_spotify_profile,
        ),
        "twitch": ProviderDefaults(
            name="Twitch",
            scope="user:read:email",
            access_token_url="https://id.twitch.tv/oauth2/token",
            authorization_url="https://id.twitch.tv/oauth2/authorize?response_type=code",
            profile_url="https://api.twitch.tv/helix/users",
            profile=_twitch_profile,
        ),
        "twitter": ProviderDefaults(
            name="Twitter",
            version="1.0A",
            access_token_url="https://api.twitter.com/oauth/access_token",
            request_token_url="https://api.twitter.com/oauth/request_token",
            authorization_url="https://api.twitter.com/oauth/authenticate",
            profile_url=(
                "https://api.twitter.com/1.1/account/verify_credentials.json?include_email=true"
            ),
            profile=_twitter_profile,
        ),
        "yandex": ProviderDefaults(
            name="Yandex",
            scope="login:email login:info",
            access_token_url="https://oauth.yandex.ru/token",
            request_token_url="https://oauth.yandex.ru/token",
            authorization_url="https://oauth.yandex.ru/authorize?response_type=code",
            profile_url="https://login.yandex.ru/info?format=json",
            profile=_yandex_profile,
        ),
    }
)

# 24 hours
EMAIL_MAX_AGE = 24 * 60 * 60

EMAIL_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {"id": "email", "name": "Email", "max_age": EMAIL_MAX_AGE}
)

CREDENTIALS_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {"id": "credentials", "name": "Credentials", "credentials": MappingProxyType({})}
)


def get_defaults(provider_id: str) -> ProviderDefaults:
    try:
        return DEFAULTS[provider_id]
    except KeyError:
        raise ConfigurationError(provider_id, "defaults", "no Default Table entry") from None


def bare_host(domain: str) -> str:
    """``https://tenant.auth0.com/`` and ``tenant.auth0.com`` both become ``tenant.auth0.com``."""
    host = re.sub(r"^https?://", "", domain.strip())
    return host.rstrip("/")


def battlenet_region_host(region: str) -> str:
    """China is served from its own domain; every other region is a battle.net subdomain."""
    if region.upper() == "CN":
        return "https://www.battlenet.com.cn"
    return f"https://{region.lower()}.battle.net"
