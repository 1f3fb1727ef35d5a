"""Tests for narrowing and validating descriptors by their type tag."""

import pytest

from auth_providers import providers
from auth_providers.collection import build_collection
from auth_providers.discriminator import (
    dispatch,
    is_credentials,
    is_email,
    is_oauth,
    narrow,
    validate_descriptor,
)
from auth_providers.errors import ConfigurationError
from auth_providers.models.descriptors import (
    AppleProvider,
    BattleNetProvider,
    CredentialsProvider,
    DomainOAuthProvider,
    EmailProvider,
    OAuthProvider,
    VerificationOutcome,
)
from auth_providers.models.identity import User


def _profile(profile: dict, tokens: object = None) -> User:
    return User(id=str(profile["sub"]))


def _custom_oauth(**overrides: object) -> dict:
    data = {
        "id": "custom",
        "name": "Custom IdP",
        "type": "oauth",
        "version": "2.0",
        "scope": "openid",
        "params": {"grant_type": "authorization_code"},
        "accessTokenUrl": "https://idp.test/token",
        "authorizationUrl": "https://idp.test/authorize",
        "profileUrl": "https://idp.test/userinfo",
        "profile": _profile,
        "clientId": "client",
        "clientSecret": "secret",
    }
    data.update(overrides)
    return data


def _github() -> OAuthProvider:
    return providers.github(client_id="id", client_secret="secret")


def _email() -> EmailProvider:
    return providers.email(send_verification_request=lambda request: VerificationOutcome.SENT)


def _credentials() -> CredentialsProvider:
    return providers.credentials(authorize=lambda submitted: None)


class TestNarrow:
    def test_matching_kind(self) -> None:
        descriptor = _github()
        assert narrow(descriptor, "oauth") is descriptor
        assert narrow(_email(), "email").max_age == 86400

    def test_mismatched_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="expected a email provider") as exc_info:
            narrow(_github(), "email")
        assert exc_info.value.field == "type"
        assert exc_info.value.provider_id == "github"

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="unrecognized"):
            narrow(_github(), "saml")  # type: ignore[call-overload]

    def test_guards(self) -> None:
        assert is_oauth(_github())
        assert is_email(_email())
        assert is_credentials(_credentials())
        assert not is_oauth(_email())


class TestDispatch:
    def test_every_kind(self) -> None:
        handlers = {
            "oauth": lambda d: f"oauth:{d.client_id}",
            "email": lambda d: f"email:{d.max_age}",
            "credentials": lambda d: f"credentials:{d.id}",
        }
        assert dispatch(_github(), **handlers) == "oauth:id"
        assert dispatch(_email(), **handlers) == "email:86400"
        assert dispatch(_credentials(), **handlers) == "credentials:credentials"

    def test_unrecognized_tag(self) -> None:
        # model_construct skips validation, so an impossible tag can slip in
        rogue = OAuthProvider.model_construct(id="rogue", name="Rogue", type="saml")
        with pytest.raises(ConfigurationError, match="unrecognized provider type"):
            dispatch(
                rogue,
                oauth=lambda d: None,
                email=lambda d: None,
                credentials=lambda d: None,
            )


class TestValidateDescriptor:
    def test_instance_passes_through(self) -> None:
        descriptor = _github()
        assert validate_descriptor(descriptor) is descriptor

    def test_plain_oauth_mapping(self) -> None:
        descriptor = validate_descriptor(_custom_oauth())
        assert type(descriptor) is OAuthProvider
        assert descriptor.access_token_url == "https://idp.test/token"

    def test_domain_mapping(self) -> None:
        descriptor = validate_descriptor(_custom_oauth(domain="idp.test"))
        assert type(descriptor) is DomainOAuthProvider

    def test_region_mapping(self) -> None:
        descriptor = validate_descriptor(_custom_oauth(region="EU"))
        assert type(descriptor) is BattleNetProvider

    def test_structured_secret_mapping(self) -> None:
        secret = {"appleId": "a", "teamId": "t", "privateKey": "p", "keyId": "k"}
        descriptor = validate_descriptor(_custom_oauth(id="apple", clientSecret=secret))
        assert type(descriptor) is AppleProvider
        assert descriptor.client_secret.apple_id == "a"

    def test_structured_secret_only_for_apple(self) -> None:
        secret = {"appleId": "a", "teamId": "t", "privateKey": "p", "keyId": "k"}
        mapping = _custom_oauth(id="github", clientSecret=secret)
        with pytest.raises(ConfigurationError) as exc_info:
            validate_descriptor(mapping)
        assert exc_info.value.provider_id == "github"
        assert exc_info.value.field == "client_secret"
        with pytest.raises(ConfigurationError):
            build_collection(mapping)

    def test_apple_needs_structured_secret(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            validate_descriptor(_custom_oauth(id="apple"))
        assert exc_info.value.field == "client_secret"

    def test_email_mapping(self) -> None:
        descriptor = validate_descriptor(
            {
                "id": "magic",
                "name": "Magic link",
                "type": "email",
                "maxAge": 600,
                "sendVerificationRequest": lambda request: VerificationOutcome.SENT,
            }
        )
        assert type(descriptor) is EmailProvider
        assert descriptor.max_age == 600

    def test_unknown_type(self) -> None:
        with pytest.raises(ConfigurationError, match="'saml'") as exc_info:
            validate_descriptor(_custom_oauth(type="saml"))
        assert exc_info.value.field == "type"
        assert exc_info.value.provider_id == "custom"

    def test_missing_type(self) -> None:
        data = _custom_oauth()
        del data["type"]
        with pytest.raises(ConfigurationError) as exc_info:
            validate_descriptor(data)
        assert exc_info.value.field == "type"

    def test_missing_field(self) -> None:
        data = _custom_oauth()
        del data["authorizationUrl"]
        with pytest.raises(ConfigurationError) as exc_info:
            validate_descriptor(data)
        assert exc_info.value.field == "authorization_url"

    def test_cross_variant_field(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            validate_descriptor(_custom_oauth(maxAge=60))
        assert exc_info.value.field == "maxAge"

    def test_not_a_descriptor(self) -> None:
        with pytest.raises(ConfigurationError, match="not a provider descriptor"):
            validate_descriptor(["github"])
