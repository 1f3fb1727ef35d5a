"""Tests for the common options merger."""

import pytest

from auth_providers.errors import ConfigurationError
from auth_providers.merge import is_unset, merge_common, overlay, require
from auth_providers.models.options import OAuthOptions


class TestIsUnset:
    def test_unset_values(self) -> None:
        assert is_unset(None)
        assert is_unset("")
        assert is_unset({})

    def test_set_values(self) -> None:
        assert not is_unset("x")
        assert not is_unset(0)
        assert not is_unset({"grant_type": "authorization_code"})
        assert not is_unset(len)


class TestMergeCommon:
    def test_name_defaults_to_display_name(self) -> None:
        merged = merge_common("github", OAuthOptions(client_id="a", client_secret="b"), "GitHub")
        assert merged == {"client_id": "a", "client_secret": "b", "name": "GitHub"}

    def test_caller_name_wins(self) -> None:
        options = OAuthOptions(client_id="a", client_secret="b", name="GitHub Enterprise")
        assert merge_common("github", options, "GitHub")["name"] == "GitHub Enterprise"

    def test_missing_field_named(self) -> None:
        with pytest.raises(ConfigurationError, match="client_secret") as exc_info:
            merge_common("gitlab", OAuthOptions(client_id="a"), "GitLab")
        assert exc_info.value.provider_id == "gitlab"

    def test_empty_string_is_missing(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            merge_common("gitlab", OAuthOptions(client_id="", client_secret="b"), "GitLab")
        assert exc_info.value.field == "client_id"


class TestOverlay:
    def test_caller_wins_when_set(self) -> None:
        merged, overridden = overlay(
            {"scope": "user", "version": "2.0"}, {"scope": "repo", "version": None}
        )
        assert merged == {"scope": "repo", "version": "2.0"}
        assert overridden == ["scope"]

    def test_new_keys_added_but_not_reported(self) -> None:
        merged, overridden = overlay({"scope": "user"}, {"domain": "tenant.test"})
        assert merged == {"scope": "user", "domain": "tenant.test"}
        assert overridden == []

    def test_defaults_not_mutated(self) -> None:
        defaults = {"scope": "user"}
        overlay(defaults, {"scope": "repo"})
        assert defaults == {"scope": "user"}


class TestRequire:
    def test_first_missing_field(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            require("okta", {"domain": None, "region": None}, ["domain", "region"])
        assert exc_info.value.field == "domain"

    def test_all_present(self) -> None:
        require("okta", {"domain": "dev.okta.com"}, ["domain"])
