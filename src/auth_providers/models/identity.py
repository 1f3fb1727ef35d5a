"""Foundation types: provider kind, the normalized user, and the shared model base."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProviderType(StrEnum):
    OAUTH = "oauth"
    EMAIL = "email"
    CREDENTIALS = "credentials"


class CamelModel(BaseModel):
    """Snake_case attributes that also read and write their camelCase names
    (clientId, accessTokenUrl, maxAge, ...)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        loc_by_alias=False,
    )


class User(BaseModel):
    """What a profile mapper or an authorize callback hands back to the framework."""

    id: str
    name: str | None = None
    email: str | None = None
    image: str | None = None
