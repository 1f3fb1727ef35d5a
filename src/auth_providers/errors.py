"""The single error raised while turning provider options into descriptors."""

from __future__ import annotations

from pydantic import ValidationError


class ConfigurationError(ValueError):
    """A provider could not be configured.

    Carries the provider id (None when the failure happens before an id is
    known) and the name of the offending field.
    """

    def __init__(self, provider_id: str | None, field: str, message: str | None = None) -> None:
        self.provider_id = provider_id
        self.field = field
        detail = message or "missing required field"
        super().__init__(f"provider {provider_id or '<unknown>'!r}: {field}: {detail}")

    @classmethod
    def from_validation(
        cls, provider_id: str | None, exc: ValidationError, *, skip: int = 0
    ) -> ConfigurationError:
        """Collapse a pydantic ValidationError onto its first offending field.

        ``skip`` drops leading location parts, such as a tagged-union tag.
        """
        first = exc.errors()[0]
        loc = [str(part) for part in first.get("loc", ())][skip:]
        field = loc[0] if loc else "options"
        if first.get("type") == "missing":
            return cls(provider_id, field)
        return cls(provider_id, field, first.get("msg", "invalid value"))
