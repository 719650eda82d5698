"""Provider profile value objects.

Profiles follow the normalized passport layout
(http://passportjs.org/guide/profile): ``id``, ``username``, ``displayName``,
``emails``, ``photos`` and the raw provider payload under ``_json``.
"""

from typing import Any

from pydantic import Field, field_validator

from federated.domain.value.common import PayloadObject


class ProfileEmail(PayloadObject):
    """An email address reported by the provider."""

    value: str
    type: str | None = None
    verified: bool | None = None


class ProfilePhoto(PayloadObject):
    """A photo URL reported by the provider."""

    value: str


class ProviderProfile(PayloadObject):
    """User profile asserted by an external identity provider."""

    id: str | None = None
    openid: str | None = None
    provider: str | None = None
    username: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")
    emails: list[ProfileEmail] = Field(default_factory=list)
    photos: list[ProfilePhoto] = Field(default_factory=list)
    raw: dict[str, Any] = Field(default_factory=dict, alias="_json")

    @field_validator("id", "openid", "username", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        """Providers often send numeric IDs; store them as strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def external_id(self) -> str | None:
        """Provider-scoped user ID, falling back to the OpenID identifier."""
        return self.id or self.openid

    @property
    def primary_email(self) -> str | None:
        """First email the provider listed, if any."""
        if self.emails and self.emails[0].value:
            return self.emails[0].value
        return None

    @property
    def handle(self) -> str | None:
        """Username if the provider has one, otherwise the external ID."""
        return self.username or self.external_id

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the provider's key layout for storage."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
