"""Account aggregate root.

The local account a federated login resolves to. Accounts may be created
by a first login or exist beforehand (local signup, another provider).
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Optional

from pydantic import Field

from federated.domain.model.common import DomainModel
from federated.domain.value import AccountId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(DomainModel):
    """Local user account.

    Provider logins only ever fill the fields in ``MERGEABLE_FIELDS``;
    ``id`` and ``password`` are never rewritten once the account exists.
    """

    MERGEABLE_FIELDS: ClassVar[tuple[str, ...]] = (
        "username",
        "email",
        "name",
        "gender",
        "prefered_language",
        "avatar_url",
        "external_refs",
    )
    PROTECTED_FIELDS: ClassVar[tuple[str, ...]] = ("id", "password")

    id: AccountId
    username: Optional[str] = None
    email: Optional[str] = None
    password: str  # Salted hash, never the raw secret
    name: Optional[str] = None
    gender: Optional[str] = None
    prefered_language: Optional[str] = None
    avatar_url: Optional[str] = None
    external_refs: dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the persisted state as plain data."""
        return self.model_dump(mode="python")
