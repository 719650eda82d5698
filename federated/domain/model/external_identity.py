"""External identity entity.

Links one account on an external provider to a local account.
"""

from datetime import datetime, timezone

from pydantic import Field

from federated.domain.model.common import DomainModel
from federated.domain.value import (
    AccountId,
    AuthScheme,
    Credentials,
    ExternalIdentityId,
    ProviderProfile,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExternalIdentity(DomainModel):
    """Third-party login linked to an account.

    An account can have many identities (one per provider account), but
    each ``(provider, external_id)`` pair exists at most once. ``profile``
    and ``credentials`` always hold the most recent login's assertion.
    """

    id: ExternalIdentityId
    account_id: AccountId
    provider: str  # e.g. "facebook", "google"
    auth_scheme: AuthScheme
    external_id: str  # Provider-scoped user ID
    profile: ProviderProfile
    credentials: Credentials
    created_at: datetime = Field(default_factory=_utcnow)
    modified_at: datetime = Field(default_factory=_utcnow)
