"""Access token issued after a successful login."""

from datetime import datetime, timedelta, timezone

from pydantic import Field

from federated.domain.model.common import DomainModel
from federated.domain.value import AccountId


class AccessToken(DomainModel):
    """Opaque bearer token tied to an account."""

    id: str  # The token string handed to the client
    account_id: AccountId
    ttl: int = Field(gt=0)  # Seconds
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def expires_at(self) -> datetime:
        """Moment the token stops being valid."""
        return self.created_at + timedelta(seconds=self.ttl)
