"""In-memory external identity repository for testing."""

from typing import Optional

from federated.domain.error import NotFoundError
from federated.domain.model.external_identity import ExternalIdentity
from federated.domain.repository.external_identity import ExternalIdentityRepository
from federated.domain.value import AccountId, ExternalIdentityId


class InMemoryExternalIdentityRepository(ExternalIdentityRepository):
    """In-memory implementation of ExternalIdentityRepository for testing."""

    def __init__(self) -> None:
        self._identities: list[ExternalIdentity] = []

    async def find_by_id(
        self, identity_id: ExternalIdentityId
    ) -> Optional[ExternalIdentity]:
        """Find identity by ID."""
        for identity in self._identities:
            if identity.id == identity_id:
                return identity
        return None

    async def find_by_provider(
        self, provider: str, external_id: str
    ) -> Optional[ExternalIdentity]:
        """Find identity by provider and provider user ID."""
        for identity in self._identities:
            if identity.provider == provider and identity.external_id == external_id:
                return identity
        return None

    async def find_or_create_by_external_id(
        self, external_id: str, defaults: ExternalIdentity
    ) -> tuple[ExternalIdentity, bool]:
        """Return the identity with this external ID, creating it if absent."""
        for identity in self._identities:
            if identity.external_id == external_id:
                return identity, False

        self._identities.append(defaults)
        return defaults, True

    async def update(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Replace the stored identity with the same ID."""
        for i, existing in enumerate(self._identities):
            if existing.id == identity.id:
                self._identities[i] = identity
                return identity
        raise NotFoundError("ExternalIdentity", str(identity.id))

    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Find all identities for an account."""
        matches = [i for i in self._identities if i.account_id == account_id]
        # Sort by created_at
        matches.sort(key=lambda i: i.created_at)
        return matches
