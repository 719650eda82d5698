"""External identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from federated.domain.model.external_identity import ExternalIdentity
from federated.domain.value import AccountId, ExternalIdentityId


class ExternalIdentityRepository(ABC):
    """Repository for ExternalIdentity entity.

    Manages the links between accounts and their external provider
    identities.
    """

    @abstractmethod
    async def find_by_id(
        self, identity_id: ExternalIdentityId
    ) -> Optional[ExternalIdentity]:
        """Find an identity by ID.

        Args:
            identity_id: The identity's unique identifier

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider(
        self, provider: str, external_id: str
    ) -> Optional[ExternalIdentity]:
        """Find an identity by provider and provider user ID.

        Args:
            provider: The provider name
            external_id: The user's ID on that provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_or_create_by_external_id(
        self, external_id: str, defaults: ExternalIdentity
    ) -> tuple[ExternalIdentity, bool]:
        """Return the identity with this external ID, creating it if absent.

        Must be atomic with respect to concurrent creation.

        Args:
            external_id: Provider user ID to look up
            defaults: Identity to insert when none exists

        Returns:
            Tuple of (identity, whether it was created)
        """
        pass

    @abstractmethod
    async def update(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Persist the mutable fields of an existing identity.

        Args:
            identity: Identity carrying the new profile, credentials and modified time

        Returns:
            The updated identity

        Raises:
            NotFoundError: If the identity does not exist
        """
        pass

    @abstractmethod
    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Get all identities linked to an account.

        Args:
            account_id: The account's unique identifier

        Returns:
            List of identities ordered by creation time (may be empty)
        """
        pass
