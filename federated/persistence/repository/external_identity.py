"""ExternalIdentity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from federated.domain.error import NotFoundError
from federated.domain.model import ExternalIdentity
from federated.domain.repository import ExternalIdentityRepository
from federated.domain.value import AccountId, ExternalIdentityId
from federated.persistence.database import insert_ignoring_conflicts
from federated.persistence.mappers import (
    external_identity_to_dict,
    row_to_external_identity,
)
from federated.persistence.tables import external_identities_table


class PostgresExternalIdentityRepository(ExternalIdentityRepository):
    """PostgreSQL implementation of ExternalIdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, identity_id: ExternalIdentityId
    ) -> Optional[ExternalIdentity]:
        """Get identity by ID.

        Args:
            identity_id: Identity ID to look up

        Returns:
            ExternalIdentity if found, None otherwise
        """
        stmt = select(external_identities_table).where(
            external_identities_table.c.id == identity_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_external_identity(dict(row))

    async def find_by_provider(
        self, provider: str, external_id: str
    ) -> Optional[ExternalIdentity]:
        """Get identity by provider and provider user ID.

        Args:
            provider: Provider name
            external_id: Provider-scoped user ID

        Returns:
            ExternalIdentity if found, None otherwise
        """
        stmt = select(external_identities_table).where(
            external_identities_table.c.provider == provider,
            external_identities_table.c.external_id == external_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_external_identity(dict(row))

    async def _find_by_external_id(self, external_id: str) -> Optional[ExternalIdentity]:
        stmt = (
            select(external_identities_table)
            .where(external_identities_table.c.external_id == external_id)
            .order_by(external_identities_table.c.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_external_identity(dict(row)) if row else None

    async def find_or_create_by_external_id(
        self, external_id: str, defaults: ExternalIdentity
    ) -> tuple[ExternalIdentity, bool]:
        """Return the identity with this external ID, creating it if absent.

        Args:
            external_id: Provider user ID to look up
            defaults: Identity to insert when none exists

        Returns:
            Tuple of (identity, whether it was created)
        """
        existing = await self._find_by_external_id(external_id)
        if existing:
            return existing, False

        stmt = insert_ignoring_conflicts(
            self.session,
            external_identities_table,
            external_identity_to_dict(defaults),
        )
        result = await self.session.execute(stmt)
        await self.session.flush()

        if result.rowcount == 1:
            return defaults, True

        # Lost the race on (provider, external_id)
        winner = await self.find_by_provider(defaults.provider, external_id)
        if not winner:
            raise RuntimeError(
                f"Identity insert conflicted but {defaults.provider}/{external_id} "
                "was not found"
            )
        return winner, False

    async def update(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Persist the profile, credentials and modified time of an identity.

        Args:
            identity: Identity with new values

        Returns:
            Updated identity

        Raises:
            NotFoundError: If the identity does not exist
        """
        values = external_identity_to_dict(identity)
        stmt = (
            external_identities_table.update()
            .where(external_identities_table.c.id == identity.id)
            .values(
                profile=values["profile"],
                credentials=values["credentials"],
                modified_at=values["modified_at"],
            )
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError("ExternalIdentity", str(identity.id))

        await self.session.flush()
        return identity

    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Find all identities for an account.

        Args:
            account_id: Account ID to find identities for

        Returns:
            List of ExternalIdentity objects (may be empty)
        """
        stmt = (
            select(external_identities_table)
            .where(external_identities_table.c.account_id == account_id)
            .order_by(external_identities_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_external_identity(dict(row)) for row in rows]
