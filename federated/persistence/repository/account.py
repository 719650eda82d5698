"""PostgreSQL implementation of Account repository."""

from typing import Any, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from federated.domain.error import NotFoundError
from federated.domain.model import Account
from federated.domain.repository import AccountRepository
from federated.domain.value import AccountId, AccountQuery
from federated.persistence.database import insert_ignoring_conflicts
from federated.persistence.mappers import (
    account_changes_to_dict,
    account_to_dict,
    row_to_account,
)
from federated.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: Account ID to look up

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_one(self, query: AccountQuery) -> Optional[Account]:
        """Find the first account matching any predicate of the query.

        Args:
            query: OR of field-equality predicates

        Returns:
            Account if found, None otherwise
        """
        clause = or_(
            *[
                and_(*[accounts_table.c[field] == value for field, value in predicate.items()])
                for predicate in query.any_of
            ]
        )
        stmt = (
            select(accounts_table)
            .where(clause)
            .order_by(accounts_table.c.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_or_create(
        self, query: AccountQuery, defaults: Account
    ) -> tuple[Account, bool]:
        """Return the account matching the query, creating it if absent.

        The insert skips rows that collide on username or email, so a
        concurrent login that lost the race re-reads the winner's account.

        Args:
            query: Lookup for an existing account
            defaults: Account to insert when none matches

        Returns:
            Tuple of (account, whether it was created)
        """
        existing = await self.find_one(query)
        if existing:
            return existing, False

        stmt = insert_ignoring_conflicts(
            self.session, accounts_table, account_to_dict(defaults)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()

        if result.rowcount == 1:
            return defaults, True

        winner = await self.find_one(query)
        if not winner:
            raise RuntimeError(
                f"Account insert conflicted but no account matches {query.any_of}"
            )
        return winner, False

    async def update(self, account_id: AccountId, changes: dict[str, Any]) -> Account:
        """Apply field changes to an account.

        Runs in a savepoint so a rejected update (e.g. a unique violation)
        leaves the surrounding transaction usable.

        Args:
            account_id: Account to update
            changes: Field name to new value

        Returns:
            Updated account

        Raises:
            NotFoundError: If the account does not exist
        """
        values = account_changes_to_dict(changes)
        async with self.session.begin_nested():
            stmt = (
                accounts_table.update()
                .where(accounts_table.c.id == account_id)
                .values(**values)
            )
            result = await self.session.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundError("Account", str(account_id))

        updated = await self.find_by_id(account_id)
        if not updated:
            raise NotFoundError("Account", str(account_id))
        return updated
