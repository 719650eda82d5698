"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from federated.domain.model.account import Account
from federated.domain.value import AccountId, AccountQuery


class AccountRepository(ABC):
    """Repository for the Account aggregate.

    The active account store is whatever implementation is bound to this
    interface, so a different account model can be plugged in without
    touching the login flow.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_one(self, query: AccountQuery) -> Optional[Account]:
        """Find the first account matching any predicate of the query.

        Args:
            query: OR of field-equality predicates

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_or_create(
        self, query: AccountQuery, defaults: Account
    ) -> tuple[Account, bool]:
        """Return the account matching the query, creating it if absent.

        Must be atomic: concurrent callers with overlapping queries end up
        with the same account.

        Args:
            query: Lookup for an existing account
            defaults: Account to insert when none matches

        Returns:
            Tuple of (account, whether it was created)
        """
        pass

    @abstractmethod
    async def update(self, account_id: AccountId, changes: dict[str, Any]) -> Account:
        """Apply field changes to an account.

        Args:
            account_id: The account to update
            changes: Field name to new value

        Returns:
            The updated account

        Raises:
            NotFoundError: If the account does not exist
        """
        pass
