"""In-memory account repository for testing."""

from typing import Any, Optional

from federated.domain.error import NotFoundError
from federated.domain.model.account import Account
from federated.domain.repository.account import AccountRepository
from federated.domain.value import AccountId, AccountQuery

UNIQUE_FIELDS = ("username", "email")


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing.

    No ``await`` happens between lookup and insert in ``find_or_create``, so
    concurrent coroutines on one event loop cannot both create an account.
    """

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}

    def _find_one(self, query: AccountQuery) -> Optional[Account]:
        for account in sorted(self._accounts.values(), key=lambda a: a.created_at):
            if query.matches(account.snapshot()):
                return account
        return None

    def _check_unique(self, account_id: AccountId, fields: dict[str, Any]) -> None:
        for field in UNIQUE_FIELDS:
            value = fields.get(field)
            if value is None:
                continue
            for other in self._accounts.values():
                if other.id != account_id and getattr(other, field) == value:
                    raise ValueError(f"{field} '{value}' is already taken")

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        return self._accounts.get(account_id)

    async def find_one(self, query: AccountQuery) -> Optional[Account]:
        """Find the first account matching the query."""
        return self._find_one(query)

    async def find_or_create(
        self, query: AccountQuery, defaults: Account
    ) -> tuple[Account, bool]:
        """Return the matching account, creating it from defaults if absent."""
        existing = self._find_one(query)
        if existing:
            return existing, False

        self._check_unique(defaults.id, defaults.snapshot())
        self._accounts[defaults.id] = defaults
        return defaults, True

    async def update(self, account_id: AccountId, changes: dict[str, Any]) -> Account:
        """Apply field changes to an account."""
        account = self._accounts.get(account_id)
        if not account:
            raise NotFoundError("Account", str(account_id))

        values = {
            key: value
            for key, value in changes.items()
            if key not in Account.PROTECTED_FIELDS
        }
        self._check_unique(account_id, values)
        updated = account.model_copy(update=values)
        self._accounts[account_id] = updated
        return updated
