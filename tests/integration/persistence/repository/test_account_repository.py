"""Integration tests for PostgresAccountRepository.

Run against SQLite, which shares the conflict-ignoring insert the
find-or-create path relies on.
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from federated.domain.error import NotFoundError
from federated.domain.model import Account
from federated.domain.value import AccountId, AccountQuery
from federated.persistence.repository import PostgresAccountRepository


def make_account(**fields) -> Account:
    defaults = {"id": AccountId(uuid4()), "password": "stored-hash"}
    defaults.update(fields)
    return Account(**defaults)


class RacingAccountRepository(PostgresAccountRepository):
    """Repository whose first lookup misses, as if another login raced it."""

    def __init__(self, session):
        super().__init__(session)
        self._missed = False

    async def find_one(self, query):
        if not self._missed:
            self._missed = True
            return None
        return await super().find_one(query)


class TestAccountRepositoryIntegration:
    """Integration tests for PostgresAccountRepository."""

    @pytest.mark.asyncio
    async def test_find_or_create_inserts_once(self, sqlite_session):
        """The first call creates, the second finds the same account."""
        # Arrange
        repo = PostgresAccountRepository(sqlite_session)
        query = AccountQuery(any_of=({"username": "facebook.123"}, {"email": "a@x.com"}))
        account = make_account(
            username="facebook.123",
            email="a@x.com",
            external_refs={"fbid": "123"},
        )

        # Act
        created, was_created = await repo.find_or_create(query, account)
        found, was_found_created = await repo.find_or_create(
            query, make_account(username="facebook.123", email="a@x.com")
        )

        # Assert
        assert was_created is True
        assert was_found_created is False
        assert found.id == created.id
        assert found.external_refs == {"fbid": "123"}
        assert found.password == "stored-hash"

    @pytest.mark.asyncio
    async def test_find_one_matches_any_predicate(self, sqlite_session):
        """An email match is enough when the username differs."""
        # Arrange
        repo = PostgresAccountRepository(sqlite_session)
        account = make_account(username="alice", email="a@x.com")
        await repo.find_or_create(AccountQuery(any_of=({"username": "alice"},)), account)

        # Act
        found = await repo.find_one(
            AccountQuery(any_of=({"username": "facebook.123"}, {"email": "a@x.com"}))
        )
        missing = await repo.find_one(AccountQuery(any_of=({"email": "b@x.com"},)))

        # Assert
        assert found is not None
        assert found.id == account.id
        assert missing is None

    @pytest.mark.asyncio
    async def test_lost_race_returns_winner(self, sqlite_session):
        """An insert that conflicts re-reads the account that won."""
        # Arrange
        query = AccountQuery(any_of=({"username": "facebook.123"}, {"email": "a@x.com"}))
        winner = make_account(username="facebook.123", email="a@x.com")
        await PostgresAccountRepository(sqlite_session).find_or_create(query, winner)
        racing = RacingAccountRepository(sqlite_session)

        # Act
        account, created = await racing.find_or_create(
            query, make_account(username="facebook.123", email="a@x.com")
        )

        # Assert
        assert created is False
        assert account.id == winner.id

    @pytest.mark.asyncio
    async def test_update_applies_changes(self, sqlite_session):
        """Updates write mergeable fields and never the password."""
        # Arrange
        repo = PostgresAccountRepository(sqlite_session)
        account = make_account(username="alice")
        await repo.find_or_create(AccountQuery(any_of=({"username": "alice"},)), account)

        # Act
        updated = await repo.update(
            account.id,
            {"name": "A B", "external_refs": {"fbid": "1"}, "password": "other"},
        )

        # Assert
        assert updated.name == "A B"
        assert updated.external_refs == {"fbid": "1"}
        assert updated.password == "stored-hash"

    @pytest.mark.asyncio
    async def test_update_missing_account(self, sqlite_session):
        """Updating an unknown account raises NotFoundError."""
        repo = PostgresAccountRepository(sqlite_session)

        with pytest.raises(NotFoundError):
            await repo.update(AccountId(uuid4()), {"name": "A B"})

    @pytest.mark.asyncio
    async def test_rejected_update_keeps_session_usable(self, sqlite_session):
        """A unique violation rolls back only the update."""
        # Arrange
        repo = PostgresAccountRepository(sqlite_session)
        alice = make_account(username="alice")
        bob = make_account(username="bob")
        await repo.find_or_create(AccountQuery(any_of=({"username": "alice"},)), alice)
        await repo.find_or_create(AccountQuery(any_of=({"username": "bob"},)), bob)

        # Act
        with pytest.raises(IntegrityError):
            await repo.update(bob.id, {"username": "alice"})

        # Assert
        reloaded = await repo.find_by_id(bob.id)
        assert reloaded is not None
        assert reloaded.username == "bob"
        assert await repo.find_by_id(alice.id) is not None
