"""Mock persistence providers for testing."""

from dishka import Scope, provide

from federated.domain.repository import (
    AccessTokenRepository,
    AccountRepository,
    ExternalIdentityRepository,
)
from federated.persistence.repository.inmemory import (
    InMemoryAccessTokenRepository,
    InMemoryAccountRepository,
    InMemoryExternalIdentityRepository,
)
from federated.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository()

    @provide(scope=Scope.REQUEST)
    def get_identity_repository(self) -> ExternalIdentityRepository:
        """Provide in-memory external identity repository."""
        return InMemoryExternalIdentityRepository()

    @provide(scope=Scope.REQUEST)
    def get_access_token_repository(self) -> AccessTokenRepository:
        """Provide in-memory access token repository."""
        return InMemoryAccessTokenRepository()
