"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from federated.config import Settings
from federated.domain.repository import (
    AccessTokenRepository,
    AccountRepository,
    ExternalIdentityRepository,
)
from federated.persistence.database import create_engine, create_session_factory
from federated.persistence.repository import (
    PostgresAccessTokenRepository,
    PostgresAccountRepository,
    PostgresExternalIdentityRepository,
)
from federated.util.di.base import ProviderBase
from federated.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed when the request scope closes cleanly, or
        rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, session: AsyncSession) -> AccountRepository:
        """Provide Account repository."""
        return PostgresAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_identity_repository(
        self, session: AsyncSession
    ) -> ExternalIdentityRepository:
        """Provide ExternalIdentity repository."""
        return PostgresExternalIdentityRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_access_token_repository(
        self, session: AsyncSession
    ) -> AccessTokenRepository:
        """Provide AccessToken repository."""
        return PostgresAccessTokenRepository(session)
