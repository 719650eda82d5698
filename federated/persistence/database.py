"""Database connection and session management.

Provides async database engine and session factory.
"""

from typing import Any

from sqlalchemy import Insert, Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from federated.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
    )


def insert_ignoring_conflicts(
    session: AsyncSession, table: Table, values: dict[str, Any]
) -> Insert:
    """Build an INSERT that silently skips rows violating a unique constraint.

    Used for find-or-create: the losing side of a race inserts nothing and
    re-reads the winner's row instead of failing.

    Args:
        session: Session whose dialect decides the statement flavour
        table: Target table
        values: Row values

    Returns:
        INSERT ... ON CONFLICT DO NOTHING statement

    Raises:
        NotImplementedError: For dialects without ON CONFLICT support
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(table).values(**values).on_conflict_do_nothing()
    if dialect == "sqlite":
        return sqlite.insert(table).values(**values).on_conflict_do_nothing()
    raise NotImplementedError(f"find-or-create is not supported on {dialect}")
