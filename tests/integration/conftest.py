"""Fixtures for integration tests against a real SQL database.

The SQL repositories are exercised on an in-memory SQLite database, which
supports the same ``ON CONFLICT DO NOTHING`` inserts as PostgreSQL.
"""

import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from federated.persistence.database import create_session_factory
from federated.persistence.tables import metadata


@pytest_asyncio.fixture
async def sqlite_engine():
    """Fresh in-memory database with the full schema."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    # Let SQLAlchemy emit BEGIN itself so savepoints behave
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_session(sqlite_engine):
    """Session bound to the in-memory database."""
    session_factory = create_session_factory(sqlite_engine)
    async with session_factory() as session:
        yield session
