"""Async engine and session factory for the user-record store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from jwtauth.config import DatabaseSettings


def create_engine(database: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create the asyncpg-backed engine.

    ``command_timeout`` is handed to asyncpg so that a stuck statement
    fails the request instead of holding a pooled connection.

    Args:
        database: Database settings
        echo: Log every statement (debug only)
    """
    return create_async_engine(
        database.url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        connect_args={"command_timeout": database.command_timeout},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Domain models are rebuilt from rows, so nothing relies on ORM refresh
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
