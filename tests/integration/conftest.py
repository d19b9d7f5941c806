"""Integration suites need the PostgreSQL configured in the environment.

Run ``scripts/run_migrations.py`` against it first. When it cannot be
reached the suites here are skipped rather than failed.
"""

import asyncio

import pytest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from jwtauth.config import Settings
from jwtauth.persistence.database import create_engine


async def _ping() -> None:
    engine = create_engine(Settings().database)
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1 FROM user_identities LIMIT 1"))
    finally:
        await engine.dispose()


def _database_ready() -> bool:
    try:
        asyncio.run(asyncio.wait_for(_ping(), timeout=5))
    except (OSError, SQLAlchemyError, asyncio.TimeoutError):
        return False
    return True


DATABASE_READY = _database_ready()


@pytest.fixture(autouse=True)
def require_database():
    if not DATABASE_READY:
        pytest.skip("PostgreSQL with the jwtauth schema is not reachable")
