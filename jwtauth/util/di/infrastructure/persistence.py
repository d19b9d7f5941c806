"""User-record store providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from jwtauth.config import Settings
from jwtauth.domain.repository import UserRepository
from jwtauth.persistence.database import create_engine, create_session_factory
from jwtauth.persistence.repository import PostgresUserRepository
from jwtauth.util.di.base import ProviderBase
from jwtauth.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL-backed user repository.

    One engine per container; one session, and so one transaction, per
    request.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings.database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Request transaction.

        Committed when the request scope closes, which includes requests
        whose domain or adapter errors the exception handlers turned into
        responses. Only an exception that escapes to the scope rolls it
        back. Constraint violations are undone by the repository's own
        savepoints.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn(
                    "Request transaction rolled back", error_type=type(e).__name__
                )
                await session.rollback()
                raise
            else:
                await session.commit()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)
