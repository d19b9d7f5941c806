"""Refresh session store providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from redis.asyncio import ConnectionPool, Redis

from jwtauth.config import SessionStoreSettings
from jwtauth.domain.repository import SessionStore
from jwtauth.persistence.session import RedisSessionStore
from jwtauth.util.di.base import ProviderBase
from jwtauth.util.observability import instrument_redis


class SessionStoreProvider(ProviderBase):
    """Session store component base."""

    __mock_component__ = "session_store"


class ProdSessionStoreProvider(SessionStoreProvider):
    """Redis-backed session store, shared by all requests."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    async def get_redis(self, config: SessionStoreSettings) -> AsyncIterator[Redis]:
        """Pooled client; pool and client close with the container."""
        instrument_redis()
        pool = ConnectionPool.from_url(
            config.url,
            max_connections=config.pool_size,
            socket_timeout=config.operation_timeout_seconds,
            socket_connect_timeout=config.operation_timeout_seconds,
        )
        client = Redis(connection_pool=pool)
        yield client
        await client.aclose()
        await pool.aclose()

    @provide
    def get_session_store(
        self, client: Redis, config: SessionStoreSettings
    ) -> SessionStore:
        return RedisSessionStore(
            client=client,
            key_prefix=config.key_prefix,
            operation_timeout=config.operation_timeout_seconds,
        )
