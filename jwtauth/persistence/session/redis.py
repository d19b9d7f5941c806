"""Redis-backed refresh session store."""

import asyncio
from collections.abc import Awaitable
from typing import Optional, TypeVar

import logfire
from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from jwtauth.adapter.error import SessionStoreError, SessionStoreTimeoutError
from jwtauth.domain.repository import SessionStore
from jwtauth.domain.value import RefreshSession

T = TypeVar("T")


class RedisSessionStore(SessionStore):
    """Refresh sessions in Redis, one JSON value per email.

    Records are written with ``SET key value EX ttl`` so Redis expires
    them; each command is bounded by ``operation_timeout``.
    """

    def __init__(
        self,
        client: Redis,
        key_prefix: str = "refresh_token:",
        operation_timeout: float = 2.0,
    ) -> None:
        """Initialize Redis session store.

        Args:
            client: Async Redis client
            key_prefix: Prefix prepended to the email to form the key
            operation_timeout: Seconds allowed per Redis command
        """
        self.client = client
        self.key_prefix = key_prefix
        self.operation_timeout = operation_timeout

    def _key(self, email: str) -> str:
        return f"{self.key_prefix}{email}"

    async def _run(self, operation: str, command: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(command, timeout=self.operation_timeout)
        except (asyncio.TimeoutError, RedisTimeoutError) as e:
            logfire.error("Session store timed out", operation=operation)
            raise SessionStoreTimeoutError(
                f"Session store {operation} timed out"
            ) from e
        except RedisError as e:
            logfire.error(
                "Session store command failed", operation=operation, error=str(e)
            )
            raise SessionStoreError(f"Session store {operation} failed: {e}") from e

    async def put(self, session: RefreshSession) -> None:
        """Upsert the session with a server-side TTL."""
        if session.ttl_seconds <= 0:
            await self.delete(session.email)
            return
        await self._run(
            "put",
            self.client.set(
                self._key(session.email),
                session.model_dump_json(),
                ex=session.ttl_seconds,
            ),
        )

    async def get(self, email: str) -> Optional[RefreshSession]:
        """Load the session; unreadable records count as absent."""
        raw = await self._run("get", self.client.get(self._key(email)))
        if raw is None:
            return None
        try:
            session = RefreshSession.model_validate_json(raw)
        except ValidationError:
            logfire.warn("Discarding unreadable session record")
            return None
        return None if session.is_expired() else session

    async def delete(self, email: str) -> None:
        """Remove the session. Missing keys are fine."""
        await self._run("delete", self.client.delete(self._key(email)))
