"""Refresh session store implementations."""

from .inmemory import InMemorySessionStore
from .redis import RedisSessionStore

__all__ = [
    "InMemorySessionStore",
    "RedisSessionStore",
]
