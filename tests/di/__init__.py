"""Mock providers for testing."""

from .naver import MockNaverProvider
from .persistence import MockPersistenceProvider
from .session_store import MockSessionStoreProvider
from .container import build_test_container

__all__ = [
    "MockNaverProvider",
    "MockPersistenceProvider",
    "MockSessionStoreProvider",
    "build_test_container",
]
