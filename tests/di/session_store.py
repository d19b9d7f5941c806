"""Mock session store providers for testing."""

from dishka import Scope, provide

from jwtauth.domain.repository import SessionStore
from jwtauth.persistence.session import InMemorySessionStore
from jwtauth.util.di.infrastructure.session_store import SessionStoreProvider


class MockSessionStoreProvider(SessionStoreProvider):
    """Mock session store provider using a process-local dict."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_session_store(self) -> SessionStore:
        """Provide in-memory session store."""
        return InMemorySessionStore()
