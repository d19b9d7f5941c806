"""Mock persistence providers for testing."""

from dishka import Scope, provide

from jwtauth.domain.repository import UserRepository
from jwtauth.persistence.repository.inmemory import InMemoryUserRepository
from jwtauth.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using an in-memory repository.

    Uses APP scope so that users survive across HTTP requests served by
    one container. Each test builds its own container, which keeps tests
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()
