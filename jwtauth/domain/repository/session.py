"""Refresh session store interface."""

from abc import ABC, abstractmethod
from typing import Optional

from jwtauth.domain.value import RefreshSession


class SessionStore(ABC):
    """Expiring key-value store holding one refresh session per email.

    Operations are atomic per key; concurrent writers to the same key
    resolve last-writer-wins. Backend failures surface as
    ``SessionStoreError`` rather than domain errors.
    """

    @abstractmethod
    async def put(self, session: RefreshSession) -> None:
        """Store a session, replacing any previous one for the email.

        The store drops the record after ``session.ttl_seconds``.

        Args:
            session: Session to store
        """
        pass

    @abstractmethod
    async def get(self, email: str) -> Optional[RefreshSession]:
        """Load the live session for an email.

        Args:
            email: Session key

        Returns:
            The session if present and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, email: str) -> None:
        """Remove the session for an email. Deleting a missing key is a no-op.

        Args:
            email: Session key
        """
        pass
