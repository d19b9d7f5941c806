"""In-memory refresh session store."""

from typing import Optional

from jwtauth.domain.repository import SessionStore
from jwtauth.domain.value import RefreshSession


class InMemorySessionStore(SessionStore):
    """Process-local refresh session store.

    Used by tests and single-process development. Expired sessions are
    dropped when read.

    Attributes:
        _sessions: Dict mapping email -> RefreshSession
    """

    def __init__(self) -> None:
        """Initialize empty session store."""
        self._sessions: dict[str, RefreshSession] = {}

    async def put(self, session: RefreshSession) -> None:
        """Store session by email, replacing any previous one."""
        self._sessions[session.email] = session

    async def get(self, email: str) -> Optional[RefreshSession]:
        """Retrieve session by email.

        Automatically deletes expired sessions.
        """
        session = self._sessions.get(email)

        if session and session.is_expired():
            await self.delete(email)
            return None

        return session

    async def delete(self, email: str) -> None:
        """Delete session by email."""
        self._sessions.pop(email, None)
