"""Token issuance and refresh session domain service."""

from typing import Optional

import logfire

from jwtauth.domain.model.user import User
from jwtauth.domain.repository import SessionStore
from jwtauth.domain.value import RefreshSession, TokenPair

from .base import Service
from .jwt_service import JWTService


class SessionService(Service):
    """Mints token pairs and keeps the per-email refresh session in sync.

    Shared by password login, refresh and federated login so that all
    of them issue tokens the same way.
    """

    def __init__(self, jwt_service: JWTService, session_store: SessionStore) -> None:
        """Initialize session service.

        Args:
            jwt_service: JWT token domain service
            session_store: Refresh session store
        """
        self.jwt_service = jwt_service
        self.session_store = session_store

    async def issue_tokens(self, user: User) -> TokenPair:
        """Issue an access/refresh pair and overwrite the user's session.

        The session is written only after both tokens are minted.

        Args:
            user: Saved user (``id`` assigned)

        Returns:
            Newly issued token pair
        """
        with logfire.span("session_service.issue_tokens", user_id=user.id):
            access_token = self.jwt_service.issue_access_token(
                user_id=user.id,
                email=user.email,
                nickname=user.nickname,
                role=user.role,
            )
            refresh_token = self.jwt_service.issue_refresh_token(user.email)

            ttl_seconds = int(self.jwt_service.refresh_ttl.total_seconds())
            await self.session_store.put(
                RefreshSession.issue(user.email, refresh_token, ttl_seconds)
            )
            logfire.info("Tokens issued", user_id=user.id)

            return TokenPair(
                access_token=access_token,
                refresh_token=refresh_token,
                access_token_expires_in=int(
                    self.jwt_service.access_ttl.total_seconds()
                ),
                refresh_token_expires_in=ttl_seconds,
            )

    async def current(self, email: str) -> Optional[RefreshSession]:
        """Load the live refresh session for an email, if any."""
        return await self.session_store.get(email)

    async def close(self, email: str) -> None:
        """Drop the refresh session for an email. Idempotent."""
        with logfire.span("session_service.close"):
            await self.session_store.delete(email)
            logfire.info("Session closed")
