"""Logout use case."""

import logfire
from pydantic import BaseModel

from jwtauth.application.usecase.base import BaseUseCase
from jwtauth.domain.service import SessionService


class LogoutRequest(BaseModel):
    """Logout request for the authenticated caller."""

    email: str


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class LogoutUseCase(BaseUseCase):
    """Use case for ending a refresh session.

    Outstanding access tokens stay valid until they expire.
    """

    def __init__(self, session_service: SessionService) -> None:
        """Initialize logout use case.

        Args:
            session_service: Token issuance domain service
        """
        self.session_service = session_service

    async def execute(self, request: LogoutRequest) -> LogoutResponse:
        """Delete the caller's refresh session. Succeeds even if none exists."""
        with logfire.span("logout"):
            await self.session_service.close(request.email)
            return LogoutResponse(success=True, message="Successfully logged out")
