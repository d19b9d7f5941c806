"""Refresh token rotation use case."""

import hmac

import logfire
from pydantic import BaseModel

from jwtauth.application.usecase.base import BaseUseCase
from jwtauth.domain.error import InvalidTokenError
from jwtauth.domain.service import JWTService, SessionService, UserService

from .common import TokenResponse


class RefreshTokenRequest(BaseModel):
    """Refresh request carrying the current refresh token."""

    refresh_token: str


class RefreshTokenUseCase(BaseUseCase):
    """Use case for rotating a refresh token.

    Each refresh token is good for exactly one rotation: the stored
    session is overwritten with the new token, so replaying the old one
    no longer matches.
    """

    def __init__(
        self,
        jwt_service: JWTService,
        user_service: UserService,
        session_service: SessionService,
    ) -> None:
        """Initialize refresh use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
            session_service: Token issuance domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service
        self.session_service = session_service

    async def execute(self, request: RefreshTokenRequest) -> TokenResponse:
        """Exchange a refresh token for a new pair.

        Steps:
        1. Verify signature and expiry
        2. Load the session stored for the token's email
        3. Compare presented and stored tokens in constant time
        4. Load the user and issue a new pair, overwriting the session

        Raises:
            ExpiredTokenError: If the refresh token expired
            InvalidTokenError: If the token is forged, has no live session,
                or is not the current token for its email
            UserNotFoundError: If the user was deleted
        """
        with logfire.span("refresh_token"):
            self.jwt_service.verify(request.refresh_token)
            email = self.jwt_service.extract_email(request.refresh_token)

            session = await self.session_service.current(email)
            if session is None:
                logfire.info("Refresh rejected, no session")
                raise InvalidTokenError("No active session")

            if not hmac.compare_digest(
                session.token.encode("utf-8"), request.refresh_token.encode("utf-8")
            ):
                logfire.warn("Refresh rejected, token mismatch")
                raise InvalidTokenError("Refresh token mismatch")

            user = await self.user_service.get_by_email(email)
            pair = await self.session_service.issue_tokens(user)
            logfire.info("Refresh token rotated", user_id=user.id)
            return TokenResponse.from_pair(pair)
