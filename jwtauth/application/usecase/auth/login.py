"""Password login use case."""

import logfire
from pydantic import BaseModel

from jwtauth.application.usecase.base import BaseUseCase
from jwtauth.domain.error import InvalidCredentialsError
from jwtauth.domain.service import PasswordService, SessionService, UserService

from .common import TokenResponse


class LoginRequest(BaseModel):
    """Email + password login request."""

    email: str
    password: str


class LoginUseCase(BaseUseCase):
    """Use case for logging in with a local password."""

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            password_service: Password hashing domain service
            session_service: Token issuance domain service
        """
        self.user_service = user_service
        self.password_service = password_service
        self.session_service = session_service

    async def execute(self, request: LoginRequest) -> TokenResponse:
        """Verify credentials and issue a token pair.

        Unknown email, a federated-only account and a wrong password are
        indistinguishable to the caller.

        Args:
            request: Login credentials

        Returns:
            Access and refresh token

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        with logfire.span("login"):
            user = await self.user_service.find_by_email(request.email)
            local = user.local_identity() if user else None

            if (
                local is None
                or local.password_hash is None
                or not self.password_service.matches(
                    request.password, local.password_hash
                )
            ):
                logfire.info("Login rejected")
                raise InvalidCredentialsError()

            pair = await self.session_service.issue_tokens(user)
            logfire.info("User logged in", user_id=user.id)
            return TokenResponse.from_pair(pair)
