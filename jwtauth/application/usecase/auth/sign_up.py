"""Sign-up use case."""

import logfire
from pydantic import BaseModel

from jwtauth.application.usecase.base import BaseUseCase
from jwtauth.domain.service import PasswordService, UserService
from jwtauth.domain.value import validate_password

from .common import UserResponse


class SignUpRequest(BaseModel):
    """Local account registration request."""

    email: str
    password: str
    nickname: str


class SignUpUseCase(BaseUseCase):
    """Use case for registering a password account."""

    def __init__(
        self, user_service: UserService, password_service: PasswordService
    ) -> None:
        """Initialize sign-up use case.

        Args:
            user_service: User domain service
            password_service: Password hashing domain service
        """
        self.user_service = user_service
        self.password_service = password_service

    async def execute(self, request: SignUpRequest) -> UserResponse:
        """Register a user with a local identity.

        Checks run in a fixed order: duplicate email, duplicate nickname,
        password policy, then email format and nickname length.

        Args:
            request: Email, password and nickname

        Returns:
            Public view of the created user

        Raises:
            DuplicateEmailError: If the email is registered
            DuplicateNicknameError: If the nickname is taken
            InvalidPasswordFormatError: If the password violates policy
            InvalidEmailFormatError: If the email is malformed
            InvalidNicknameLengthError: If the nickname is not 2-20 characters
        """
        with logfire.span("sign_up"):
            await self.user_service.ensure_available(request.email, request.nickname)
            validate_password(request.password)

            user = await self.user_service.create_local(
                email=request.email,
                nickname=request.nickname,
                password_hash=self.password_service.hash(request.password),
            )
            logfire.info("User signed up", user_id=user.id)
            return UserResponse.from_user(user)
