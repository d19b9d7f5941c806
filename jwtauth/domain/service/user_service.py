"""User domain service."""

import logfire

from jwtauth.domain.error import (
    DuplicateEmailError,
    DuplicateNicknameError,
    UserNotFoundError,
)
from jwtauth.domain.model import User
from jwtauth.domain.repository import UserRepository
from jwtauth.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            UserNotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=user_id):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=user_id)
                raise UserNotFoundError(str(user_id))
            return user

    async def get_by_email(self, email: str) -> User:
        """Get user by email with identities loaded.

        Raises:
            UserNotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_email"):
            user = await self.user_repository.find_by_email_with_identities(email)
            if not user:
                logfire.warn("User not found by email")
                raise UserNotFoundError(email)
            return user

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email with identities loaded.

        Returns:
            User if found, None otherwise
        """
        return await self.user_repository.find_by_email_with_identities(email)

    async def ensure_available(self, email: str, nickname: str) -> None:
        """Check that a new account would not clash with an existing one.

        Email is checked before nickname.

        Raises:
            DuplicateEmailError: If the email is taken
            DuplicateNicknameError: If the nickname is taken
        """
        with logfire.span("user_service.ensure_available"):
            if await self.user_repository.exists_by_email(email):
                logfire.info("Sign-up rejected, email taken")
                raise DuplicateEmailError(email)
            if await self.user_repository.exists_by_nickname(nickname):
                logfire.info("Sign-up rejected, nickname taken")
                raise DuplicateNicknameError(nickname)

    async def create_local(self, email: str, nickname: str, password_hash: str) -> User:
        """Create and save a password user.

        Raises:
            InvalidEmailFormatError: If the email is malformed
            InvalidNicknameLengthError: If the nickname is not 2-20 characters
        """
        with logfire.span("user_service.create_local"):
            user = await self.user_repository.save(
                User.create_local(email, nickname, password_hash)
            )
            logfire.info("Local user created", user_id=user.id)
            return user

    async def delete(self, user_id: UserId) -> None:
        """Delete a user and all linked identities."""
        with logfire.span("user_service.delete", user_id=user_id):
            await self.user_repository.delete(user_id)
            logfire.info("User deleted", user_id=user_id)
