"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from jwtauth.domain.model.user import User
from jwtauth.domain.value import AuthProvider, UserId


class UserRepository(ABC):
    """Repository for the User aggregate and its identities.

    Lookups return ``None`` for absent users; they never raise for
    not-found.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID, identities included.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email.

        Implementations may leave ``identities`` empty.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email_with_identities(self, email: str) -> Optional[User]:
        """Find a user by email with all linked identities loaded.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_and_provider_id(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[User]:
        """Find the single user owning a federated identity.

        Args:
            provider: The authentication provider
            provider_id: The user's stable subject at that provider

        Returns:
            The user (identities included) if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check whether an email is already registered."""
        pass

    @abstractmethod
    async def exists_by_nickname(self, nickname: str) -> bool:
        """Check whether a nickname is already taken."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Identities without an id are inserted; existing identities are
        left untouched. Identities are never removed by ``save``.

        Args:
            user: The user to save

        Returns:
            The saved user with ids assigned

        Raises:
            IdentityAlreadyLinkedError: If an inserted identity collides
                with an existing (provider, provider_id) or (user, provider)
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Delete a user and, by cascade, all of its identities.

        Args:
            user_id: The user's unique identifier
        """
        pass
