"""In-memory user repository for testing."""

from itertools import count
from typing import Optional

from jwtauth.domain.error import DuplicateEmailError, IdentityAlreadyLinkedError
from jwtauth.domain.model.user import User
from jwtauth.domain.repository.user import UserRepository
from jwtauth.domain.value import AuthProvider, UserId, UserIdentityId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the same uniqueness rules as the database schema.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self._user_ids = count(1)
        self._identity_ids = count(1)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_email_with_identities(self, email: str) -> Optional[User]:
        """Find a user by email; identities are always held in memory."""
        return await self.find_by_email(email)

    async def find_by_provider_and_provider_id(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[User]:
        """Find the user owning a federated identity."""
        for user in self._users.values():
            for identity in user.identities:
                if (
                    identity.provider is provider
                    and identity.provider_id == provider_id
                ):
                    return user
        return None

    async def exists_by_email(self, email: str) -> bool:
        return await self.find_by_email(email) is not None

    async def exists_by_nickname(self, nickname: str) -> bool:
        return any(user.nickname == nickname for user in self._users.values())

    async def save(self, user: User) -> User:
        """Save or update a user, assigning ids to new rows."""
        if user.id is None:
            if await self.exists_by_email(user.email):
                raise DuplicateEmailError(user.email)
            user_id = UserId(next(self._user_ids))
        else:
            user_id = user.id

        identities = []
        for identity in user.identities:
            if identity.id is None:
                if identity.provider_id is not None:
                    owner = await self.find_by_provider_and_provider_id(
                        identity.provider, identity.provider_id
                    )
                    if owner is not None:
                        raise IdentityAlreadyLinkedError(identity.provider.value)
                identity = identity.model_copy(
                    update={"id": UserIdentityId(next(self._identity_ids))}
                )
            identities.append(identity)

        providers = [identity.provider for identity in identities]
        if len(providers) != len(set(providers)):
            raise IdentityAlreadyLinkedError(providers[-1].value)

        saved = user.model_copy(update={"id": user_id, "identities": tuple(identities)})
        self._users[user_id] = saved
        return saved

    async def delete(self, user_id: UserId) -> None:
        """Delete a user together with its identities."""
        self._users.pop(user_id, None)
