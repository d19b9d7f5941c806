"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jwtauth.domain.error import (
    DuplicateEmailError,
    IdentityAlreadyLinkedError,
    UserNotFoundError,
)
from jwtauth.domain.model import User
from jwtauth.domain.repository import UserRepository
from jwtauth.domain.value import AuthProvider, UserId
from jwtauth.persistence.mappers import identity_to_dict, row_to_user, user_to_dict
from jwtauth.persistence.tables import user_identities_table, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _load(self, stmt, with_identities: bool = True) -> Optional[User]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        if not with_identities:
            return row_to_user(dict(row))

        identities = await self.session.execute(
            select(user_identities_table)
            .where(user_identities_table.c.user_id == row["id"])
            .order_by(user_identities_table.c.id)
        )
        return row_to_user(dict(row), [dict(r) for r in identities.mappings()])

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID, identities included."""
        return await self._load(select(users_table).where(users_table.c.id == user_id))

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email without loading identities."""
        return await self._load(
            select(users_table).where(users_table.c.email == email),
            with_identities=False,
        )

    async def find_by_email_with_identities(self, email: str) -> Optional[User]:
        """Find a user by email, identities included."""
        return await self._load(select(users_table).where(users_table.c.email == email))

    async def find_by_provider_and_provider_id(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[User]:
        """Find the user owning a federated identity.

        Joins user_identities to users on the unique (provider, provider_id).
        """
        stmt = (
            select(users_table)
            .select_from(
                users_table.join(
                    user_identities_table,
                    users_table.c.id == user_identities_table.c.user_id,
                )
            )
            .where(user_identities_table.c.provider == provider.value)
            .where(user_identities_table.c.provider_id == provider_id)
        )
        return await self._load(stmt)

    async def exists_by_email(self, email: str) -> bool:
        """Check whether an email is already registered."""
        stmt = select(exists().where(users_table.c.email == email))
        return bool(await self.session.scalar(stmt))

    async def exists_by_nickname(self, nickname: str) -> bool:
        """Check whether a nickname is already taken."""
        stmt = select(exists().where(users_table.c.nickname == nickname))
        return bool(await self.session.scalar(stmt))

    async def save(self, user: User) -> User:
        """Save a user (create or update) and insert any new identities.

        Each insert runs in a savepoint, so a constraint violation leaves
        the request transaction usable.

        Args:
            user: User to save

        Returns:
            User reloaded with database-assigned ids

        Raises:
            DuplicateEmailError: If a new user's email is already registered
            IdentityAlreadyLinkedError: If a new identity violates a unique
                constraint
            UserNotFoundError: If an existing user was deleted concurrently
        """
        user_dict = user_to_dict(user)

        if user.id is None:
            try:
                async with self.session.begin_nested():
                    result = await self.session.execute(
                        users_table.insert()
                        .values(**user_dict)
                        .returning(users_table.c.id)
                    )
            except IntegrityError:
                raise DuplicateEmailError(user.email)
            user_id = UserId(result.scalar_one())
        else:
            user_id = user.id
            await self.session.execute(
                users_table.update()
                .where(users_table.c.id == user_id)
                .values(**user_dict)
            )

        for identity in user.identities:
            if identity.id is not None:
                continue
            try:
                async with self.session.begin_nested():
                    await self.session.execute(
                        user_identities_table.insert().values(
                            **identity_to_dict(user_id, identity)
                        )
                    )
            except IntegrityError:
                raise IdentityAlreadyLinkedError(identity.provider.value)

        saved = await self.find_by_id(user_id)
        if saved is None:
            raise UserNotFoundError(str(user_id))
        return saved

    async def delete(self, user_id: UserId) -> None:
        """Delete a user; identities go with it via ON DELETE CASCADE."""
        await self.session.execute(
            users_table.delete().where(users_table.c.id == user_id)
        )
        await self.session.flush()
