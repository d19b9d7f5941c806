"""User aggregate root.

Users sign in with a local password and/or any number of federated
providers. All identities that share an email fold into one User.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from jwtauth.domain.error import IdentityAlreadyLinkedError
from jwtauth.domain.model.common import DomainModel
from jwtauth.domain.model.user_identity import UserIdentity
from jwtauth.domain.value import AuthProvider, Role, UserId
from jwtauth.domain.value.types import (
    NICKNAME_MAX_LENGTH,
    NICKNAME_MIN_LENGTH,
    validate_email,
    validate_nickname,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """User aggregate root.

    ``id`` is ``None`` until the repository assigns one on first save.
    """

    id: Optional[UserId] = None
    email: str
    nickname: str
    role: Role = Role.USER
    identities: tuple[UserIdentity, ...] = ()
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @classmethod
    def create_local(cls, email: str, nickname: str, password_hash: str) -> "User":
        """Create a user that signs in with a password."""
        return cls(
            email=validate_email(email),
            nickname=validate_nickname(nickname),
            identities=(UserIdentity.local(password_hash),),
        )

    @classmethod
    def create_federated(
        cls, email: str | None, nickname: str, provider: AuthProvider, provider_id: str
    ) -> "User":
        """Create a user on first login through an external provider."""
        return cls(
            email=validate_email(email),
            nickname=validate_nickname(nickname),
            identities=(UserIdentity.federated(provider, provider_id),),
        )

    def identity_for(self, provider: AuthProvider) -> Optional[UserIdentity]:
        for identity in self.identities:
            if identity.provider is provider:
                return identity
        return None

    def local_identity(self) -> Optional[UserIdentity]:
        return self.identity_for(AuthProvider.LOCAL)

    def with_identity(self, identity: UserIdentity) -> "User":
        """Return a copy with another provider linked.

        Raises:
            IdentityAlreadyLinkedError: If the provider is already linked
        """
        if self.identity_for(identity.provider) is not None:
            raise IdentityAlreadyLinkedError(identity.provider.value)
        return self.model_copy(
            update={"identities": (*self.identities, identity), "updated_at": _now()}
        )

    def rename(self, nickname: str) -> "User":
        """Return a copy with a new nickname.

        Names longer than the limit are cut; names that stay too short
        leave the user unchanged.
        """
        candidate = nickname.strip()[:NICKNAME_MAX_LENGTH]
        if len(candidate) < NICKNAME_MIN_LENGTH or candidate == self.nickname:
            return self
        return self.model_copy(update={"nickname": candidate, "updated_at": _now()})
