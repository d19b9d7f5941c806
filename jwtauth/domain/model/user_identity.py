"""User identity entity.

Links an authentication provider to a user account.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from jwtauth.domain.model.common import DomainModel
from jwtauth.domain.value import AuthProvider, UserIdentityId


class UserIdentity(DomainModel):
    """One way of signing in to a user account.

    A local identity holds the password hash and no provider id;
    a federated identity holds the provider's stable subject and no
    password. Identities live inside their User and do not reference it.
    """

    id: Optional[UserIdentityId] = None
    provider: AuthProvider
    provider_id: Optional[str] = None
    password_hash: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def local(cls, password_hash: str) -> "UserIdentity":
        return cls(provider=AuthProvider.LOCAL, password_hash=password_hash)

    @classmethod
    def federated(cls, provider: AuthProvider, provider_id: str) -> "UserIdentity":
        return cls(provider=provider, provider_id=provider_id)
