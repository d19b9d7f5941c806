"""Domain value objects for authentication."""

from jwtauth.domain.value.identifiers import UserId, UserIdentityId
from jwtauth.domain.value.types import (
    AuthProvider,
    CanonicalIdentity,
    Principal,
    RefreshSession,
    Role,
    TokenClaims,
    TokenPair,
    validate_email,
    validate_nickname,
    validate_password,
)

__all__ = [
    # Identifiers
    "UserId",
    "UserIdentityId",
    # Types
    "AuthProvider",
    "CanonicalIdentity",
    "Principal",
    "RefreshSession",
    "Role",
    "TokenClaims",
    "TokenPair",
    # Validators
    "validate_email",
    "validate_nickname",
    "validate_password",
]
