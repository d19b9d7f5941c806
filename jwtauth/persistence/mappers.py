"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so mapping is manual
rather than through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Iterable

from jwtauth.domain.model import User, UserIdentity
from jwtauth.domain.value import AuthProvider, Role, UserId, UserIdentityId


def row_to_user_identity(row: Dict[str, Any]) -> UserIdentity:
    """Convert database row to UserIdentity domain model."""
    return UserIdentity(
        id=UserIdentityId(row["id"]),
        provider=AuthProvider(row["provider"]),
        provider_id=row.get("provider_id"),
        password_hash=row.get("password_hash"),
        created_at=row["created_at"],
    )


def row_to_user(
    row: Dict[str, Any], identity_rows: Iterable[Dict[str, Any]] = ()
) -> User:
    """Convert database rows to User domain model.

    Args:
        row: ``users`` row as dict
        identity_rows: ``user_identities`` rows owned by the user

    Returns:
        User domain model
    """
    return User(
        id=UserId(row["id"]),
        email=row["email"],
        nickname=row["nickname"],
        role=Role(row["role"]),
        identities=tuple(row_to_user_identity(r) for r in identity_rows),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to a ``users`` insert/update dict.

    The id is omitted so inserts get a database-assigned one.
    """
    return {
        "email": user.email,
        "nickname": user.nickname,
        "role": user.role.value,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def identity_to_dict(user_id: UserId, identity: UserIdentity) -> Dict[str, Any]:
    """Convert UserIdentity to a ``user_identities`` insert dict."""
    return {
        "user_id": user_id,
        "provider": identity.provider.value,
        "provider_id": identity.provider_id,
        "password_hash": identity.password_hash,
        "created_at": identity.created_at,
    }
