"""Domain model entities."""

from jwtauth.domain.model.user import User
from jwtauth.domain.model.user_identity import UserIdentity

__all__ = [
    "User",
    "UserIdentity",
]
