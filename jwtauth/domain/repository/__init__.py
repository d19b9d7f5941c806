"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from jwtauth.domain.repository.session import SessionStore
from jwtauth.domain.repository.user import UserRepository

__all__ = [
    "SessionStore",
    "UserRepository",
]
