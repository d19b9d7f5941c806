"""PostgreSQL repository implementations."""

from jwtauth.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
]
