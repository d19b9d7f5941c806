"""Domain value objects for authentication.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from datetime import datetime, timedelta, timezone
from enum import Enum

from jwtauth.domain.error import (
    InvalidEmailFormatError,
    InvalidNicknameLengthError,
    InvalidPasswordFormatError,
)
from jwtauth.domain.value.common import ValueObject

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$")

NICKNAME_MIN_LENGTH = 2
NICKNAME_MAX_LENGTH = 20

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 64


class Role(str, Enum):
    """User role, carried in the ``auth`` claim of access tokens."""

    USER = "USER"
    ADMIN = "ADMIN"


class AuthProvider(str, Enum):
    """Authentication providers.

    ``LOCAL`` is email + password; the rest are federated.
    """

    LOCAL = "local"
    GOOGLE = "google"
    KAKAO = "kakao"
    NAVER = "naver"


def validate_email(email: str | None) -> str:
    """Validate email format.

    Raises:
        InvalidEmailFormatError: If the email is missing or malformed
    """
    if not email or not EMAIL_PATTERN.match(email):
        raise InvalidEmailFormatError(email)
    return email


def validate_nickname(nickname: str) -> str:
    """Validate nickname length.

    Raises:
        InvalidNicknameLengthError: If the nickname is not 2-20 characters
    """
    if not NICKNAME_MIN_LENGTH <= len(nickname) <= NICKNAME_MAX_LENGTH:
        raise InvalidNicknameLengthError(nickname)
    return nickname


def validate_password(password: str) -> str:
    """Validate password policy.

    Raises:
        InvalidPasswordFormatError: If the password is not 8-64 characters
    """
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        raise InvalidPasswordFormatError()
    return password


class CanonicalIdentity(ValueObject):
    """Provider-independent view of a federated login.

    Produced by the identity normalizer from raw provider claims.
    Any field the provider did not send is ``None``.
    """

    provider: AuthProvider
    provider_id: str | None = None
    email: str | None = None
    name: str | None = None
    avatar_url: str | None = None


class TokenPair(ValueObject):
    """Access and refresh token issued together."""

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    access_token_expires_in: int
    refresh_token_expires_in: int


class TokenClaims(ValueObject):
    """Verified JWT claims.

    Access tokens carry all fields; refresh tokens carry only ``sub``,
    ``iat``, ``exp`` and ``jti``.
    """

    sub: str
    iat: datetime
    exp: datetime
    jti: str
    user_id: int | None = None
    nickname: str | None = None
    role: Role | None = None

    @property
    def email(self) -> str:
        return self.sub

    @property
    def is_access_token(self) -> bool:
        return self.user_id is not None


class Principal(ValueObject):
    """Authenticated caller, resolved from a bearer access token."""

    user_id: int
    email: str
    nickname: str
    role: Role


class RefreshSession(ValueObject):
    """Current refresh token for an email.

    At most one live session exists per email; issuing a new one
    overwrites the old.
    """

    email: str
    token: str
    expires_at: datetime
    ttl_seconds: int

    @classmethod
    def issue(
        cls, email: str, token: str, ttl_seconds: int, now: datetime | None = None
    ) -> "RefreshSession":
        issued_at = now or datetime.now(timezone.utc)
        return cls(
            email=email,
            token=token,
            expires_at=issued_at + timedelta(seconds=ttl_seconds),
            ttl_seconds=ttl_seconds,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or datetime.now(timezone.utc))
