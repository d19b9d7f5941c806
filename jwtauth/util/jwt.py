"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import jwt

# Shortest HMAC key accepted for HS256 (RFC 7518 section 3.2)
MIN_SECRET_BYTES = 32

ACCESS_TOKEN_CLAIMS = ("sub", "userId", "nickname", "auth", "iat", "exp", "jti")
REFRESH_TOKEN_CLAIMS = ("sub", "iat", "exp", "jti")


class JWTError(Exception):
    """JWT-related error."""

    pass


class TokenExpiredError(JWTError):
    """Token signature is valid but ``exp`` has passed.

    Attributes:
        claims: The signature-verified claims of the expired token
    """

    def __init__(self, claims: dict[str, Any]) -> None:
        super().__init__("Token has expired")
        self.claims = claims


def create_token(
    claims: dict[str, Any],
    secret: str,
    algorithm: str,
    ttl: timedelta,
    now: datetime | None = None,
) -> str:
    """Sign a token carrying the given claims.

    ``iat``, ``exp`` and a random ``jti`` are added so two tokens minted
    in the same second for the same subject never collide.

    Args:
        claims: Custom claims (``sub`` and friends)
        secret: HMAC signing secret
        algorithm: JWS algorithm name
        ttl: Lifetime from ``now``
        now: Issue time (defaults to current UTC time)

    Returns:
        Encoded JWT token
    """
    issued_at = now or datetime.now(timezone.utc)

    payload = {
        **claims,
        "iat": issued_at,
        "exp": issued_at + ttl,
        "jti": uuid4().hex,
    }

    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(
    token: str,
    secret: str,
    algorithm: str,
    required: tuple[str, ...] = REFRESH_TOKEN_CLAIMS,
    verify_exp: bool = True,
) -> dict[str, Any]:
    """Verify and decode a JWT token.

    Only ``algorithm`` is accepted, so ``alg: none`` and algorithm
    confusion are rejected as invalid tokens.

    Args:
        token: JWT token to verify
        secret: HMAC signing secret
        algorithm: The single accepted algorithm
        required: Claims that must be present
        verify_exp: Whether an expired token is an error

    Returns:
        Token claims

    Raises:
        TokenExpiredError: If the signature is valid but the token expired
        JWTError: If the token is malformed, forged or missing claims
    """
    options = {"require": list(required), "verify_exp": verify_exp}
    try:
        return jwt.decode(token, secret, algorithms=[algorithm], options=options)
    except jwt.ExpiredSignatureError:
        # Signature already checked at this point; decode again to expose claims
        claims = decode_token(
            token, secret, algorithm, required=required, verify_exp=False
        )
        raise TokenExpiredError(claims)
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}")
