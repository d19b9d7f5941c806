"""JWT token domain service."""

from datetime import timedelta

import logfire

from jwtauth.config import AuthSettings
from jwtauth.domain.error import ExpiredTokenError, InvalidTokenError
from jwtauth.domain.value import Principal, Role, TokenClaims
from jwtauth.util.error import ConfigurationError
from jwtauth.util.jwt import (
    ACCESS_TOKEN_CLAIMS,
    MIN_SECRET_BYTES,
    REFRESH_TOKEN_CLAIMS,
    JWTError,
    TokenExpiredError,
    create_token,
    decode_token,
)

from .base import Service

SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")


class JWTService(Service):
    """Domain service for JWT token operations.

    Stateless apart from the immutable signing settings, so a single
    instance can be shared across concurrent requests.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings

        Raises:
            ConfigurationError: If the secret or algorithm is unusable
        """
        if auth_settings.jwt_algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(
                f"Unsupported JWT algorithm: {auth_settings.jwt_algorithm}"
            )
        if len(auth_settings.jwt_secret.encode("utf-8")) < MIN_SECRET_BYTES:
            raise ConfigurationError(
                f"JWT secret must be at least {MIN_SECRET_BYTES} bytes"
            )
        self._secret = auth_settings.jwt_secret
        self._algorithm = auth_settings.jwt_algorithm
        self.access_ttl = timedelta(seconds=auth_settings.access_token_ttl_seconds)
        self.refresh_ttl = timedelta(seconds=auth_settings.refresh_token_ttl_seconds)

    def issue_access_token(
        self,
        user_id: int,
        email: str,
        nickname: str,
        role: Role,
        ttl: timedelta | None = None,
    ) -> str:
        """Create a signed access token.

        Args:
            user_id: User ID (``userId`` claim)
            email: Subject (``sub`` claim)
            nickname: Display name (``nickname`` claim)
            role: Role (``auth`` claim)
            ttl: Lifetime override

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.issue_access_token", user_id=user_id):
            return create_token(
                {
                    "sub": email,
                    "userId": user_id,
                    "nickname": nickname,
                    "auth": role.value,
                },
                self._secret,
                self._algorithm,
                ttl or self.access_ttl,
            )

    def issue_refresh_token(self, email: str, ttl: timedelta | None = None) -> str:
        """Create a signed refresh token carrying only the subject.

        Args:
            email: Subject (``sub`` claim)
            ttl: Lifetime override

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.issue_refresh_token"):
            return create_token(
                {"sub": email}, self._secret, self._algorithm, ttl or self.refresh_ttl
            )

    def verify(self, token: str, access: bool = False) -> TokenClaims:
        """Verify a token and return its claims.

        Args:
            token: JWT token string
            access: Require the access-token claims (``userId`` etc.)

        Returns:
            Verified claims

        Raises:
            ExpiredTokenError: If the signature is valid but the token expired
            InvalidTokenError: If the token is forged, malformed or incomplete
        """
        required = ACCESS_TOKEN_CLAIMS if access else REFRESH_TOKEN_CLAIMS
        with logfire.span("jwt_service.verify", access=access):
            try:
                claims = decode_token(
                    token, self._secret, self._algorithm, required=required
                )
            except TokenExpiredError as e:
                logfire.info("JWT token expired", sub=e.claims.get("sub"))
                raise ExpiredTokenError(e.claims)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise InvalidTokenError()
            return self._to_claims(claims)

    def authenticate(self, token: str) -> Principal:
        """Resolve the caller behind a bearer access token.

        Raises:
            ExpiredTokenError: If the access token expired
            InvalidTokenError: If it is not a valid access token
        """
        claims = self.verify(token, access=True)
        return Principal(
            user_id=claims.user_id,
            email=claims.email,
            nickname=claims.nickname,
            role=claims.role,
        )

    def extract_email(self, token: str) -> str:
        """Read the subject of a token whose signature is valid.

        Expiry is tolerated; any other defect is not.

        Raises:
            InvalidTokenError: If the token is forged or malformed
        """
        try:
            claims = decode_token(
                token, self._secret, self._algorithm, verify_exp=False
            )
        except JWTError:
            raise InvalidTokenError()
        return claims["sub"]

    @staticmethod
    def _to_claims(claims: dict) -> TokenClaims:
        try:
            return TokenClaims(
                sub=claims["sub"],
                iat=claims["iat"],
                exp=claims["exp"],
                jti=claims["jti"],
                user_id=claims.get("userId"),
                nickname=claims.get("nickname"),
                role=claims.get("auth"),
            )
        except ValueError:
            # Signed by us but with claim values we never issue
            raise InvalidTokenError()
