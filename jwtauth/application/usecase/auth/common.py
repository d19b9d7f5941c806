"""Response models shared by the authentication use cases."""

from datetime import datetime

from pydantic import BaseModel

from jwtauth.domain.model import User
from jwtauth.domain.value import AuthProvider, Role, TokenPair


class TokenResponse(BaseModel):
    """Access/refresh token pair returned to the client."""

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int  # Access token lifetime in seconds
    refresh_expires_in: int

    @classmethod
    def from_pair(cls, pair: TokenPair) -> "TokenResponse":
        return cls(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            token_type=pair.token_type,
            expires_in=pair.access_token_expires_in,
            refresh_expires_in=pair.refresh_token_expires_in,
        )


class UserResponse(BaseModel):
    """Public view of a user. Never includes password hashes."""

    user_id: int
    email: str
    nickname: str
    role: Role
    providers: list[AuthProvider]
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            user_id=user.id,
            email=user.email,
            nickname=user.nickname,
            role=user.role,
            providers=[identity.provider for identity in user.identities],
            created_at=user.created_at,
        )
