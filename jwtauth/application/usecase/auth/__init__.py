"""Authentication use cases."""

from .federated_login import FederatedLoginRequest, FederatedLoginUseCase
from .get_current_user import GetCurrentUserRequest, GetCurrentUserUseCase
from .login import LoginRequest, LoginUseCase
from .logout import LogoutRequest, LogoutResponse, LogoutUseCase
from .naver_oidc_login import NaverOidcLoginRequest, NaverOidcLoginUseCase
from .refresh import RefreshTokenRequest, RefreshTokenUseCase
from .sign_up import SignUpRequest, SignUpUseCase

__all__ = [
    "FederatedLoginRequest",
    "FederatedLoginUseCase",
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "LoginRequest",
    "LoginUseCase",
    "LogoutRequest",
    "LogoutResponse",
    "LogoutUseCase",
    "NaverOidcLoginRequest",
    "NaverOidcLoginUseCase",
    "RefreshTokenRequest",
    "RefreshTokenUseCase",
    "SignUpRequest",
    "SignUpUseCase",
]
