"""Authentication routes."""

import logging
from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from jwtauth.application.usecase.auth import (
    FederatedLoginRequest,
    FederatedLoginUseCase,
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    LogoutRequest,
    LogoutResponse,
    LogoutUseCase,
    NaverOidcLoginRequest,
    NaverOidcLoginUseCase,
    RefreshTokenRequest,
    RefreshTokenUseCase,
    SignUpRequest,
    SignUpUseCase,
)
from jwtauth.application.usecase.auth.common import TokenResponse, UserResponse
from jwtauth.domain.error import InvalidTokenError
from jwtauth.domain.service import JWTService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

bearer_scheme = HTTPBearer(auto_error=False)


class FederatedCallbackBody(BaseModel):
    """Provider callback payload.

    ``attributes`` is the provider's userinfo response as received.
    """

    attributes: dict[str, Any] = Field(default_factory=dict)
    id_token_subject: str | None = None


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError("Missing bearer token")
    return credentials.credentials


@router.post(
    "/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def sign_up(
    request: SignUpRequest,
    sign_up_use_case: FromDishka[SignUpUseCase],
) -> UserResponse:
    """Register a password account.

    Example:
        POST /auth/signup
        {"email": "a@b.com", "password": "pass1234", "nickname": "alice"}
    """
    return await sign_up_use_case.execute(request)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> TokenResponse:
    """Log in with email and password and receive a token pair."""
    return await login_use_case.execute(request)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    request: RefreshTokenRequest,
    refresh_token_use_case: FromDishka[RefreshTokenUseCase],
) -> TokenResponse:
    """Rotate a refresh token.

    The presented token is spent; only the returned one works next time.
    """
    return await refresh_token_use_case.execute(request)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    jwt_service: FromDishka[JWTService],
    logout_use_case: FromDishka[LogoutUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> LogoutResponse:
    """End the caller's refresh session.

    Requires a valid bearer access token; the caller is taken from it.
    """
    principal = jwt_service.authenticate(_bearer_token(credentials))
    logger.info(f"Logout requested by user {principal.user_id}")
    return await logout_use_case.execute(LogoutRequest(email=principal.email))


@router.get("/me", response_model=UserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserResponse:
    """Return the user behind the bearer access token."""
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(token=_bearer_token(credentials))
    )


@router.post("/callback/naver/oidc", response_model=TokenResponse)
async def naver_oidc_callback(
    request: NaverOidcLoginRequest,
    naver_oidc_login_use_case: FromDishka[NaverOidcLoginUseCase],
) -> TokenResponse:
    """Complete a Naver OIDC login.

    The profile is fetched from Naver with ``access_token`` and keyed by
    the ID token's subject.
    """
    return await naver_oidc_login_use_case.execute(request)


@router.post("/callback/{provider}", response_model=TokenResponse)
async def federated_callback(
    provider: str,
    body: FederatedCallbackBody,
    federated_login_use_case: FromDishka[FederatedLoginUseCase],
) -> TokenResponse:
    """Complete a federated login with the provider's userinfo payload.

    Example:
        POST /auth/callback/naver
        {"attributes": {"resultcode": "00", "response": {"id": "77", ...}}}
    """
    logger.info(f"Federated callback received: provider={provider}")
    return await federated_login_use_case.execute(
        FederatedLoginRequest(
            provider=provider,
            attributes=body.attributes,
            id_token_subject=body.id_token_subject,
        )
    )
