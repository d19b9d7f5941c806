"""Application layer DI providers."""

from dishka import Scope, provide

from jwtauth.application.usecase.auth import (
    FederatedLoginUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    NaverOidcLoginUseCase,
    RefreshTokenUseCase,
    SignUpUseCase,
)
from jwtauth.adapter.naver import NaverUserInfoClient
from jwtauth.domain.service import (
    IdentityNormalizer,
    IdentityReconciler,
    JWTService,
    PasswordService,
    SessionService,
    UserService,
)
from jwtauth.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_sign_up_use_case(
        self, user_service: UserService, password_service: PasswordService
    ) -> SignUpUseCase:
        """Provide sign-up use case."""
        return SignUpUseCase(
            user_service=user_service, password_service=password_service
        )

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        user_service: UserService,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> LoginUseCase:
        """Provide password login use case."""
        return LoginUseCase(
            user_service=user_service,
            password_service=password_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_refresh_token_use_case(
        self,
        jwt_service: JWTService,
        user_service: UserService,
        session_service: SessionService,
    ) -> RefreshTokenUseCase:
        """Provide refresh token rotation use case."""
        return RefreshTokenUseCase(
            jwt_service=jwt_service,
            user_service=user_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(self, session_service: SessionService) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(session_service=session_service)

    @provide(scope=Scope.REQUEST)
    def get_federated_login_use_case(
        self,
        identity_normalizer: IdentityNormalizer,
        identity_reconciler: IdentityReconciler,
        user_service: UserService,
        session_service: SessionService,
    ) -> FederatedLoginUseCase:
        """Provide federated login use case."""
        return FederatedLoginUseCase(
            identity_normalizer=identity_normalizer,
            identity_reconciler=identity_reconciler,
            user_service=user_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_naver_oidc_login_use_case(
        self,
        naver_client: NaverUserInfoClient,
        federated_login_use_case: FederatedLoginUseCase,
    ) -> NaverOidcLoginUseCase:
        """Provide Naver OIDC login use case."""
        return NaverOidcLoginUseCase(
            naver_client=naver_client,
            federated_login_use_case=federated_login_use_case,
        )
