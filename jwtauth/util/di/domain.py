"""Domain layer DI providers."""

from dishka import Scope, provide

from jwtauth.config import AuthSettings
from jwtauth.domain.repository import SessionStore, UserRepository
from jwtauth.domain.service import (
    IdentityNormalizer,
    IdentityReconciler,
    JWTService,
    PasswordService,
    SessionService,
    UserService,
)
from jwtauth.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Stateless services built from settings are APP-scoped. Services that
    hold a repository are REQUEST-scoped to follow the database session.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service.

        Raises ConfigurationError when the signing settings are unusable.
        """
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_password_service(self, auth_settings: AuthSettings) -> PasswordService:
        """Provide password hashing domain service."""
        return PasswordService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_identity_normalizer(self) -> IdentityNormalizer:
        """Provide identity normalizer with the built-in provider table."""
        return IdentityNormalizer()

    @provide
    def get_session_service(
        self, jwt_service: JWTService, session_store: SessionStore
    ) -> SessionService:
        """Provide token issuance domain service."""
        return SessionService(jwt_service=jwt_service, session_store=session_store)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_identity_reconciler(
        self, user_repository: UserRepository
    ) -> IdentityReconciler:
        """Provide identity reconciliation domain service."""
        return IdentityReconciler(user_repository=user_repository)
