"""Settings providers (non-mockable)."""

from dishka import Scope, from_context, provide

from jwtauth.config import (
    AuthSettings,
    DatabaseSettings,
    NaverOAuthSettings,
    SessionStoreSettings,
    Settings,
)
from jwtauth.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Exposes the settings sections each component depends on.

    The root ``Settings`` object is passed in as container context, so
    the process reads the environment exactly once.
    """

    scope = Scope.APP

    settings = from_context(provides=Settings, scope=Scope.APP)

    @provide
    def get_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def get_database_settings(self, settings: Settings) -> DatabaseSettings:
        return settings.database

    @provide
    def get_session_store_settings(self, settings: Settings) -> SessionStoreSettings:
        return settings.session_store

    @provide
    def get_naver_settings(self, auth_settings: AuthSettings) -> NaverOAuthSettings:
        return auth_settings.naver
