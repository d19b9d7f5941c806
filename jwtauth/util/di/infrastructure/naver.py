"""Naver userinfo client providers."""

from dishka import Scope, provide

from jwtauth.adapter.naver.userinfo import NaverUserInfoClient, RealNaverUserInfoClient
from jwtauth.config import NaverOAuthSettings
from jwtauth.util.di.base import ProviderBase


class NaverProvider(ProviderBase):
    """Naver component base."""

    __mock_component__ = "naver"


class ProdNaverProvider(NaverProvider):
    """Client calling Naver's profile API over HTTPS."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_naver_userinfo_client(
        self, config: NaverOAuthSettings
    ) -> NaverUserInfoClient:
        return RealNaverUserInfoClient(
            userinfo_url=config.userinfo_url, timeout=config.timeout_seconds
        )
