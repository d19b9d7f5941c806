"""Naver OIDC login use case."""

import logfire
from pydantic import BaseModel

from jwtauth.adapter.naver import NaverUserInfoClient
from jwtauth.application.usecase.base import BaseUseCase
from jwtauth.domain.value import AuthProvider

from .common import TokenResponse
from .federated_login import FederatedLoginRequest, FederatedLoginUseCase


class NaverOidcLoginRequest(BaseModel):
    """Naver OIDC callback result.

    The ID token has already been verified upstream; only its subject
    is needed here.
    """

    access_token: str
    id_token_subject: str


class NaverOidcLoginUseCase(BaseUseCase):
    """Use case for Naver OIDC logins.

    Naver's ID token lacks profile claims, so the profile is fetched
    with the access token and merged under the ID-token subject.
    """

    def __init__(
        self,
        naver_client: NaverUserInfoClient,
        federated_login_use_case: FederatedLoginUseCase,
    ) -> None:
        """Initialize Naver OIDC login use case.

        Args:
            naver_client: Naver userinfo client
            federated_login_use_case: Shared federated login flow
        """
        self.naver_client = naver_client
        self.federated_login_use_case = federated_login_use_case

    async def execute(self, request: NaverOidcLoginRequest) -> TokenResponse:
        """Fetch the Naver profile and run the federated login.

        Raises:
            NaverUserInfoError: If the profile cannot be fetched
        """
        with logfire.span("naver_oidc_login"):
            userinfo = await self.naver_client.fetch_userinfo(request.access_token)
            return await self.federated_login_use_case.execute(
                FederatedLoginRequest(
                    provider=AuthProvider.NAVER.value,
                    attributes=userinfo,
                    id_token_subject=request.id_token_subject,
                )
            )
