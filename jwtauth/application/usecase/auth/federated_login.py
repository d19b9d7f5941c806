"""Federated login use case."""

from typing import Any

import logfire
from pydantic import BaseModel, Field

from jwtauth.application.usecase.base import BaseUseCase
from jwtauth.domain.service import (
    IdentityNormalizer,
    IdentityReconciler,
    SessionService,
    UserService,
    merge_id_token_subject,
)

from .common import TokenResponse


class FederatedLoginRequest(BaseModel):
    """Completed provider login.

    ``attributes`` is the provider's raw userinfo payload. When the
    provider also issued an ID token, ``id_token_subject`` is its
    verified ``sub`` and takes precedence over any id in the payload.
    """

    provider: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    id_token_subject: str | None = None


class FederatedLoginUseCase(BaseUseCase):
    """Use case for logging in through an external identity provider."""

    def __init__(
        self,
        identity_normalizer: IdentityNormalizer,
        identity_reconciler: IdentityReconciler,
        user_service: UserService,
        session_service: SessionService,
    ) -> None:
        """Initialize federated login use case.

        Args:
            identity_normalizer: Provider claim normalization service
            identity_reconciler: Identity-to-user reconciliation service
            user_service: User domain service
            session_service: Token issuance domain service
        """
        self.identity_normalizer = identity_normalizer
        self.identity_reconciler = identity_reconciler
        self.user_service = user_service
        self.session_service = session_service

    async def execute(self, request: FederatedLoginRequest) -> TokenResponse:
        """Normalize, reconcile and issue tokens.

        Steps:
        1. Merge the ID-token subject into the payload, if given
        2. Normalize provider claims to a canonical identity
        3. Find, link or create the user
        4. Reload the user by email with identities and issue tokens

        Raises:
            UnsupportedProviderError: If the provider is unknown
            InvalidTokenError: If the payload carries no subject
            InvalidEmailFormatError: If a new user would lack a valid email
            IdentityAlreadyLinkedError: If the email's user already has
                another subject linked for this provider
        """
        claims = request.attributes
        if request.id_token_subject:
            claims = merge_id_token_subject(request.id_token_subject, claims)

        identity = self.identity_normalizer.normalize(request.provider, claims)

        with logfire.span("federated_login", provider=identity.provider.value):
            user = await self.identity_reconciler.reconcile(identity)
            user = await self.user_service.get_by_email(user.email)

            pair = await self.session_service.issue_tokens(user)
            logfire.info(
                "Federated login succeeded",
                user_id=user.id,
                provider=identity.provider.value,
            )
            return TokenResponse.from_pair(pair)
