"""Identity reconciliation domain service."""

import logfire

from jwtauth.domain.error import InvalidTokenError
from jwtauth.domain.model.user import User
from jwtauth.domain.model.user_identity import UserIdentity
from jwtauth.domain.repository import UserRepository
from jwtauth.domain.value import CanonicalIdentity
from jwtauth.domain.value.types import NICKNAME_MAX_LENGTH, NICKNAME_MIN_LENGTH

from .base import Service


def derive_nickname(identity: CanonicalIdentity) -> str:
    """Pick a nickname for a user created from a federated login.

    Uses the provider name, then the email local part, then the provider
    key and subject; the first candidate that fits the length rules wins.
    """
    local_part = identity.email.split("@", 1)[0] if identity.email else None
    candidates = (
        identity.name,
        local_part,
        f"{identity.provider.value}_{identity.provider_id}",
    )
    for candidate in candidates:
        if not candidate:
            continue
        nickname = candidate.strip()[:NICKNAME_MAX_LENGTH]
        if len(nickname) >= NICKNAME_MIN_LENGTH:
            return nickname
    return f"{identity.provider.value}_{identity.provider_id}"[:NICKNAME_MAX_LENGTH]


class IdentityReconciler(Service):
    """Folds a canonical identity into exactly one User.

    Resolution order:
    1. a user already linked to (provider, provider_id)
    2. a user with the same email, which gets the provider linked
    3. a new user
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize identity reconciler.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def reconcile(self, identity: CanonicalIdentity) -> User:
        """Find, link or create the user behind a federated login.

        Args:
            identity: Normalized provider identity

        Returns:
            Saved user

        Raises:
            InvalidTokenError: If the provider sent no subject
            InvalidEmailFormatError: If a new user would have no valid email
            IdentityAlreadyLinkedError: If the email's user already has a
                different subject linked for this provider
        """
        if not identity.provider_id:
            raise InvalidTokenError("Provider payload carries no subject")

        with logfire.span(
            "identity_reconciler.reconcile",
            provider=identity.provider.value,
            provider_id=identity.provider_id,
        ):
            user = await self.user_repository.find_by_provider_and_provider_id(
                identity.provider, identity.provider_id
            )
            if user:
                return await self._refresh_profile(user, identity)

            if identity.email:
                user = await self.user_repository.find_by_email_with_identities(
                    identity.email
                )
            if user:
                linked = user.with_identity(
                    UserIdentity.federated(identity.provider, identity.provider_id)
                )
                saved = await self.user_repository.save(linked)
                logfire.info(
                    "Provider linked to existing user",
                    user_id=saved.id,
                    provider=identity.provider.value,
                )
                return saved

            created = await self.user_repository.save(
                User.create_federated(
                    email=identity.email,
                    nickname=derive_nickname(identity),
                    provider=identity.provider,
                    provider_id=identity.provider_id,
                )
            )
            logfire.info(
                "User created from federated login",
                user_id=created.id,
                provider=identity.provider.value,
            )
            return created

    async def _refresh_profile(self, user: User, identity: CanonicalIdentity) -> User:
        """Apply the provider's current name; the latest login wins."""
        if not identity.name or not identity.name.strip():
            return user

        renamed = user.rename(identity.name)
        if renamed is user:
            if renamed.nickname != identity.name.strip()[:NICKNAME_MAX_LENGTH]:
                logfire.warn(
                    "Provider name too short, nickname kept",
                    user_id=user.id,
                    provider=identity.provider.value,
                )
            return user

        saved = await self.user_repository.save(renamed)
        logfire.info(
            "Nickname updated from provider",
            user_id=saved.id,
            provider=identity.provider.value,
        )
        return saved
