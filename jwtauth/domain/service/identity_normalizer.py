"""Identity normalization domain service.

Each federated provider describes the same person with a differently
shaped claim map. Extraction functions below turn each shape into a
``CanonicalIdentity``; ``IdentityNormalizer`` picks one by provider key.
"""

from collections.abc import Callable, Mapping
from typing import Any

import logfire

from jwtauth.domain.error import UnsupportedProviderError
from jwtauth.domain.value import AuthProvider, CanonicalIdentity

from .base import Service

Claims = Mapping[str, Any]
Extractor = Callable[[Claims], CanonicalIdentity]


def _map(claims: Claims | None, key: str) -> Claims | None:
    """Nested map under ``key``, or None when absent or not a map."""
    if not claims:
        return None
    value = claims.get(key)
    return value if isinstance(value, Mapping) else None


def _text(claims: Claims | None, key: str) -> str | None:
    """Scalar claim as a string, or None when absent."""
    if not claims:
        return None
    value = claims.get(key)
    if value is None or isinstance(value, Mapping):
        return None
    return str(value)


def extract_kakao(claims: Claims) -> CanonicalIdentity:
    """Kakao claims.

    OAuth2 userinfo carries a numeric ``id`` and nests the rest under
    ``kakao_account.profile``; ``kakao_account`` is omitted entirely when
    the user withheld consent. OIDC userinfo is flat with ``sub`` and
    ``nickname``.
    """
    account = _map(claims, "kakao_account")
    profile = _map(account, "profile")
    return CanonicalIdentity(
        provider=AuthProvider.KAKAO,
        provider_id=_text(claims, "id") or _text(claims, "sub"),
        email=_text(account, "email") or _text(claims, "email"),
        name=_text(profile, "nickname") or _text(claims, "nickname"),
        avatar_url=_text(profile, "profile_image_url") or _text(claims, "picture"),
    )


def extract_naver(claims: Claims) -> CanonicalIdentity:
    """Naver claims.

    OAuth2 userinfo wraps the profile in ``response`` next to
    ``resultcode``/``message``. The flat form is produced by
    ``merge_id_token_subject`` and carries no avatar.
    """
    response = _map(claims, "response")
    if response is None:
        return CanonicalIdentity(
            provider=AuthProvider.NAVER,
            provider_id=_text(claims, "sub"),
            email=_text(claims, "email"),
            name=_text(claims, "name"),
        )

    return CanonicalIdentity(
        provider=AuthProvider.NAVER,
        provider_id=_text(response, "id"),
        email=_text(response, "email"),
        name=_text(response, "name"),
        avatar_url=_text(response, "profile_image"),
    )


def extract_google(claims: Claims) -> CanonicalIdentity:
    """Google OIDC claims: flat ``sub``, ``email``, ``name``, ``picture``."""
    return CanonicalIdentity(
        provider=AuthProvider.GOOGLE,
        provider_id=_text(claims, "sub"),
        email=_text(claims, "email"),
        name=_text(claims, "name"),
        avatar_url=_text(claims, "picture"),
    )


EXTRACTORS: dict[AuthProvider, Extractor] = {
    AuthProvider.GOOGLE: extract_google,
    AuthProvider.KAKAO: extract_kakao,
    AuthProvider.NAVER: extract_naver,
}


def merge_id_token_subject(subject: str, userinfo: Claims) -> dict[str, Any]:
    """Merge an ID-token subject into userinfo fetched with the access token.

    A ``response`` wrapper is flattened first, so the result is a flat
    OIDC-style map whose ``sub`` is the ID-token subject.

    Args:
        subject: ``sub`` claim of the verified ID token
        userinfo: Raw userinfo payload

    Returns:
        Flat claim map
    """
    merged = dict(_map(userinfo, "response") or userinfo)
    merged["sub"] = subject
    return merged


def resolve_provider(provider_key: str) -> AuthProvider:
    """Map a case-insensitive provider key to a federated provider.

    Raises:
        UnsupportedProviderError: For unknown keys and for ``local``
    """
    try:
        provider = AuthProvider(provider_key.strip().lower())
    except ValueError:
        raise UnsupportedProviderError(provider_key)
    if provider not in EXTRACTORS:
        raise UnsupportedProviderError(provider_key)
    return provider


class IdentityNormalizer(Service):
    """Domain service turning raw provider claims into canonical identities."""

    def __init__(self, extractors: dict[AuthProvider, Extractor] | None = None) -> None:
        """Initialize identity normalizer.

        Args:
            extractors: Map of provider to extraction function
        """
        self.extractors = extractors if extractors is not None else EXTRACTORS

    def normalize(self, provider_key: str, claims: Claims) -> CanonicalIdentity:
        """Normalize raw claims from a provider.

        Missing optional fields come back as ``None``; only an unknown
        provider is an error.

        Args:
            provider_key: Provider name, any case
            claims: Raw claim map

        Returns:
            Canonical identity

        Raises:
            UnsupportedProviderError: If the provider is not registered
        """
        provider = resolve_provider(provider_key)
        extractor = self.extractors.get(provider)
        if extractor is None:
            raise UnsupportedProviderError(provider_key)

        identity = extractor(claims)
        logfire.info(
            "Identity normalized",
            provider=provider.value,
            has_provider_id=identity.provider_id is not None,
            has_email=identity.email is not None,
        )
        return identity
