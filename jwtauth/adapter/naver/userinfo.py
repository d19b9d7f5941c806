"""Naver userinfo client.

Naver's OIDC ID token carries only ``sub``; email and name come from
the OAuth2 profile endpoint, called with the access token.
"""

import httpx
import logfire

from jwtauth.adapter.error import ProviderError


class NaverUserInfoError(ProviderError):
    """Naver profile request failed."""

    pass


class NaverUserInfoClient:
    """Base class for Naver userinfo clients.

    Provides type distinction for dependency injection.
    """

    async def fetch_userinfo(self, access_token: str) -> dict:
        """Fetch the raw profile payload.

        Args:
            access_token: OAuth access token issued by Naver

        Returns:
            Raw payload, ``{"resultcode", "message", "response": {...}}``

        Raises:
            NaverUserInfoError: If the request fails
        """
        raise NotImplementedError


class RealNaverUserInfoClient(NaverUserInfoClient):
    """Naver profile API client."""

    def __init__(self, userinfo_url: str, timeout: float = 10.0) -> None:
        """Initialize Naver userinfo client.

        Args:
            userinfo_url: Profile endpoint URL
            timeout: Request timeout in seconds
        """
        self.userinfo_url = userinfo_url
        self.timeout = timeout

    async def fetch_userinfo(self, access_token: str) -> dict:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Naver userinfo HTTP error", error=str(e))
            raise NaverUserInfoError(f"HTTP error fetching user info: {e}")

        if response.status_code != 200:
            logfire.error(
                "Naver userinfo request failed",
                status_code=response.status_code,
            )
            raise NaverUserInfoError(
                f"User info request failed: {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            logfire.error("Naver userinfo body is not JSON")
            raise NaverUserInfoError("User info response is not JSON") from e
        if not isinstance(payload, dict):
            logfire.error(
                "Naver userinfo body is not an object",
                payload_type=type(payload).__name__,
            )
            raise NaverUserInfoError("User info response is not a JSON object")

        if payload.get("resultcode") not in (None, "00"):
            logfire.error(
                "Naver userinfo rejected",
                resultcode=payload.get("resultcode"),
                message=payload.get("message"),
            )
            raise NaverUserInfoError(f"User info rejected: {payload.get('message')}")

        return payload


class MockNaverUserInfoClient(NaverUserInfoClient):
    """Mock Naver userinfo client for testing.

    Returns a deterministic wrapped payload without network calls.
    """

    def __init__(self, profile: dict | None = None) -> None:
        self.profile = profile or {
            "id": "naver-oauth-id",
            "email": "mock.naver@example.com",
            "name": "Mock Naver",
            "profile_image": "https://example.com/naver.png",
        }

    async def fetch_userinfo(self, access_token: str) -> dict:
        if not access_token:
            raise NaverUserInfoError("Missing access token")
        return {
            "resultcode": "00",
            "message": "success",
            "response": dict(self.profile),
        }
