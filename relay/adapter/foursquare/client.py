"""Foursquare OAuth 2.0 client implementation.

Used only to link a Foursquare account to an already signed-in Discord
user. The v2 API needs a version date on every request.
"""

from urllib.parse import urlencode

import httpx
import logfire
import pydantic

from relay.adapter.error import FoursquareOAuthError
from relay.domain.service.auth_service import OAuthClient
from relay.domain.value.types import AuthProvider, OAuthProviderInfo

AUTHORIZE_URL = "https://foursquare.com/oauth2/authenticate"
TOKEN_URL = "https://foursquare.com/oauth2/access_token"
PROFILE_URL = "https://api.foursquare.com/v2/users/self"


class FoursquareOAuthClient(OAuthClient):
    """Base class for Foursquare OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealFoursquareOAuthClient(FoursquareOAuthClient):
    """Foursquare OAuth 2.0 client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        api_version: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Foursquare OAuth client.

        Args:
            client_id: Foursquare client ID
            client_secret: Foursquare client secret
            redirect_uri: Callback URL registered with Foursquare
            api_version: v2 API version date (YYYYMMDD)
            transport: Optional httpx transport (tests)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.api_version = api_version
        self.transport = transport

    def authorization_url(self, state: str) -> str:
        """Build the Foursquare authorize URL."""
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def complete_authorization(self, code: str) -> OAuthProviderInfo:
        """Exchange the code and read the Foursquare profile.

        Raises:
            FoursquareOAuthError: If any Foursquare call fails
        """
        async with httpx.AsyncClient(transport=self.transport, timeout=30.0) as client:
            access_token = await self._exchange_code_for_token(client, code)
            user = await self._get_user_info(client, access_token)

        try:
            info = OAuthProviderInfo(
                provider=AuthProvider.FOURSQUARE,
                provider_user_id=str(user["id"]),
                handle=user.get("firstName") or str(user["id"]),
                display_name=" ".join(
                    part for part in (user.get("firstName"), user.get("lastName")) if part
                )
                or None,
            )
        except (KeyError, TypeError, pydantic.ValidationError) as e:
            raise FoursquareOAuthError(f"Unexpected Foursquare response: {e}")

        logfire.info(
            "Foursquare OAuth completed", foursquare_user_id=info.provider_user_id
        )
        return info

    async def _exchange_code_for_token(
        self, client: httpx.AsyncClient, code: str
    ) -> str:
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "authorization_code",
            "redirect_uri": self.redirect_uri,
            "code": code,
        }

        try:
            response = await client.post(TOKEN_URL, data=data)
        except httpx.HTTPError as e:
            logfire.error("Foursquare token exchange HTTP error", error=str(e))
            raise FoursquareOAuthError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Foursquare token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise FoursquareOAuthError(
                f"Token exchange failed: {response.status_code}"
            )

        try:
            return response.json()["access_token"]
        except (ValueError, KeyError) as e:
            raise FoursquareOAuthError(f"Token response missing access_token: {e}")

    async def _get_user_info(self, client: httpx.AsyncClient, access_token: str) -> dict:
        try:
            response = await client.get(
                PROFILE_URL,
                params={"v": self.api_version},
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logfire.error("Foursquare profile HTTP error", error=str(e))
            raise FoursquareOAuthError(f"HTTP error fetching profile: {e}")

        if response.status_code != 200:
            logfire.error(
                "Foursquare profile request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise FoursquareOAuthError(
                f"Profile request failed: {response.status_code}"
            )

        try:
            return response.json()["response"]["user"]
        except (ValueError, KeyError, TypeError) as e:
            raise FoursquareOAuthError(f"Profile response missing user: {e}")


class MockFoursquareOAuthClient(FoursquareOAuthClient):
    """Mock Foursquare OAuth client for testing."""

    def __init__(self, user_id: str = "fsq-mock-1", first_name: str = "Mock") -> None:
        self.user_id = user_id
        self.first_name = first_name
        self.fail = False

    def authorization_url(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"{AUTHORIZE_URL}?{urlencode({'state': state, 'mock': 'true'})}"

    async def complete_authorization(self, code: str) -> OAuthProviderInfo:
        """Return mock user information."""
        if self.fail:
            raise FoursquareOAuthError("Token exchange failed: 400")
        return OAuthProviderInfo(
            provider=AuthProvider.FOURSQUARE,
            provider_user_id=self.user_id,
            handle=self.first_name,
            display_name=self.first_name,
        )
