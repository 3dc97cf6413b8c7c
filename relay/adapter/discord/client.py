"""Discord OAuth 2.0 client implementation.

Authorization code flow with the ``identify guilds`` scope: the token is
used once to read the user and their guild list, then discarded.
"""

from urllib.parse import urlencode

import httpx
import logfire
import pydantic

from relay.adapter.error import DiscordOAuthError
from relay.domain.service.auth_service import OAuthClient
from relay.domain.value.types import AuthProvider, OAuthProviderInfo

AUTHORIZE_URL = "https://discord.com/oauth2/authorize"
API_BASE_URL = "https://discord.com/api/v10"
SCOPE = "identify guilds"


class DiscordOAuthClient(OAuthClient):
    """Base class for Discord OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealDiscordOAuthClient(DiscordOAuthClient):
    """Discord OAuth 2.0 client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Discord OAuth client.

        Args:
            client_id: Discord application client ID
            client_secret: Discord application client secret
            redirect_uri: Callback URL registered with Discord
            transport: Optional httpx transport (tests)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.transport = transport

        self.token_url = f"{API_BASE_URL}/oauth2/token"
        self.user_url = f"{API_BASE_URL}/users/@me"
        self.guilds_url = f"{API_BASE_URL}/users/@me/guilds"

    def authorization_url(self, state: str) -> str:
        """Build the Discord authorize URL."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": SCOPE,
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def complete_authorization(self, code: str) -> OAuthProviderInfo:
        """Exchange the code and read the user and their guilds.

        Raises:
            DiscordOAuthError: If any Discord call fails
        """
        async with httpx.AsyncClient(transport=self.transport, timeout=30.0) as client:
            access_token = await self._exchange_code_for_token(client, code)
            user = await self._get(client, self.user_url, access_token, "user")
            guilds = await self._get(client, self.guilds_url, access_token, "guilds")

        try:
            info = OAuthProviderInfo(
                provider=AuthProvider.DISCORD,
                provider_user_id=str(user["id"]),
                handle=user["username"],
                display_name=user.get("global_name"),
                guild_ids=frozenset(str(guild["id"]) for guild in guilds),
            )
        except (KeyError, TypeError, pydantic.ValidationError) as e:
            raise DiscordOAuthError(f"Unexpected Discord response: {e}")

        logfire.info(
            "Discord OAuth completed",
            discord_user_id=info.provider_user_id,
            guild_count=len(info.guild_ids),
        )
        return info

    async def _exchange_code_for_token(
        self, client: httpx.AsyncClient, code: str
    ) -> str:
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
        }

        try:
            response = await client.post(self.token_url, data=data)
        except httpx.HTTPError as e:
            logfire.error("Discord token exchange HTTP error", error=str(e))
            raise DiscordOAuthError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Discord token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise DiscordOAuthError(f"Token exchange failed: {response.status_code}")

        try:
            return response.json()["access_token"]
        except (ValueError, KeyError) as e:
            raise DiscordOAuthError(f"Token response missing access_token: {e}")

    async def _get(
        self, client: httpx.AsyncClient, url: str, access_token: str, what: str
    ):
        try:
            response = await client.get(
                url, headers={"Authorization": f"Bearer {access_token}"}
            )
        except httpx.HTTPError as e:
            logfire.error(f"Discord {what} HTTP error", error=str(e))
            raise DiscordOAuthError(f"HTTP error fetching {what}: {e}")

        if response.status_code != 200:
            logfire.error(
                f"Discord {what} request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise DiscordOAuthError(f"{what} request failed: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise DiscordOAuthError(f"Invalid JSON in {what} response: {e}")


class MockDiscordOAuthClient(DiscordOAuthClient):
    """Mock Discord OAuth client for testing.

    Returns the configured user without making real API calls. Attributes
    can be changed between calls to simulate other users or failures.
    """

    def __init__(
        self,
        guild_ids: frozenset[str] = frozenset(),
        user_id: str = "100000000000000001",
        username: str = "mockuser",
        display_name: str | None = "Mock User",
    ) -> None:
        self.guild_ids = guild_ids
        self.user_id = user_id
        self.username = username
        self.display_name = display_name
        self.fail = False
        self.codes: list[str] = []

    def authorization_url(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"{AUTHORIZE_URL}?{urlencode({'state': state, 'mock': 'true'})}"

    async def complete_authorization(self, code: str) -> OAuthProviderInfo:
        """Return mock user information."""
        self.codes.append(code)
        if self.fail:
            raise DiscordOAuthError("Token exchange failed: 400")
        return OAuthProviderInfo(
            provider=AuthProvider.DISCORD,
            provider_user_id=self.user_id,
            handle=self.username,
            display_name=self.display_name,
            guild_ids=self.guild_ids,
        )
