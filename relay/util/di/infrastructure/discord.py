"""Discord infrastructure providers."""

from dishka import Scope, provide

from relay.adapter.discord.client import DiscordOAuthClient, RealDiscordOAuthClient
from relay.config import Settings
from relay.util.di.base import ProviderBase


class DiscordProvider(ProviderBase):
    """Discord component base."""

    __mock_component__ = "discord"


class ProdDiscordProvider(DiscordProvider):
    """Production Discord provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_discord_oauth_client(self, settings: Settings) -> DiscordOAuthClient:
        """Provide Discord OAuth client."""
        return RealDiscordOAuthClient(
            client_id=settings.auth.discord.client_id,
            client_secret=settings.auth.discord.client_secret,
            redirect_uri=settings.auth.discord_callback_url,
        )
