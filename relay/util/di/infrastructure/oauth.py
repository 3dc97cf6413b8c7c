"""OAuth infrastructure provider."""

from dishka import Scope, provide

from relay.adapter.discord.client import DiscordOAuthClient
from relay.adapter.foursquare.client import FoursquareOAuthClient
from relay.adapter.state import OAuthStateStore
from relay.config import AuthSettings
from relay.domain.service.auth_service import OAuthClient
from relay.domain.value import AuthProvider
from relay.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates OAuth clients and the shared state store."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        discord_oauth_client: DiscordOAuthClient,
        foursquare_oauth_client: FoursquareOAuthClient,
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide dictionary of all OAuth clients by provider."""
        return {
            AuthProvider.DISCORD: discord_oauth_client,
            AuthProvider.FOURSQUARE: foursquare_oauth_client,
        }

    @provide(scope=Scope.APP)
    def get_state_store(self, auth_settings: AuthSettings) -> OAuthStateStore:
        """Provide the process-wide OAuth state store."""
        return OAuthStateStore(ttl_seconds=auth_settings.state_ttl_seconds)
