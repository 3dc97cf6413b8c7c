"""Foursquare infrastructure providers."""

from dishka import Scope, provide

from relay.adapter.foursquare.client import (
    FoursquareOAuthClient,
    RealFoursquareOAuthClient,
)
from relay.config import Settings
from relay.util.di.base import ProviderBase


class FoursquareProvider(ProviderBase):
    """Foursquare component base."""

    __mock_component__ = "foursquare"


class ProdFoursquareProvider(FoursquareProvider):
    """Production Foursquare provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_foursquare_oauth_client(self, settings: Settings) -> FoursquareOAuthClient:
        """Provide Foursquare OAuth client."""
        return RealFoursquareOAuthClient(
            client_id=settings.auth.foursquare.client_id,
            client_secret=settings.auth.foursquare.client_secret,
            redirect_uri=settings.auth.foursquare_callback_url,
            api_version=settings.auth.foursquare.api_version,
        )
