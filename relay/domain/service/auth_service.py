"""Authentication domain service."""

import logfire

from relay.adapter.state import OAuthStateStore
from relay.domain.error import InvalidStateError
from relay.domain.value.types import (
    AuthProvider,
    CompletedAuthorization,
    OAuthProviderInfo,
)

from .base import Service


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    def authorization_url(self, state: str) -> str:
        """Build the provider authorize URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect the user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str) -> OAuthProviderInfo:
        """Exchange an authorization code and fetch the user profile.

        Args:
            code: Authorization code from the OAuth callback

        Returns:
            Provider user information

        Raises:
            UpstreamError: If any provider call fails
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for OAuth flows across Discord and Foursquare.

    Owns the state token round trip: a state is issued when the flow starts
    and redeemed exactly once when the provider calls back.
    """

    def __init__(
        self,
        oauth_clients: dict[AuthProvider, OAuthClient],
        state_store: OAuthStateStore,
    ) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
            state_store: Pending state token store
        """
        self.oauth_clients = oauth_clients
        self.state_store = state_store

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise ValueError(f"Unsupported provider: {provider}")
        return client

    def initiate_login(self, provider: AuthProvider, subject: str | None = None) -> str:
        """Start an OAuth flow.

        Args:
            provider: Provider to authorize with
            subject: Identity to bind to the flow (Discord ID for linkage)

        Returns:
            Authorization URL to redirect the user to
        """
        client = self._client(provider)
        state = self.state_store.issue(provider=provider, subject=subject)
        logfire.info("OAuth flow started", provider=provider.value)
        return client.authorization_url(state)

    async def complete_login(
        self, provider: AuthProvider, code: str, state: str
    ) -> CompletedAuthorization:
        """Finish an OAuth flow.

        The state is redeemed before any provider call, so a replayed or
        forged callback never reaches the provider.

        Args:
            provider: Provider handling the callback
            code: Authorization code
            state: State parameter from the callback

        Returns:
            Provider user information and the subject bound to the state

        Raises:
            InvalidStateError: If the state is unknown, expired or used
            UpstreamError: If a provider call fails
        """
        client = self._client(provider)
        with logfire.span("auth_service.complete_login", provider=provider.value):
            pending = self.state_store.redeem(state, provider=provider)
            if pending is None:
                raise InvalidStateError()

            info = await client.complete_authorization(code)
            logfire.info(
                "OAuth completed",
                provider=provider.value,
                provider_user_id=info.provider_user_id,
            )
            return CompletedAuthorization(info=info, subject=pending.subject)
