"""Domain layer DI providers."""

from dishka import Scope, provide

from relay.adapter.state import OAuthStateStore
from relay.config import AuthSettings, WebhookSettings
from relay.domain.repository import AccountRepository
from relay.domain.service import (
    AccountService,
    AccountWebhookAuthenticator,
    AuthService,
    CheckinTransformer,
    JWTService,
    OAuthClient,
    SingleUserCredential,
    SingleUserWebhookAuthenticator,
    WebhookAuthenticator,
)
from relay.domain.value import AuthProvider, FoursquareUserId, WebhookAuthMode
from relay.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self,
        oauth_clients: dict[AuthProvider, OAuthClient],
        state_store: OAuthStateStore,
    ) -> AuthService:
        """Provide OAuth domain service."""
        return AuthService(oauth_clients=oauth_clients, state_store=state_store)

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide session token service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_account_service(
        self, account_repository: AccountRepository
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(account_repository=account_repository)

    @provide(scope=Scope.APP)
    def get_checkin_transformer(self) -> CheckinTransformer:
        """Provide check-in transformer."""
        return CheckinTransformer()

    @provide
    def get_webhook_authenticator(
        self, webhook_settings: WebhookSettings, account_service: AccountService
    ) -> WebhookAuthenticator:
        """Provide the authenticator selected by ``webhook.auth_mode``."""
        mode = WebhookAuthMode(webhook_settings.auth_mode)
        if mode is WebhookAuthMode.SINGLE_USER:
            return SingleUserWebhookAuthenticator(
                push_secret=webhook_settings.push_secret,
                credential=SingleUserCredential(
                    foursquare_user_id=FoursquareUserId(
                        webhook_settings.single_user_foursquare_id or ""
                    )
                ),
            )
        return AccountWebhookAuthenticator(
            push_secret=webhook_settings.push_secret,
            account_service=account_service,
        )
