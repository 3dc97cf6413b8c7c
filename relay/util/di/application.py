"""Application layer DI providers."""

from dishka import Scope, provide

from relay.adapter.discord.webhook import NotificationDispatcher
from relay.application.usecase.account import (
    GetCurrentUserUseCase,
    UnlinkFoursquareUseCase,
)
from relay.application.usecase.auth import DiscordLoginUseCase, LinkFoursquareUseCase
from relay.application.usecase.webhook import ProcessCheckinUseCase
from relay.config import Settings
from relay.domain.service import (
    AccountService,
    AuthService,
    CheckinTransformer,
    JWTService,
    WebhookAuthenticator,
)
from relay.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_discord_login_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        account_service: AccountService,
        settings: Settings,
    ) -> DiscordLoginUseCase:
        """Provide Discord login use case."""
        return DiscordLoginUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            account_service=account_service,
            settings=settings,
        )

    @provide
    def get_link_foursquare_use_case(
        self, auth_service: AuthService, account_service: AccountService
    ) -> LinkFoursquareUseCase:
        """Provide Foursquare linkage use case."""
        return LinkFoursquareUseCase(
            auth_service=auth_service, account_service=account_service
        )

    # Account use cases
    @provide
    def get_current_user_use_case(
        self, account_service: AccountService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(account_service=account_service)

    @provide
    def get_unlink_foursquare_use_case(
        self, account_service: AccountService
    ) -> UnlinkFoursquareUseCase:
        """Provide unlink Foursquare use case."""
        return UnlinkFoursquareUseCase(account_service=account_service)

    # Webhook use cases
    @provide
    def get_process_checkin_use_case(
        self,
        authenticator: WebhookAuthenticator,
        transformer: CheckinTransformer,
        dispatcher: NotificationDispatcher,
        settings: Settings,
    ) -> ProcessCheckinUseCase:
        """Provide check-in processing use case."""
        return ProcessCheckinUseCase(
            authenticator=authenticator,
            transformer=transformer,
            dispatcher=dispatcher,
            settings=settings,
        )
