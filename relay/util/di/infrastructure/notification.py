"""Notification delivery providers."""

from dishka import Scope, provide

from relay.adapter.discord.webhook import (
    HttpNotificationDispatcher,
    NotificationDispatcher,
)
from relay.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production provider posting to the Discord webhook."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_dispatcher(self) -> NotificationDispatcher:
        """Provide the process-wide dispatcher (owns in-flight tasks)."""
        return HttpNotificationDispatcher()
