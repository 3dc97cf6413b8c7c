"""Mock notification providers for testing."""

from dishka import Scope, provide

from relay.adapter.discord.webhook import (
    NotificationDispatcher,
    RecordingNotificationDispatcher,
)
from relay.util.di.infrastructure.notification import NotificationProvider


class MockNotificationProvider(NotificationProvider):
    """Records deliveries instead of posting to Discord."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_dispatcher(self) -> NotificationDispatcher:
        """Provide recording dispatcher."""
        return RecordingNotificationDispatcher()
