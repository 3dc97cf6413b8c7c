"""Discord adapter: OAuth login and channel webhook delivery."""

from .client import DiscordOAuthClient, MockDiscordOAuthClient, RealDiscordOAuthClient
from .webhook import (
    HttpNotificationDispatcher,
    NotificationDispatcher,
    RecordingNotificationDispatcher,
)

__all__ = [
    "DiscordOAuthClient",
    "HttpNotificationDispatcher",
    "MockDiscordOAuthClient",
    "NotificationDispatcher",
    "RealDiscordOAuthClient",
    "RecordingNotificationDispatcher",
]
