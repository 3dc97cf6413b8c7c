"""Mock providers for testing."""

from .discord import MockDiscordProvider
from .foursquare import MockFoursquareProvider
from .notification import MockNotificationProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockDiscordProvider",
    "MockFoursquareProvider",
    "MockNotificationProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
