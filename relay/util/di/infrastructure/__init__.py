"""Infrastructure providers."""

# Import bases
from .discord import DiscordProvider
from .foursquare import FoursquareProvider
from .notification import NotificationProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .discord import ProdDiscordProvider  # noqa: F401
from .foursquare import ProdFoursquareProvider  # noqa: F401
from .notification import ProdNotificationProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "DiscordProvider",
    "FoursquareProvider",
    "NotificationProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdDiscordProvider",
    "ProdFoursquareProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
