"""Authentication use cases."""

from .discord_login import DiscordLoginUseCase
from .link_foursquare import LinkFoursquareUseCase

__all__ = ["DiscordLoginUseCase", "LinkFoursquareUseCase"]
