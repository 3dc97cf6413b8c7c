"""Account use cases."""

from .get_current_user import GetCurrentUserUseCase
from .unlink_foursquare import UnlinkFoursquareUseCase

__all__ = ["GetCurrentUserUseCase", "UnlinkFoursquareUseCase"]
