"""Foursquare OAuth adapter."""

from .client import (
    FoursquareOAuthClient,
    MockFoursquareOAuthClient,
    RealFoursquareOAuthClient,
)

__all__ = [
    "FoursquareOAuthClient",
    "MockFoursquareOAuthClient",
    "RealFoursquareOAuthClient",
]
