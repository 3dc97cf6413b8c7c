"""Domain value objects."""

from relay.domain.value.identifiers import DiscordUserId, FoursquareUserId
from relay.domain.value.types import (
    AuthProvider,
    CompletedAuthorization,
    OAuthProviderInfo,
    WebhookAuthMode,
)

__all__ = [
    # Identifiers
    "DiscordUserId",
    "FoursquareUserId",
    # Types
    "AuthProvider",
    "CompletedAuthorization",
    "OAuthProviderInfo",
    "WebhookAuthMode",
]
