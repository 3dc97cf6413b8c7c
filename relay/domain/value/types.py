"""Domain value objects."""

from enum import Enum

from relay.domain.value.common import ValueObject


class AuthProvider(str, Enum):
    """Supported OAuth providers."""

    DISCORD = "discord"
    FOURSQUARE = "foursquare"


class WebhookAuthMode(str, Enum):
    """How inbound pushes are tied to a user."""

    ACCOUNTS = "accounts"
    SINGLE_USER = "single_user"


class OAuthProviderInfo(ValueObject):
    """OAuth provider information.

    Generic structure for user info returned from any OAuth provider.
    """

    provider: AuthProvider
    provider_user_id: str
    handle: str  # Discord username, Foursquare first name
    display_name: str | None = None
    guild_ids: frozenset[str] = frozenset()  # Discord only


class CompletedAuthorization(ValueObject):
    """Result of a finished authorization code exchange.

    ``subject`` is whatever the flow bound to its state token when it was
    issued (the Discord ID for Foursquare linkage), or None.
    """

    info: OAuthProviderInfo
    subject: str | None = None
