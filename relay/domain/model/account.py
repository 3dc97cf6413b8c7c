"""Account aggregate root.

An account is created the first time a Discord user logs in and stays keyed
by that Discord ID forever. The Foursquare identity is attached later by the
linkage flow and can be cleared again.
"""

from datetime import datetime
from typing import Optional

from relay.domain.model.common import DomainModel
from relay.domain.value import DiscordUserId, FoursquareUserId


class Account(DomainModel):
    """Linked Discord/Foursquare account."""

    discord_user_id: DiscordUserId  # Primary identity, immutable
    discord_username: str
    discord_display_name: Optional[str] = None
    foursquare_user_id: Optional[FoursquareUserId] = None  # Unique when set
    linked_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    last_checkin_at: Optional[datetime] = None

    @property
    def is_linked(self) -> bool:
        """Whether a Foursquare account is attached."""
        return self.foursquare_user_id is not None


class NewAccount(DomainModel):
    """Data for creating an account; timestamps are stamped by the repository."""

    discord_user_id: DiscordUserId
    discord_username: str
    discord_display_name: Optional[str] = None


class AccountUpdate(DomainModel):
    """Partial update of an account.

    Only fields that were explicitly set are applied. The Discord ID and
    ``created_at`` cannot be changed through an update.
    """

    discord_username: Optional[str] = None
    discord_display_name: Optional[str] = None
    foursquare_user_id: Optional[FoursquareUserId] = None
    linked_at: Optional[datetime] = None
    last_checkin_at: Optional[datetime] = None

    def changes(self) -> dict:
        """Fields explicitly set on this update."""
        return self.model_dump(exclude_unset=True)
