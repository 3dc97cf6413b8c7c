"""Mappers between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand.
"""

from typing import Any, Dict

from relay.domain.model import Account, NewAccount
from relay.domain.value import DiscordUserId, FoursquareUserId


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model."""
    foursquare_user_id = row.get("foursquare_user_id")
    return Account(
        discord_user_id=DiscordUserId(row["discord_user_id"]),
        discord_username=row["discord_username"],
        discord_display_name=row.get("discord_display_name"),
        foursquare_user_id=(
            FoursquareUserId(foursquare_user_id) if foursquare_user_id else None
        ),
        linked_at=row.get("linked_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        last_checkin_at=row.get("last_checkin_at"),
    )


def new_account_to_dict(data: NewAccount) -> Dict[str, Any]:
    """Convert NewAccount to an insert dict (timestamps added by the caller)."""
    return {
        "discord_user_id": data.discord_user_id,
        "discord_username": data.discord_username,
        "discord_display_name": data.discord_display_name,
    }
