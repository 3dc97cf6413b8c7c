"""Strongly typed identifiers for external accounts.

Both providers hand out opaque string IDs; NewType keeps a Discord ID from
being passed where a Foursquare ID is expected.
"""

from typing import NewType

DiscordUserId = NewType("DiscordUserId", str)
FoursquareUserId = NewType("FoursquareUserId", str)
