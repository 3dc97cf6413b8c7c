"""Push payload builders shared by unit and E2E tests."""

import json
import os
from datetime import datetime, timezone

PUSH_SECRET = os.environ["WEBHOOK__PUSH_SECRET"]
NOTIFICATION_URL = os.environ["WEBHOOK__NOTIFICATION_URL"]
TARGET_GUILD_ID = os.environ["AUTH__DISCORD__TARGET_GUILD_ID"]

# 2024-01-15T10:30:00Z
CREATED_AT = int(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc).timestamp())


def make_checkin(**overrides) -> dict:
    """Helper building a complete check-in document (camelCase, as pushed)."""
    checkin = {
        "id": "checkin-1",
        "createdAt": CREATED_AT,
        "type": "checkin",
        "shout": "Great coffee",
        "user": {"id": "fsq-1", "firstName": "Ada", "lastName": "Lovelace"},
        "venue": {
            "id": "venue-1",
            "name": "Blue Bottle",
            "location": {
                "lat": 37.78,
                "lng": -122.41,
                "address": "66 Mint St",
                "city": "San Francisco",
                "country": "United States",
            },
        },
        "score": {
            "total": 5,
            "scores": [{"points": 5, "message": "First visit", "icon": "🎉"}],
        },
    }
    checkin.update(overrides)
    return checkin


def make_envelope(
    checkin: dict | None = None,
    secret: str = PUSH_SECRET,
    user_id: str = "fsq-1",
) -> dict:
    """Helper building a push envelope with ``user`` as an object."""
    checkin = checkin if checkin is not None else make_checkin()
    return {
        "user": {"id": user_id, "firstName": "Ada", "lastName": "Lovelace"},
        "checkin": json.dumps(checkin),
        "secret": secret,
    }
