#!/usr/bin/env python3
"""Send a sample Foursquare check-in push to a running relay.

Usage:
    python scripts/send_mock_checkin.py [URL] [--secret S] [--user-id ID] [--json]

The secret defaults to ``WEBHOOK__PUSH_SECRET`` from the environment. The
user ID must belong to a linked account (or be the single-user ID) for the
relay to post the check-in.
"""

import argparse
import json
import os
import sys
import time

import httpx

DEFAULT_URL = "http://localhost:8000/webhook/checkin"


def build_payload(secret: str, user_id: str) -> dict:
    """Build a push envelope with a realistic check-in."""
    now = int(time.time())
    user = {"id": user_id, "firstName": "Test", "lastName": "User"}
    checkin = {
        "id": f"mock_{now}",
        "createdAt": now,
        "type": "checkin",
        "shout": "Testing from the mock webhook sender! 🧪",
        "user": user,
        "venue": {
            "id": "venue_456",
            "name": "Test Venue",
            "location": {
                "lat": 35.6762,
                "lng": 139.6503,
                "address": "1-1-1 Test Street",
                "city": "Tokyo",
                "country": "Japan",
            },
        },
        "score": {
            "total": 15,
            "scores": [
                {"points": 10, "message": "First check-in bonus", "icon": "🎉"},
                {"points": 5, "message": "Explorer bonus", "icon": "🗺️"},
            ],
        },
    }
    return {"user": user, "checkin": json.dumps(checkin), "secret": secret}


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("url", nargs="?", default=DEFAULT_URL)
    parser.add_argument(
        "--secret", default=os.environ.get("WEBHOOK__PUSH_SECRET", "mock_secret")
    )
    parser.add_argument("--user-id", default="mock_user_123")
    parser.add_argument(
        "--json", action="store_true", help="Send a JSON body instead of a form"
    )
    args = parser.parse_args()

    payload = build_payload(args.secret, args.user_id)

    try:
        if args.json:
            response = httpx.post(args.url, json=payload)
        else:
            form = {**payload, "user": json.dumps(payload["user"])}
            response = httpx.post(args.url, data=form)
    except httpx.HTTPError as e:
        print(f"Failed to send mock check-in: {e}", file=sys.stderr)
        return 1

    print(f"{response.status_code} {response.text}")
    return 0 if response.is_success and response.json().get("success") else 1


if __name__ == "__main__":
    sys.exit(main())
