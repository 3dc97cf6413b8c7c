"""Test configuration and fixtures."""

import os

# Settings refuse to load without these; set before any relay import
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("WEBHOOK__PUSH_SECRET", "test-push-secret")
os.environ.setdefault(
    "WEBHOOK__NOTIFICATION_URL", "https://discord.test/api/webhooks/1/token"
)
os.environ.setdefault("AUTH__JWT_SECRET", "test-jwt-secret-with-at-least-32-bytes!")
os.environ.setdefault("AUTH__DISCORD__CLIENT_ID", "discord-client-id")
os.environ.setdefault("AUTH__DISCORD__CLIENT_SECRET", "discord-client-secret")
os.environ.setdefault("AUTH__DISCORD__TARGET_GUILD_ID", "guild-123")
os.environ.setdefault("AUTH__FOURSQUARE__CLIENT_ID", "foursquare-client-id")
os.environ.setdefault("AUTH__FOURSQUARE__CLIENT_SECRET", "foursquare-client-secret")

import logfire  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)
