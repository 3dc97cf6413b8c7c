"""Domain model entities."""

from relay.domain.model.account import Account, AccountUpdate, NewAccount
from relay.domain.model.checkin import (
    CheckinEvent,
    Location,
    PushUser,
    Score,
    ScoreItem,
    Venue,
    WebhookEnvelope,
)
from relay.domain.model.notification import EmbedField, Notification

__all__ = [
    "Account",
    "AccountUpdate",
    "NewAccount",
    "CheckinEvent",
    "Location",
    "PushUser",
    "Score",
    "ScoreItem",
    "Venue",
    "WebhookEnvelope",
    "EmbedField",
    "Notification",
]
