"""Inbound Foursquare push payloads.

Foursquare posts an envelope whose ``checkin`` member is itself a JSON
document encoded as a string. Both layers are decoded strictly: present
fields must carry the right type, unknown fields are ignored.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PushModel(BaseModel):
    """Base for Foursquare payload models (camelCase on the wire)."""

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PushUser(PushModel):
    """Foursquare user as embedded in pushes."""

    id: str
    first_name: str
    last_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        """First and last name joined by a space."""
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name


class Location(PushModel):
    """Venue location."""

    lat: float
    lng: float
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class Venue(PushModel):
    """Checked-in venue."""

    id: str
    name: str
    location: Optional[Location] = None


class ScoreItem(PushModel):
    """Single line of a check-in score."""

    points: int
    message: str
    icon: Optional[str] = None


class Score(PushModel):
    """Check-in score."""

    total: int
    scores: list[ScoreItem]


class CheckinEvent(PushModel):
    """Decoded check-in carried in a push."""

    id: str
    created_at: int  # Epoch seconds
    type: Literal["checkin"] = "checkin"
    shout: Optional[str] = None
    user: PushUser
    venue: Optional[Venue] = None
    score: Optional[Score] = None


class WebhookEnvelope(PushModel):
    """Outer push payload."""

    user: PushUser
    checkin: str  # JSON-encoded CheckinEvent
    secret: str
