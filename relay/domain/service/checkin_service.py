"""Check-in parsing and notification building."""

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import logfire
import pydantic

from relay.domain.error import ValidationError
from relay.domain.model import CheckinEvent, EmbedField, Notification, WebhookEnvelope

from .base import Service

TITLE = "🏃‍♂️ New Swarm Check-in"
DEFAULT_DESCRIPTION = "Checked in!"
COLOR = 0xFF6600


def format_timestamp(epoch_seconds: int) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    moment = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CheckinTransformer(Service):
    """Turns Foursquare pushes into Discord embeds."""

    def parse_envelope(self, raw: Mapping[str, Any]) -> WebhookEnvelope:
        """Decode the outer push payload.

        Form posts carry ``user`` as a JSON string; JSON posts may carry it
        as an object. Both are accepted.

        Raises:
            ValidationError: If the payload does not match the envelope schema
        """
        data = dict(raw)
        user = data.get("user")
        if isinstance(user, str):
            try:
                data["user"] = json.loads(user)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Envelope user is not JSON: {e.msg}") from e

        try:
            # JSON mode, same strictness rules as the check-in document
            return WebhookEnvelope.model_validate_json(json.dumps(data))
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid envelope: {e.error_count()} errors"
            ) from e

    def parse(self, checkin_json: str) -> CheckinEvent:
        """Strictly decode the check-in document.

        Raises:
            ValidationError: If the JSON is malformed or does not match
        """
        try:
            event = CheckinEvent.model_validate_json(checkin_json)
        except pydantic.ValidationError as e:
            logfire.warn("Check-in rejected", errors=e.error_count())
            raise ValidationError(f"Invalid check-in: {e.error_count()} errors") from e

        try:
            format_timestamp(event.created_at)
        except (OverflowError, OSError, ValueError) as e:
            raise ValidationError(f"Invalid check-in time: {event.created_at}") from e
        return event

    def to_notification(self, event: CheckinEvent) -> Notification:
        """Build the Discord embed for a check-in.

        Fields appear in a fixed order: user, venue, location, score. Venue,
        location and score are left out when the check-in has nothing to
        show for them.
        """
        fields = [EmbedField(name="👤 User", value=event.user.full_name, inline=True)]

        if event.venue:
            fields.append(
                EmbedField(name="📍 Venue", value=event.venue.name, inline=True)
            )

            location = event.venue.location
            if location:
                parts = [
                    part
                    for part in (location.address, location.city, location.country)
                    if part
                ]
                if parts:
                    fields.append(
                        EmbedField(
                            name="🗺️ Location", value=", ".join(parts), inline=False
                        )
                    )

        if event.score:
            fields.append(
                EmbedField(
                    name="🎯 Score", value=f"{event.score.total} points", inline=True
                )
            )

        return Notification(
            title=TITLE,
            description=event.shout or DEFAULT_DESCRIPTION,
            color=COLOR,
            timestamp=format_timestamp(event.created_at),
            fields=fields,
        )
