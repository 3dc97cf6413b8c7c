"""Process check-in use case."""

from typing import Any

import logfire
from pydantic import BaseModel

from relay.adapter.discord.webhook import NotificationDispatcher
from relay.config import Settings
from relay.domain.service import CheckinTransformer, WebhookAuthenticator

from ..base import BaseUseCase


class ProcessCheckinRequest(BaseModel):
    """Raw push fields (form or JSON body)."""

    fields: dict[str, Any]


class ProcessCheckinResponse(BaseModel):
    """Accepted push."""

    checkin_id: str
    foursquare_user_id: str
    discord_user_id: str | None = None  # None in single-user mode


class ProcessCheckinUseCase(BaseUseCase):
    """Use case for relaying a Foursquare push to Discord.

    Delivery is scheduled, not awaited: the push is acknowledged as soon
    as the notification is handed to the dispatcher.
    """

    def __init__(
        self,
        authenticator: WebhookAuthenticator,
        transformer: CheckinTransformer,
        dispatcher: NotificationDispatcher,
        settings: Settings,
    ) -> None:
        self.authenticator = authenticator
        self.transformer = transformer
        self.dispatcher = dispatcher
        self.settings = settings

    async def execute(self, request: ProcessCheckinRequest) -> ProcessCheckinResponse:
        """Authenticate, transform and dispatch a push.

        Steps:
        1. Decode the envelope
        2. Authenticate secret and user
        3. Decode the check-in and build the embed
        4. Schedule delivery

        Raises:
            ValidationError: If the envelope or check-in is malformed
            AuthError: If the push is not authenticated
        """
        envelope = self.transformer.parse_envelope(request.fields)
        principal = await self.authenticator.authenticate(envelope)

        with logfire.span(
            "process_checkin", foursquare_user_id=principal.foursquare_user_id
        ):
            event = self.transformer.parse(envelope.checkin)
            notification = self.transformer.to_notification(event)
            self.dispatcher.deliver_async(
                notification, self.settings.webhook.notification_url
            )
            logfire.info(
                "Check-in dispatched",
                checkin_id=event.id,
                venue=event.venue.name if event.venue else None,
            )

        return ProcessCheckinResponse(
            checkin_id=event.id,
            foursquare_user_id=principal.foursquare_user_id,
            discord_user_id=(
                principal.account.discord_user_id if principal.account else None
            ),
        )
