"""Unlink Foursquare use case."""

from pydantic import BaseModel

from relay.domain.service import AccountService
from relay.domain.value import DiscordUserId

from ..base import BaseUseCase


class UnlinkFoursquareRequest(BaseModel):
    discord_user_id: str


class UnlinkFoursquareResponse(BaseModel):
    success: bool
    message: str


class UnlinkFoursquareUseCase(BaseUseCase):
    """Use case for disconnecting Swarm from an account."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(
        self, request: UnlinkFoursquareRequest
    ) -> UnlinkFoursquareResponse:
        """Clear the Foursquare link.

        Raises:
            NotFoundError: If the account does not exist
        """
        await self.account_service.unlink_foursquare(
            DiscordUserId(request.discord_user_id)
        )
        return UnlinkFoursquareResponse(
            success=True, message="Foursquare account disconnected"
        )
