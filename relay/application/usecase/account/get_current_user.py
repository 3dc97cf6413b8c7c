"""Get current user use case."""

from pydantic import BaseModel

from relay.domain.service import AccountService
from relay.domain.value import DiscordUserId

from ..base import BaseUseCase


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    discord_user_id: str  # From verified session claims


class PrimaryIdentity(BaseModel):
    """Discord identity."""

    id: str
    display_name: str


class SecondaryIdentity(BaseModel):
    """Linked Foursquare identity."""

    id: str


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    primary: PrimaryIdentity
    secondary: SecondaryIdentity | None


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for reading the signed-in account."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Load the account behind a session.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = await self.account_service.get_by_discord_id(
            DiscordUserId(request.discord_user_id)
        )
        return GetCurrentUserResponse(
            primary=PrimaryIdentity(
                id=account.discord_user_id,
                display_name=account.discord_username,
            ),
            secondary=(
                SecondaryIdentity(id=account.foursquare_user_id)
                if account.foursquare_user_id
                else None
            ),
        )
