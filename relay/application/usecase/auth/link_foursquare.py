"""Foursquare linkage use case."""

from pydantic import BaseModel

from relay.domain.error import AuthError
from relay.domain.service import AccountService, AuthService
from relay.domain.value import AuthProvider, DiscordUserId, FoursquareUserId

from ..base import BaseUseCase


class LinkFoursquareRequest(BaseModel):
    """Foursquare OAuth callback parameters.

    ``session_discord_user_id`` is the caller's session identity when a
    session cookie came along with the callback.
    """

    code: str
    state: str
    session_discord_user_id: str | None = None


class LinkFoursquareResponse(BaseModel):
    """Linkage result."""

    discord_user_id: str
    foursquare_user_id: str
    foursquare_name: str


class LinkFoursquareUseCase(BaseUseCase):
    """Use case for attaching a Foursquare account to a Discord account.

    The Discord identity comes from the state token, which was bound to it
    when the signed-in user started the flow.
    """

    def __init__(
        self, auth_service: AuthService, account_service: AccountService
    ) -> None:
        self.auth_service = auth_service
        self.account_service = account_service

    async def execute(self, request: LinkFoursquareRequest) -> LinkFoursquareResponse:
        """Execute Foursquare linkage.

        Raises:
            InvalidStateError: If the state is unknown, expired or used
            AuthError: If the state carries no identity or another user's
            UpstreamError: If Foursquare calls fail
            NotFoundError: If the Discord account no longer exists
            AlreadyLinkedError: If the Foursquare user is linked elsewhere
        """
        completed = await self.auth_service.complete_login(
            AuthProvider.FOURSQUARE, request.code, request.state
        )
        if not completed.subject:
            raise AuthError("Foursquare state is not bound to a session")
        if (
            request.session_discord_user_id
            and request.session_discord_user_id != completed.subject
        ):
            raise AuthError("Foursquare state belongs to another session")

        account = await self.account_service.link_foursquare(
            DiscordUserId(completed.subject),
            FoursquareUserId(completed.info.provider_user_id),
        )

        return LinkFoursquareResponse(
            discord_user_id=account.discord_user_id,
            foursquare_user_id=completed.info.provider_user_id,
            foursquare_name=completed.info.display_name or completed.info.handle,
        )
