"""Discord login use case."""

import logfire
from pydantic import BaseModel

from relay.config import Settings
from relay.domain.error import MembershipRequiredError
from relay.domain.service import AccountService, AuthService, JWTService
from relay.domain.value import AuthProvider

from ..base import BaseUseCase


class DiscordLoginRequest(BaseModel):
    """Discord OAuth callback parameters."""

    code: str
    state: str


class DiscordLoginResponse(BaseModel):
    """Discord login result."""

    token: str
    discord_user_id: str
    discord_username: str
    is_new: bool
    is_linked: bool


class DiscordLoginUseCase(BaseUseCase):
    """Use case for signing in with Discord.

    Only members of the configured guild get an account and a session.
    """

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        account_service: AccountService,
        settings: Settings,
    ) -> None:
        """Initialize Discord login use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: Session token service
            account_service: Account domain service
            settings: Application settings
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.account_service = account_service
        self.settings = settings

    async def execute(self, request: DiscordLoginRequest) -> DiscordLoginResponse:
        """Execute Discord login.

        Steps:
        1. Redeem state and exchange code (user and guilds)
        2. Require membership of the target guild
        3. Create or refresh the account
        4. Issue a session token

        Raises:
            InvalidStateError: If the state is unknown, expired or used
            UpstreamError: If Discord calls fail
            MembershipRequiredError: If the user is not in the target guild
        """
        completed = await self.auth_service.complete_login(
            AuthProvider.DISCORD, request.code, request.state
        )
        info = completed.info
        target_guild_id = self.settings.auth.discord.target_guild_id

        with logfire.span("discord_login", discord_user_id=info.provider_user_id):
            if target_guild_id not in info.guild_ids:
                logfire.warn(
                    "Login rejected: not a guild member",
                    discord_user_id=info.provider_user_id,
                    guild_id=target_guild_id,
                )
                raise MembershipRequiredError(info.provider_user_id, target_guild_id)

            account, is_new = await self.account_service.record_login(info)

            token = self.jwt_service.create_token(
                discord_user_id=account.discord_user_id,
                discord_username=account.discord_username,
            )

            return DiscordLoginResponse(
                token=token,
                discord_user_id=account.discord_user_id,
                discord_username=account.discord_username,
                is_new=is_new,
                is_linked=account.is_linked,
            )
