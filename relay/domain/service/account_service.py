"""Account domain service."""

from datetime import datetime, timezone

import logfire

from relay.domain.error import AccountExistsError, AlreadyLinkedError, NotFoundError
from relay.domain.model import Account, AccountUpdate, NewAccount
from relay.domain.repository import AccountRepository
from relay.domain.value import DiscordUserId, FoursquareUserId, OAuthProviderInfo

from .base import Service


class AccountService(Service):
    """Domain service for the account directory."""

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
        """
        self.account_repository = account_repository

    async def get_by_discord_id(self, discord_user_id: DiscordUserId) -> Account:
        """Get account by Discord ID.

        Raises:
            NotFoundError: If no account exists
        """
        with logfire.span(
            "account_service.get_by_discord_id", discord_user_id=discord_user_id
        ):
            account = await self.account_repository.find_by_discord_id(discord_user_id)
            if not account:
                logfire.warn("Account not found", discord_user_id=discord_user_id)
                raise NotFoundError("Account", discord_user_id)
            return account

    async def find_by_foursquare_id(
        self, foursquare_user_id: FoursquareUserId
    ) -> Account | None:
        """Find the account linked to a Foursquare user."""
        return await self.account_repository.find_by_foursquare_id(foursquare_user_id)

    async def record_login(self, info: OAuthProviderInfo) -> tuple[Account, bool]:
        """Create or refresh the account for a Discord login.

        Args:
            info: Discord user information

        Returns:
            The account and whether it was just created
        """
        discord_user_id = DiscordUserId(info.provider_user_id)
        with logfire.span("account_service.record_login", discord_user_id=discord_user_id):
            existing = await self.account_repository.find_by_discord_id(discord_user_id)
            if existing:
                return await self._refresh(info), False

            try:
                account = await self.account_repository.create(
                    NewAccount(
                        discord_user_id=discord_user_id,
                        discord_username=info.handle,
                        discord_display_name=info.display_name,
                    )
                )
            except AccountExistsError:
                # A concurrent first login created it in between
                logfire.info("Account created concurrently", discord_user_id=discord_user_id)
                return await self._refresh(info), False

            logfire.info("Account created", discord_user_id=discord_user_id)
            return account, True

    async def _refresh(self, info: OAuthProviderInfo) -> Account:
        discord_user_id = DiscordUserId(info.provider_user_id)
        account = await self.account_repository.update(
            discord_user_id,
            AccountUpdate(
                discord_username=info.handle,
                discord_display_name=info.display_name,
            ),
        )
        logfire.info("Account refreshed", discord_user_id=discord_user_id)
        return account

    async def link_foursquare(
        self, discord_user_id: DiscordUserId, foursquare_user_id: FoursquareUserId
    ) -> Account:
        """Attach a Foursquare identity to an account.

        Relinking the same Foursquare user refreshes ``linked_at``.

        Raises:
            NotFoundError: If the account does not exist
            AlreadyLinkedError: If the Foursquare user belongs to another account
        """
        with logfire.span(
            "account_service.link_foursquare",
            discord_user_id=discord_user_id,
            foursquare_user_id=foursquare_user_id,
        ):
            owner = await self.account_repository.find_by_foursquare_id(
                foursquare_user_id
            )
            if owner and owner.discord_user_id != discord_user_id:
                logfire.warn(
                    "Foursquare user already linked",
                    discord_user_id=discord_user_id,
                    foursquare_user_id=foursquare_user_id,
                    owner=owner.discord_user_id,
                )
                raise AlreadyLinkedError(foursquare_user_id)

            account = await self.account_repository.update(
                discord_user_id,
                AccountUpdate(
                    foursquare_user_id=foursquare_user_id,
                    linked_at=datetime.now(timezone.utc),
                ),
            )
            logfire.info(
                "Foursquare linked",
                discord_user_id=discord_user_id,
                foursquare_user_id=foursquare_user_id,
            )
            return account

    async def unlink_foursquare(self, discord_user_id: DiscordUserId) -> Account:
        """Reset an account to Discord-only.

        Raises:
            NotFoundError: If the account does not exist
        """
        with logfire.span(
            "account_service.unlink_foursquare", discord_user_id=discord_user_id
        ):
            account = await self.account_repository.unlink_foursquare(discord_user_id)
            logfire.info("Foursquare unlinked", discord_user_id=discord_user_id)
            return account

    async def record_checkin(self, discord_user_id: DiscordUserId) -> None:
        """Refresh ``last_checkin_at``.

        Best effort: failures are logged and swallowed so a check-in is
        never lost over bookkeeping.
        """
        try:
            await self.account_repository.update(
                discord_user_id,
                AccountUpdate(last_checkin_at=datetime.now(timezone.utc)),
            )
        except Exception as e:
            logfire.error(
                "Failed to record check-in time",
                discord_user_id=discord_user_id,
                error=str(e),
            )

    async def ping(self) -> bool:
        """Whether the directory is reachable."""
        try:
            await self.account_repository.ping()
        except Exception as e:
            logfire.warn("Account directory unreachable", error=str(e))
            return False
        return True
