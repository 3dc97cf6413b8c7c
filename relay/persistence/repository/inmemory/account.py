"""In-memory account repository for testing."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from relay.domain.error import AccountExistsError, AlreadyLinkedError, NotFoundError
from relay.domain.model import Account, AccountUpdate, NewAccount
from relay.domain.repository import AccountRepository
from relay.domain.value import DiscordUserId, FoursquareUserId


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[DiscordUserId, Account] = {}

    async def find_by_discord_id(
        self, discord_user_id: DiscordUserId
    ) -> Optional[Account]:
        """Find an account by Discord ID."""
        return self._accounts.get(discord_user_id)

    async def find_by_foursquare_id(
        self, foursquare_user_id: FoursquareUserId
    ) -> Optional[Account]:
        """Find the account linked to a Foursquare user."""
        for account in self._accounts.values():
            if account.foursquare_user_id == foursquare_user_id:
                return account
        return None

    async def create(self, data: NewAccount) -> Account:
        """Store a new account."""
        if data.discord_user_id in self._accounts:
            raise AccountExistsError(data.discord_user_id)
        now = datetime.now(timezone.utc)
        account = Account(**data.model_dump(), created_at=now, updated_at=now)
        self._accounts[account.discord_user_id] = account
        return account

    async def update(
        self, discord_user_id: DiscordUserId, changes: AccountUpdate
    ) -> Account:
        """Apply the explicitly set fields of ``changes``."""
        return self._update(discord_user_id, changes.changes())

    async def unlink_foursquare(self, discord_user_id: DiscordUserId) -> Account:
        """Clear the Foursquare link fields."""
        return self._update(
            discord_user_id,
            {"foursquare_user_id": None, "linked_at": None, "last_checkin_at": None},
        )

    async def ping(self) -> None:
        """Always reachable."""
        return None

    def _update(self, discord_user_id: DiscordUserId, values: dict[str, Any]) -> Account:
        account = self._accounts.get(discord_user_id)
        if not account:
            raise NotFoundError("Account", discord_user_id)

        foursquare_user_id = values.get("foursquare_user_id")
        if foursquare_user_id:
            for other in self._accounts.values():
                if (
                    other.foursquare_user_id == foursquare_user_id
                    and other.discord_user_id != discord_user_id
                ):
                    raise AlreadyLinkedError(foursquare_user_id)

        updated = account.model_copy(
            update={**values, "updated_at": _later_than(account.updated_at)}
        )
        self._accounts[discord_user_id] = updated
        return updated


def _later_than(previous: datetime) -> datetime:
    now = datetime.now(timezone.utc)
    if now <= previous:
        # Coarse clocks can repeat a reading; updated_at must still advance
        return previous + timedelta(microseconds=1)
    return now
