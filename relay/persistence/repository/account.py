"""PostgreSQL implementation of the Account repository."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import insert, select, text, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from relay.domain.error import AccountExistsError, AlreadyLinkedError, NotFoundError
from relay.domain.model import Account, AccountUpdate, NewAccount
from relay.domain.repository import AccountRepository
from relay.domain.value import DiscordUserId, FoursquareUserId
from relay.persistence.mappers import new_account_to_dict, row_to_account
from relay.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_discord_id(
        self, discord_user_id: DiscordUserId
    ) -> Optional[Account]:
        """Find an account by Discord ID."""
        stmt = select(accounts_table).where(
            accounts_table.c.discord_user_id == discord_user_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_foursquare_id(
        self, foursquare_user_id: FoursquareUserId
    ) -> Optional[Account]:
        """Find the account linked to a Foursquare user."""
        stmt = select(accounts_table).where(
            accounts_table.c.foursquare_user_id == foursquare_user_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def create(self, data: NewAccount) -> Account:
        """Insert a new account."""
        now = datetime.now(timezone.utc)
        values = new_account_to_dict(data)
        values["created_at"] = now
        values["updated_at"] = now

        stmt = insert(accounts_table).values(**values).returning(accounts_table)
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
        except IntegrityError as e:
            raise AccountExistsError(data.discord_user_id) from e
        return row_to_account(dict(result.mappings().one()))

    async def update(
        self, discord_user_id: DiscordUserId, changes: AccountUpdate
    ) -> Account:
        """Apply the explicitly set fields of ``changes``."""
        return await self._update(discord_user_id, changes.changes())

    async def unlink_foursquare(self, discord_user_id: DiscordUserId) -> Account:
        """Clear the Foursquare link fields."""
        return await self._update(
            discord_user_id,
            {"foursquare_user_id": None, "linked_at": None, "last_checkin_at": None},
        )

    async def ping(self) -> None:
        """Run a trivial query."""
        await self.session.execute(text("SELECT 1"))

    async def _update(
        self, discord_user_id: DiscordUserId, values: dict[str, Any]
    ) -> Account:
        values = {**values, "updated_at": datetime.now(timezone.utc)}
        stmt = (
            update(accounts_table)
            .where(accounts_table.c.discord_user_id == discord_user_id)
            .values(**values)
            .returning(accounts_table)
        )
        try:
            # Savepoint keeps the session usable after a unique violation
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
        except IntegrityError as e:
            # Unique foursquare_user_id lost a race with another link
            raise AlreadyLinkedError(str(values.get("foursquare_user_id"))) from e

        row = result.mappings().first()
        if not row:
            raise NotFoundError("Account", discord_user_id)
        return row_to_account(dict(row))
