"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from relay.domain.model.account import Account, AccountUpdate, NewAccount
from relay.domain.value import DiscordUserId, FoursquareUserId


class AccountRepository(ABC):
    """Repository for the Account aggregate.

    Implementations stamp ``created_at`` on create and ``updated_at`` on every
    write; callers never set them.
    """

    @abstractmethod
    async def find_by_discord_id(
        self, discord_user_id: DiscordUserId
    ) -> Optional[Account]:
        """Find an account by Discord ID.

        Args:
            discord_user_id: Discord user ID

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_foursquare_id(
        self, foursquare_user_id: FoursquareUserId
    ) -> Optional[Account]:
        """Find the account linked to a Foursquare user.

        Args:
            foursquare_user_id: Foursquare user ID

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, data: NewAccount) -> Account:
        """Create a new account.

        Args:
            data: Initial account data

        Returns:
            The stored account

        Raises:
            AccountExistsError: If the Discord ID is already taken
        """
        pass

    @abstractmethod
    async def update(
        self, discord_user_id: DiscordUserId, changes: AccountUpdate
    ) -> Account:
        """Apply a partial update to an account.

        Args:
            discord_user_id: Discord user ID
            changes: Fields to change

        Returns:
            The updated account

        Raises:
            NotFoundError: If no account matches
        """
        pass

    @abstractmethod
    async def unlink_foursquare(self, discord_user_id: DiscordUserId) -> Account:
        """Reset an account to Discord-only.

        Clears the Foursquare ID, link time and last check-in time. Discord
        fields and ``created_at`` are kept.

        Raises:
            NotFoundError: If no account matches
        """
        pass

    @abstractmethod
    async def ping(self) -> None:
        """Check the backing store is reachable; raises if not."""
        pass
