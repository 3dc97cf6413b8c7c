"""Integration tests for PostgresAccountRepository.

Needs a migrated PostgreSQL database:

    RELAY_INTEGRATION_DATABASE_URL=postgresql+asyncpg://... pytest -m integration
"""

import os
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from relay.domain.error import AccountExistsError, AlreadyLinkedError, NotFoundError
from relay.domain.model import AccountUpdate, NewAccount
from relay.domain.repository import AccountRepository
from relay.domain.value import DiscordUserId, FoursquareUserId
from tests.harness import create_env_fixture

DATABASE_URL = os.environ.get("RELAY_INTEGRATION_DATABASE_URL")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not DATABASE_URL, reason="RELAY_INTEGRATION_DATABASE_URL is not set"
    ),
]

if DATABASE_URL:
    os.environ["DATABASE__URL"] = DATABASE_URL

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def _new_account() -> NewAccount:
    suffix = uuid4().hex[:12]
    return NewAccount(
        discord_user_id=DiscordUserId(f"it-{suffix}"),
        discord_username=f"user-{suffix}",
        discord_display_name="Integration",
    )


class TestAccountRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_create_and_find(self, integration_env):
        # Arrange
        repo = await integration_env.get(AccountRepository)
        new = _new_account()

        # Act
        created = await repo.create(new)
        found = await repo.find_by_discord_id(new.discord_user_id)

        # Assert
        assert found == created
        assert found.foursquare_user_id is None
        assert found.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_link_and_find_by_foursquare_id(self, integration_env):
        # Arrange
        repo = await integration_env.get(AccountRepository)
        new = _new_account()
        await repo.create(new)
        foursquare_id = FoursquareUserId(f"fsq-{uuid4().hex[:12]}")

        # Act
        await repo.update(
            new.discord_user_id,
            AccountUpdate(
                foursquare_user_id=foursquare_id,
                linked_at=datetime.now(timezone.utc),
            ),
        )
        found = await repo.find_by_foursquare_id(foursquare_id)

        # Assert
        assert found.discord_user_id == new.discord_user_id
        assert found.linked_at is not None

    @pytest.mark.asyncio
    async def test_foursquare_id_is_unique(self, integration_env):
        # Arrange
        repo = await integration_env.get(AccountRepository)
        first, second = _new_account(), _new_account()
        await repo.create(first)
        await repo.create(second)
        foursquare_id = FoursquareUserId(f"fsq-{uuid4().hex[:12]}")
        await repo.update(
            first.discord_user_id, AccountUpdate(foursquare_user_id=foursquare_id)
        )

        # Act / Assert
        with pytest.raises(AlreadyLinkedError):
            await repo.update(
                second.discord_user_id,
                AccountUpdate(foursquare_user_id=foursquare_id),
            )

    @pytest.mark.asyncio
    async def test_unlink_keeps_identity(self, integration_env):
        # Arrange
        repo = await integration_env.get(AccountRepository)
        new = _new_account()
        created = await repo.create(new)
        await repo.update(
            new.discord_user_id,
            AccountUpdate(
                foursquare_user_id=FoursquareUserId(f"fsq-{uuid4().hex[:12]}"),
                linked_at=datetime.now(timezone.utc),
            ),
        )

        # Act
        unlinked = await repo.unlink_foursquare(new.discord_user_id)

        # Assert
        assert unlinked.foursquare_user_id is None
        assert unlinked.linked_at is None
        assert unlinked.created_at == created.created_at
        assert unlinked.updated_at > created.updated_at

    @pytest.mark.asyncio
    async def test_duplicate_create_keeps_session_usable(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        new = _new_account()
        created = await repo.create(new)

        with pytest.raises(AccountExistsError):
            await repo.create(new)

        assert await repo.find_by_discord_id(new.discord_user_id) == created

    @pytest.mark.asyncio
    async def test_update_missing_account(self, integration_env):
        repo = await integration_env.get(AccountRepository)

        with pytest.raises(NotFoundError):
            await repo.update(
                DiscordUserId(f"missing-{uuid4().hex}"),
                AccountUpdate(discord_username="nobody"),
            )

    @pytest.mark.asyncio
    async def test_ping(self, integration_env):
        repo = await integration_env.get(AccountRepository)

        await repo.ping()
