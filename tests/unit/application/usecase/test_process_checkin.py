"""Unit tests for the check-in processing use case."""

from datetime import datetime, timezone

import pytest

from relay.adapter.discord.webhook import NotificationDispatcher
from relay.application.usecase.webhook import ProcessCheckinUseCase
from relay.application.usecase.webhook.process_checkin import ProcessCheckinRequest
from relay.domain.error import AuthError, ValidationError
from relay.domain.model import AccountUpdate, NewAccount
from relay.domain.repository import AccountRepository
from relay.domain.value import DiscordUserId, FoursquareUserId
from tests.harness import create_env_fixture
from tests.payloads import NOTIFICATION_URL, make_checkin, make_envelope

unit_env = create_env_fixture()


async def _linked(env, foursquare_user_id: str = "fsq-1") -> None:
    repository = await env.get(AccountRepository)
    await repository.create(
        NewAccount(discord_user_id=DiscordUserId("d-1"), discord_username="ada")
    )
    await repository.update(
        DiscordUserId("d-1"),
        AccountUpdate(
            foursquare_user_id=FoursquareUserId(foursquare_user_id),
            linked_at=datetime.now(timezone.utc),
        ),
    )


class TestProcessCheckin:
    @pytest.mark.asyncio
    async def test_dispatches_embed_for_linked_user(self, unit_env):
        await _linked(unit_env)
        use_case = await unit_env.get(ProcessCheckinUseCase)
        dispatcher = await unit_env.get(NotificationDispatcher)

        response = await use_case.execute(
            ProcessCheckinRequest(fields=make_envelope())
        )

        assert response.checkin_id == "checkin-1"
        assert response.discord_user_id == "d-1"
        assert len(dispatcher.sent) == 1
        notification, url = dispatcher.sent[0]
        assert url == NOTIFICATION_URL
        assert notification.description == "Great coffee"

    @pytest.mark.asyncio
    async def test_unlinked_user_is_not_dispatched(self, unit_env):
        use_case = await unit_env.get(ProcessCheckinUseCase)
        dispatcher = await unit_env.get(NotificationDispatcher)

        with pytest.raises(AuthError):
            await use_case.execute(ProcessCheckinRequest(fields=make_envelope()))

        assert dispatcher.sent == []

    @pytest.mark.asyncio
    async def test_bad_secret_is_not_dispatched(self, unit_env):
        await _linked(unit_env)
        use_case = await unit_env.get(ProcessCheckinUseCase)
        dispatcher = await unit_env.get(NotificationDispatcher)

        with pytest.raises(AuthError):
            await use_case.execute(
                ProcessCheckinRequest(fields=make_envelope(secret="wrong"))
            )

        assert dispatcher.sent == []

    @pytest.mark.asyncio
    async def test_malformed_checkin_is_not_dispatched(self, unit_env):
        await _linked(unit_env)
        use_case = await unit_env.get(ProcessCheckinUseCase)
        dispatcher = await unit_env.get(NotificationDispatcher)
        envelope = make_envelope(checkin=make_checkin(createdAt="yesterday"))

        with pytest.raises(ValidationError):
            await use_case.execute(ProcessCheckinRequest(fields=envelope))

        assert dispatcher.sent == []
