"""Unit tests for webhook authentication."""

import pytest
import pytest_asyncio

from relay.domain.error import AuthError
from relay.domain.model import NewAccount
from relay.domain.service import (
    AccountService,
    AccountWebhookAuthenticator,
    CheckinTransformer,
    SingleUserCredential,
    SingleUserWebhookAuthenticator,
    constant_time_equals,
)
from relay.domain.value import DiscordUserId, FoursquareUserId
from relay.persistence.repository.inmemory import InMemoryAccountRepository
from tests.payloads import make_envelope

SECRET = "push-secret"


def _envelope(secret: str = SECRET, user_id: str = "fsq-1"):
    return CheckinTransformer().parse_envelope(
        make_envelope(secret=secret, user_id=user_id)
    )


@pytest_asyncio.fixture
async def account_service():
    repo = InMemoryAccountRepository()
    service = AccountService(account_repository=repo)
    await repo.create(
        NewAccount(discord_user_id=DiscordUserId("d-1"), discord_username="ada")
    )
    await service.link_foursquare(DiscordUserId("d-1"), FoursquareUserId("fsq-1"))
    return service


class TestConstantTimeEquals:
    @pytest.mark.parametrize(
        "provided, expected, result",
        [
            ("secret", "secret", True),
            ("secret", "secreT", False),
            ("secret", "secret-longer", False),
            ("", "secret", False),
            ("", "", True),
            ("café", "cafe", False),
        ],
    )
    def test_comparison(self, provided, expected, result):
        assert constant_time_equals(provided, expected) is result


class TestAccountWebhookAuthenticator:
    @pytest.mark.asyncio
    async def test_linked_user_is_accepted(self, account_service):
        authenticator = AccountWebhookAuthenticator(SECRET, account_service)

        principal = await authenticator.authenticate(_envelope())

        assert principal.foursquare_user_id == "fsq-1"
        assert principal.account.discord_user_id == "d-1"

    @pytest.mark.asyncio
    async def test_wrong_secret_is_rejected(self, account_service):
        authenticator = AccountWebhookAuthenticator(SECRET, account_service)

        with pytest.raises(AuthError):
            await authenticator.authenticate(_envelope(secret="push-secreT"))

    @pytest.mark.asyncio
    async def test_unknown_user_is_rejected(self, account_service):
        """No anonymous fallback for unlinked Foursquare users."""
        authenticator = AccountWebhookAuthenticator(SECRET, account_service)

        with pytest.raises(AuthError):
            await authenticator.authenticate(_envelope(user_id="fsq-unknown"))


class TestSingleUserWebhookAuthenticator:
    @pytest.mark.asyncio
    async def test_configured_user_is_accepted(self):
        authenticator = SingleUserWebhookAuthenticator(
            SECRET, SingleUserCredential(FoursquareUserId("fsq-1"))
        )

        principal = await authenticator.authenticate(_envelope())

        assert principal.foursquare_user_id == "fsq-1"
        assert principal.account is None

    @pytest.mark.asyncio
    async def test_other_user_is_rejected(self):
        authenticator = SingleUserWebhookAuthenticator(
            SECRET, SingleUserCredential(FoursquareUserId("fsq-1"))
        )

        with pytest.raises(AuthError):
            await authenticator.authenticate(_envelope(user_id="fsq-2"))

    @pytest.mark.asyncio
    async def test_wrong_secret_is_rejected(self):
        authenticator = SingleUserWebhookAuthenticator(
            SECRET, SingleUserCredential(FoursquareUserId("fsq-1"))
        )

        with pytest.raises(AuthError):
            await authenticator.authenticate(_envelope(secret="nope"))
