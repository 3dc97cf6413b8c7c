"""Inbound push authentication.

A push is accepted only when its shared secret matches and the pushing
Foursquare user resolves to someone we relay for. Which "someone" depends on
the configured mode: a linked account (default) or one fixed Foursquare ID.
"""

import hmac
from dataclasses import dataclass

import logfire

from relay.domain.error import AuthError
from relay.domain.model import Account, WebhookEnvelope
from relay.domain.value import FoursquareUserId, WebhookAuthMode

from .account_service import AccountService
from .base import Service


def constant_time_equals(provided: str, expected: str) -> bool:
    """Compare two secrets without leaking the matching prefix length.

    Inputs of different byte length are rejected up front; equal-length
    inputs are compared with ``hmac.compare_digest``.
    """
    provided_bytes = provided.encode("utf-8")
    expected_bytes = expected.encode("utf-8")
    if len(provided_bytes) != len(expected_bytes):
        return False
    return hmac.compare_digest(provided_bytes, expected_bytes)


@dataclass(frozen=True)
class WebhookPrincipal:
    """Who an authenticated push belongs to.

    ``account`` is None in single-user mode, where there is no directory
    entry to carry forward.
    """

    foursquare_user_id: FoursquareUserId
    account: Account | None = None


@dataclass(frozen=True)
class SingleUserCredential:
    """The one Foursquare ID accepted in single-user mode."""

    foursquare_user_id: FoursquareUserId


class WebhookAuthenticator(Service):
    """Authenticates inbound pushes."""

    mode: WebhookAuthMode

    def __init__(self, push_secret: str) -> None:
        self.push_secret = push_secret

    async def authenticate(self, envelope: WebhookEnvelope) -> WebhookPrincipal:
        """Authenticate a push.

        Args:
            envelope: Decoded push envelope

        Returns:
            The principal the push belongs to

        Raises:
            AuthError: If the secret is wrong or the user is not accepted
        """
        if not constant_time_equals(envelope.secret, self.push_secret):
            raise AuthError("Invalid push secret")
        return await self._resolve(FoursquareUserId(envelope.user.id))

    async def _resolve(self, foursquare_user_id: FoursquareUserId) -> WebhookPrincipal:
        raise NotImplementedError


class AccountWebhookAuthenticator(WebhookAuthenticator):
    """Accepts pushes from Foursquare users linked to an account."""

    mode = WebhookAuthMode.ACCOUNTS

    def __init__(self, push_secret: str, account_service: AccountService) -> None:
        super().__init__(push_secret)
        self.account_service = account_service

    async def _resolve(self, foursquare_user_id: FoursquareUserId) -> WebhookPrincipal:
        account = await self.account_service.find_by_foursquare_id(foursquare_user_id)
        if account is None:
            raise AuthError(f"No account linked to Foursquare user {foursquare_user_id}")

        logfire.info(
            "Push authenticated",
            foursquare_user_id=foursquare_user_id,
            discord_user_id=account.discord_user_id,
        )
        return WebhookPrincipal(foursquare_user_id=foursquare_user_id, account=account)


class SingleUserWebhookAuthenticator(WebhookAuthenticator):
    """Accepts pushes from exactly one configured Foursquare user."""

    mode = WebhookAuthMode.SINGLE_USER

    def __init__(self, push_secret: str, credential: SingleUserCredential) -> None:
        super().__init__(push_secret)
        self.credential = credential

    async def _resolve(self, foursquare_user_id: FoursquareUserId) -> WebhookPrincipal:
        if not constant_time_equals(
            foursquare_user_id, self.credential.foursquare_user_id
        ):
            raise AuthError(f"Foursquare user {foursquare_user_id} is not accepted")

        logfire.info("Push authenticated", foursquare_user_id=foursquare_user_id)
        return WebhookPrincipal(foursquare_user_id=foursquare_user_id)
