"""Unit tests for the OAuth state store."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from relay.adapter.state import OAuthStateStore
from relay.domain.value import AuthProvider


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return OAuthStateStore(ttl_seconds=600, clock=clock)


class TestIssue:
    def test_token_is_256_bit_hex(self, store):
        token = store.issue()

        assert len(token) == 64
        int(token, 16)

    def test_tokens_are_unique(self, store):
        tokens = {store.issue() for _ in range(100)}

        assert len(tokens) == 100
        assert len(store) == 100


class TestConsume:
    def test_fresh_token_is_accepted_once(self, store):
        """A state token can be used exactly once."""
        token = store.issue()

        assert store.consume(token) is True
        assert store.consume(token) is False

    def test_unknown_token_is_rejected(self, store):
        assert store.consume("0" * 64) is False

    def test_token_at_ttl_is_accepted(self, store, clock):
        token = store.issue()
        clock.advance(600)

        assert store.consume(token) is True

    def test_expired_token_is_rejected_and_removed(self, store, clock):
        token = store.issue()
        clock.advance(601)

        assert store.consume(token) is False
        assert len(store) == 0


class TestRedeem:
    def test_returns_bound_subject(self, store):
        token = store.issue(provider=AuthProvider.FOURSQUARE, subject="discord-1")

        pending = store.redeem(token, provider=AuthProvider.FOURSQUARE)

        assert pending is not None
        assert pending.subject == "discord-1"
        assert pending.provider == AuthProvider.FOURSQUARE

    def test_provider_mismatch_is_rejected_and_burns_token(self, store):
        token = store.issue(provider=AuthProvider.DISCORD)

        assert store.redeem(token, provider=AuthProvider.FOURSQUARE) is None
        assert store.redeem(token, provider=AuthProvider.DISCORD) is None


class TestSweep:
    def test_removes_only_expired_tokens(self, store, clock):
        old = store.issue()
        clock.advance(400)
        fresh = store.issue()
        clock.advance(300)

        removed = store.sweep()

        assert removed == 1
        assert store.consume(old) is False
        assert store.consume(fresh) is True

    def test_sweep_after_consume_is_noop(self, store, clock):
        token = store.issue()
        store.consume(token)
        clock.advance(700)

        assert store.sweep() == 0

    @pytest.mark.asyncio
    async def test_background_sweeper_runs_and_stops(self, store, clock):
        store.issue()
        clock.advance(700)

        store.start_sweeper(interval_seconds=0.01)
        await asyncio.sleep(0.05)
        await store.stop_sweeper()

        assert len(store) == 0
