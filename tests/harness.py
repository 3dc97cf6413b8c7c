"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables (tests/conftest.py provides
defaults for every required secret).
"""

from urllib.parse import parse_qs, urlparse

import pytest_asyncio

from relay.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that builds a test container with the given
    components unmocked and yields a request-scoped container.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_link(unit_env):
            service = await unit_env.get(AccountService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def state_from(location: str) -> str:
    """State parameter of an authorization redirect."""
    return parse_qs(urlparse(location).query)["state"][0]
