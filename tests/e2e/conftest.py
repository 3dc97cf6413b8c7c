"""E2E fixtures: the real app wired to the mock container."""

import pytest
from fastapi.testclient import TestClient

from relay.domain.service import JWTService
from relay.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def client(container):
    """Test client; entering it runs the app lifespan."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def resolve(client, container):
    """Resolve an APP-scoped dependency on the app's event loop."""

    def _resolve(dependency_type):
        return client.portal.call(container.get, dependency_type)

    return _resolve


@pytest.fixture
def bearer(resolve):
    """Authorization headers for a session of the given Discord user."""
    jwt_service = resolve(JWTService)

    def _bearer(discord_user_id: str, discord_username: str = "mockuser") -> dict:
        token = jwt_service.create_token(discord_user_id, discord_username)
        return {"Authorization": f"Bearer {token}"}

    return _bearer
