"""End-to-end tests for the signed-in account endpoints."""

from datetime import datetime, timezone

import pytest

from relay.domain.model import AccountUpdate, NewAccount
from relay.domain.repository import AccountRepository
from relay.domain.value import DiscordUserId, FoursquareUserId


@pytest.fixture
def account(client, resolve):
    """Discord account d-1, not yet linked."""
    repository = resolve(AccountRepository)
    client.portal.call(
        repository.create,
        NewAccount(discord_user_id=DiscordUserId("d-1"), discord_username="ada"),
    )
    return repository


def _link(client, repository) -> None:
    client.portal.call(
        repository.update,
        DiscordUserId("d-1"),
        AccountUpdate(
            foursquare_user_id=FoursquareUserId("fsq-1"),
            linked_at=datetime.now(timezone.utc),
        ),
    )


class TestGetMe:
    """GET /users/@me"""

    def test_requires_session(self, client):
        # Act
        response = client.get("/users/@me")

        # Assert
        assert response.status_code == 401

    def test_rejects_invalid_token(self, client):
        # Act
        response = client.get(
            "/users/@me", headers={"Authorization": "Bearer not-a-token"}
        )

        # Assert
        assert response.status_code == 401

    def test_unlinked_account(self, client, bearer, account):
        # Act
        response = client.get("/users/@me", headers=bearer("d-1", "ada"))

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "primary": {"id": "d-1", "display_name": "ada"},
            "secondary": None,
        }

    def test_linked_account(self, client, bearer, account):
        _link(client, account)

        # Act
        response = client.get("/users/@me", headers=bearer("d-1", "ada"))

        # Assert
        assert response.json()["secondary"] == {"id": "fsq-1"}

    def test_session_for_missing_account(self, client, bearer):
        # Act
        response = client.get("/users/@me", headers=bearer("ghost"))

        # Assert
        assert response.status_code == 404


class TestUnlinkFoursquare:
    """DELETE /users/@me/foursquare"""

    def test_unlinks(self, client, bearer, account):
        _link(client, account)

        # Act
        response = client.delete("/users/@me/foursquare", headers=bearer("d-1"))

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Foursquare account disconnected",
        }
        me = client.get("/users/@me", headers=bearer("d-1"))
        assert me.json()["secondary"] is None

    def test_requires_session(self, client):
        # Act
        response = client.delete("/users/@me/foursquare")

        # Assert
        assert response.status_code == 401


class TestHealth:
    """GET /health"""

    def test_healthy(self, client):
        # Act
        response = client.get("/health")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
