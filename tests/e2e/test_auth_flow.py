"""End-to-end tests for Discord sign-in and Foursquare linkage."""

from relay.adapter.discord.client import DiscordOAuthClient
from relay.adapter.foursquare.client import FoursquareOAuthClient
from relay.domain.repository import AccountRepository
from relay.domain.value import DiscordUserId
from tests.harness import state_from


def _discord_state(client) -> str:
    response = client.get("/auth/discord/login", follow_redirects=False)
    assert response.status_code == 302
    return state_from(response.headers["location"])


def _sign_in(client) -> None:
    response = client.get(
        "/auth/discord/callback",
        params={"code": "code", "state": _discord_state(client)},
    )
    assert response.status_code == 200


class TestDiscordLogin:
    """GET /auth/discord/login and /auth/discord/callback"""

    def test_login_redirects_to_discord(self, client):
        # Act
        response = client.get("/auth/discord/login", follow_redirects=False)

        # Assert
        assert response.status_code == 302
        location = response.headers["location"]
        assert location.startswith("https://discord.com/oauth2/authorize")
        assert len(state_from(location)) == 64

    def test_member_gets_session_cookie(self, client):
        # Act
        response = client.get(
            "/auth/discord/callback",
            params={"code": "code", "state": _discord_state(client)},
        )

        # Assert
        assert response.status_code == 200
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("auth_token=")
        assert "HttpOnly" in set_cookie
        assert "samesite=strict" in set_cookie.lower()
        assert "/auth/foursquare/login" in response.text

    def test_non_member_is_forbidden(self, client, resolve):
        discord = resolve(DiscordOAuthClient)
        discord.guild_ids = frozenset({"another-guild"})

        # Act
        response = client.get(
            "/auth/discord/callback",
            params={"code": "code", "state": _discord_state(client)},
        )

        # Assert
        assert response.status_code == 403
        assert "set-cookie" not in response.headers
        repository = resolve(AccountRepository)
        account = client.portal.call(
            repository.find_by_discord_id, DiscordUserId(discord.user_id)
        )
        assert account is None

    def test_state_cannot_be_replayed(self, client):
        state = _discord_state(client)
        client.get("/auth/discord/callback", params={"code": "code", "state": state})

        # Act
        response = client.get(
            "/auth/discord/callback", params={"code": "code", "state": state}
        )

        # Assert
        assert response.status_code == 400
        assert "set-cookie" not in response.headers

    def test_forged_state_never_reaches_discord(self, client, resolve):
        # Act
        response = client.get(
            "/auth/discord/callback", params={"code": "code", "state": "forged"}
        )

        # Assert
        assert response.status_code == 400
        assert resolve(DiscordOAuthClient).codes == []

    def test_denied_authorization(self, client):
        # Act
        response = client.get(
            "/auth/discord/callback", params={"error": "access_denied"}
        )

        # Assert
        assert response.status_code == 400
        assert "/auth/discord/login" in response.text

    def test_discord_outage(self, client, resolve):
        resolve(DiscordOAuthClient).fail = True

        # Act
        response = client.get(
            "/auth/discord/callback",
            params={"code": "code", "state": _discord_state(client)},
        )

        # Assert
        assert response.status_code == 502


class TestFoursquareLinkage:
    """GET /auth/foursquare/login and /auth/foursquare/callback"""

    def test_requires_session(self, client):
        # Act
        response = client.get("/auth/foursquare/login", follow_redirects=False)

        # Assert
        assert response.status_code == 401

    def test_full_flow(self, client):
        _sign_in(client)

        # Act
        login = client.get("/auth/foursquare/login", follow_redirects=False)
        client.cookies.clear()  # SameSite=strict: no cookie on the way back
        callback = client.get(
            "/auth/foursquare/callback",
            params={"code": "code", "state": state_from(login.headers["location"])},
        )

        # Assert
        assert login.status_code == 302
        assert login.headers["location"].startswith(
            "https://foursquare.com/oauth2/authenticate"
        )
        assert callback.status_code == 200
        assert "Swarm connected" in callback.text

    def test_relinking_taken_foursquare_account(self, client, resolve):
        _sign_in(client)
        login = client.get("/auth/foursquare/login", follow_redirects=False)
        client.get(
            "/auth/foursquare/callback",
            params={"code": "code", "state": state_from(login.headers["location"])},
        )
        # Second Discord user tries to claim the same Foursquare account
        client.cookies.clear()
        discord = resolve(DiscordOAuthClient)
        discord.user_id = "200000000000000002"
        discord.username = "other"
        _sign_in(client)
        login = client.get("/auth/foursquare/login", follow_redirects=False)

        # Act
        response = client.get(
            "/auth/foursquare/callback",
            params={"code": "code", "state": state_from(login.headers["location"])},
        )

        # Assert
        assert response.status_code == 409

    def test_session_of_another_user_is_rejected(self, client, bearer):
        _sign_in(client)
        login = client.get("/auth/foursquare/login", follow_redirects=False)
        client.cookies.clear()

        # Act
        response = client.get(
            "/auth/foursquare/callback",
            params={"code": "code", "state": state_from(login.headers["location"])},
            headers=bearer("someone-else"),
        )

        # Assert
        assert response.status_code == 400

    def test_foursquare_outage(self, client, resolve):
        _sign_in(client)
        resolve(FoursquareOAuthClient).fail = True
        login = client.get("/auth/foursquare/login", follow_redirects=False)

        # Act
        response = client.get(
            "/auth/foursquare/callback",
            params={"code": "code", "state": state_from(login.headers["location"])},
        )

        # Assert
        assert response.status_code == 502


class TestLogout:
    """POST /auth/logout"""

    def test_clears_cookie(self, client):
        _sign_in(client)

        # Act
        response = client.post("/auth/logout")

        # Assert
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert 'auth_token=""' in response.headers["set-cookie"]
        assert client.get("/users/@me").status_code == 401
