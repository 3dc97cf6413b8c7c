"""Unit tests for JWTService."""

import pytest

from relay.config import AuthSettings
from relay.domain.service import JWTService
from relay.util.error import ConfigurationError

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


class TestJWTService:
    def test_missing_secret_fails_at_construction(self):
        with pytest.raises(ConfigurationError):
            JWTService(AuthSettings(jwt_secret=""))

    def test_round_trip(self):
        service = JWTService(AuthSettings(jwt_secret=SECRET))

        claims = service.verify_token(service.create_token("d-1", "ada"))

        assert claims.discord_user_id == "d-1"
        assert claims.server_member is True

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_invalid_tokens_return_none(self, token):
        service = JWTService(AuthSettings(jwt_secret=SECRET))

        assert service.verify_token(token) is None

    def test_token_from_other_secret_returns_none(self):
        issuer = JWTService(AuthSettings(jwt_secret="x" * 40))
        verifier = JWTService(AuthSettings(jwt_secret=SECRET))

        assert verifier.verify_token(issuer.create_token("d-1", "ada")) is None
