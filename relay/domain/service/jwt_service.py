"""JWT session domain service."""

import logfire

from relay.config import AuthSettings
from relay.util.error import ConfigurationError
from relay.util.jwt import JWTError, SessionClaims, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings

        Raises:
            ConfigurationError: If no signing secret is configured
        """
        if not auth_settings.jwt_secret:
            raise ConfigurationError("AUTH__JWT_SECRET is not configured")
        self.auth_settings = auth_settings

    def create_token(self, discord_user_id: str, discord_username: str) -> str:
        """Create a session token for a verified guild member.

        Args:
            discord_user_id: Discord user ID
            discord_username: Discord username

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", discord_user_id=discord_user_id):
            token = create_token(discord_user_id, discord_username, self.auth_settings)
            logfire.info("Session token created", discord_user_id=discord_user_id)
            return token

    def verify_token(self, token: str | None) -> SessionClaims | None:
        """Verify a session token.

        Every failure returns None; the reason is only logged.

        Args:
            token: JWT token string (optional)

        Returns:
            Claims if the token is valid, None otherwise
        """
        if not token:
            return None

        try:
            return verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.info("Session token rejected", reason=e.reason)
            return None
