"""JWT session token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Literal

import jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from relay.config import AuthSettings


class SessionClaims(BaseModel):
    """Verified session token payload.

    ``server_member`` must be literally ``True``: a token that omits it or
    carries ``False`` never verifies.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    discord_user_id: str
    discord_username: str
    server_member: Literal[True]
    iat: int
    exp: int


class JWTError(Exception):
    """JWT-related error.

    The message is the same for every failure; ``reason`` is for logs only.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__("Invalid session token")


def create_token(
    discord_user_id: str,
    discord_username: str,
    settings: AuthSettings,
    issued_at: datetime | None = None,
) -> str:
    """Create a signed session token.

    Args:
        discord_user_id: Discord user ID
        discord_username: Discord username
        settings: Authentication settings
        issued_at: Issue time (defaults to now)

    Returns:
        Encoded JWT token
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    expiry = issued_at + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "discord_user_id": discord_user_id,
        "discord_username": discord_username,
        "server_member": True,
        "iat": issued_at,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> SessionClaims:
    """Verify and decode a session token.

    Only the configured algorithm is accepted, expiry is checked with
    ``jwt_leeway_seconds`` of clock skew, and the claims must match
    SessionClaims exactly.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Verified claims

    Raises:
        JWTError: If the token is invalid for any reason
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=settings.jwt_leeway_seconds,
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("expired")
    except jwt.InvalidAlgorithmError:
        raise JWTError("algorithm")
    except jwt.InvalidTokenError as e:
        raise JWTError(f"malformed: {e}")

    try:
        return SessionClaims.model_validate(payload)
    except ValidationError as e:
        raise JWTError(f"claims: {e.error_count()} invalid")
