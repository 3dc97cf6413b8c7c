"""Session credential handling for API routes.

The session token travels either in the ``auth_token`` cookie (browser) or
an ``Authorization: Bearer`` header (scripts).
"""

from dishka import AsyncContainer
from fastapi import HTTPException, Request, Response, status

from relay.config import Settings
from relay.domain.service import JWTService
from relay.util.jwt import SessionClaims


def extract_token(request: Request, cookie_name: str) -> str | None:
    """Bearer header first, then the session cookie."""
    authorization = request.headers.get("authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return request.cookies.get(cookie_name)


async def optional_session(request: Request) -> SessionClaims | None:
    """FastAPI dependency: verified session claims, or None."""
    container: AsyncContainer = request.state.dishka_container
    settings = await container.get(Settings)
    jwt_service = await container.get(JWTService)
    return jwt_service.verify_token(extract_token(request, settings.auth.cookie_name))


async def require_session(request: Request) -> SessionClaims:
    """FastAPI dependency: verified session claims, 401 otherwise."""
    claims = await optional_session(request)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session cookie (HttpOnly, SameSite=strict)."""
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Remove the session cookie."""
    response.delete_cookie(
        key=settings.auth.cookie_name,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="strict",
    )
