"""Authentication routes.

Discord login gates everything; Foursquare linkage is a second flow run by
an already signed-in user. Both finish on a small HTML page because the
session cookie is SameSite=strict and is only sent on same-site navigation.
"""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from relay.adapter.error import UpstreamError
from relay.application.usecase.auth import DiscordLoginUseCase, LinkFoursquareUseCase
from relay.application.usecase.auth.discord_login import DiscordLoginRequest
from relay.application.usecase.auth.link_foursquare import LinkFoursquareRequest
from relay.config import Settings
from relay.domain.error import (
    AlreadyLinkedError,
    AuthError,
    InvalidStateError,
    MembershipRequiredError,
    NotFoundError,
)
from relay.domain.service import AuthService
from relay.domain.value import AuthProvider
from relay.interface.api.pages import failure_page, success_page
from relay.interface.api.session import (
    clear_session_cookie,
    optional_session,
    require_session,
    set_session_cookie,
)
from relay.util.jwt import SessionClaims

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

DISCORD_LOGIN_PATH = "/auth/discord/login"
FOURSQUARE_LOGIN_PATH = "/auth/foursquare/login"


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


@router.get("/discord/login")
async def discord_login(auth_service: FromDishka[AuthService]) -> RedirectResponse:
    """Start Discord login (302 to Discord)."""
    url = auth_service.initiate_login(AuthProvider.DISCORD)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/discord/callback")
async def discord_callback(
    discord_login_use_case: FromDishka[DiscordLoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
):
    """Finish Discord login and set the session cookie.

    Example:
        GET /auth/discord/callback?code=abc123&state=9f86d0...

        Sets cookie: auth_token
    """
    if error or not code or not state:
        logger.warning(f"Discord callback without code: error={error}")
        return failure_page(
            "Login cancelled",
            "Discord did not authorize the login.",
            DISCORD_LOGIN_PATH,
        )

    try:
        result = await discord_login_use_case.execute(
            DiscordLoginRequest(code=code, state=state)
        )
    except InvalidStateError as e:
        logger.warning(f"Discord callback rejected: {e}")
        return failure_page(
            "Login expired",
            "This login link expired. Please start again.",
            DISCORD_LOGIN_PATH,
        )
    except MembershipRequiredError as e:
        logger.warning(str(e))
        return failure_page(
            "Access denied",
            "You must be a member of the Discord server to use this relay.",
            DISCORD_LOGIN_PATH,
            status_code=status.HTTP_403_FORBIDDEN,
        )
    except UpstreamError as e:
        logger.error(f"Discord OAuth failed: {e}")
        return failure_page(
            "Login failed",
            "Discord could not be reached. Please try again.",
            DISCORD_LOGIN_PATH,
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    except Exception as e:
        logger.exception(f"Unexpected error during Discord callback: {e}")
        return failure_page(
            "Login failed",
            "Something went wrong. Please try again.",
            DISCORD_LOGIN_PATH,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.info(f"Discord login successful for {result.discord_username}")

    if result.is_linked:
        response = success_page(
            "Signed in",
            f"Welcome back, {result.discord_username}. "
            "Your Swarm check-ins are being relayed.",
            ("/users/@me", "View your account"),
        )
    else:
        response = success_page(
            "Signed in",
            f"Welcome, {result.discord_username}. "
            "Connect Foursquare Swarm to start relaying check-ins.",
            (FOURSQUARE_LOGIN_PATH, "Connect Foursquare"),
        )
    set_session_cookie(response, result.token, settings)
    return response


@router.get("/foursquare/login")
async def foursquare_login(
    auth_service: FromDishka[AuthService],
    claims: SessionClaims = Depends(require_session),
) -> RedirectResponse:
    """Start Foursquare linkage for the signed-in user (302 to Foursquare)."""
    url = auth_service.initiate_login(
        AuthProvider.FOURSQUARE, subject=claims.discord_user_id
    )
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/foursquare/callback")
async def foursquare_callback(
    link_foursquare_use_case: FromDishka[LinkFoursquareUseCase],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    claims: SessionClaims | None = Depends(optional_session),
):
    """Finish Foursquare linkage.

    The Discord identity comes from the state token. A session cookie is
    usually absent here (SameSite=strict after a cross-site redirect); when
    one is present it must belong to the same user.
    """
    if error or not code or not state:
        logger.warning(f"Foursquare callback without code: error={error}")
        return failure_page(
            "Linking cancelled",
            "Foursquare did not authorize the connection.",
            FOURSQUARE_LOGIN_PATH,
        )

    try:
        result = await link_foursquare_use_case.execute(
            LinkFoursquareRequest(
                code=code,
                state=state,
                session_discord_user_id=claims.discord_user_id if claims else None,
            )
        )
    except AuthError as e:
        logger.warning(f"Foursquare callback rejected: {e}")
        return failure_page(
            "Linking expired",
            "This link request expired. Please start again.",
            FOURSQUARE_LOGIN_PATH,
        )
    except AlreadyLinkedError as e:
        logger.warning(str(e))
        return failure_page(
            "Already linked",
            "This Foursquare account is already connected to another Discord user.",
            FOURSQUARE_LOGIN_PATH,
            status_code=status.HTTP_409_CONFLICT,
        )
    except NotFoundError as e:
        logger.warning(str(e))
        return failure_page(
            "Account not found",
            "Please sign in with Discord first.",
            DISCORD_LOGIN_PATH,
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except UpstreamError as e:
        logger.error(f"Foursquare OAuth failed: {e}")
        return failure_page(
            "Linking failed",
            "Foursquare could not be reached. Please try again.",
            FOURSQUARE_LOGIN_PATH,
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    except Exception as e:
        logger.exception(f"Unexpected error during Foursquare callback: {e}")
        return failure_page(
            "Linking failed",
            "Something went wrong. Please try again.",
            FOURSQUARE_LOGIN_PATH,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.info(
        f"Foursquare {result.foursquare_user_id} linked to {result.discord_user_id}"
    )
    return success_page(
        "Swarm connected",
        f"Check-ins by {result.foursquare_name} will now be posted to Discord.",
        ("/users/@me", "View your account"),
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response, settings: FromDishka[Settings]) -> LogoutResponse:
    """Clear the session cookie."""
    clear_session_cookie(response, settings)
    return LogoutResponse(success=True, message="Successfully logged out")
