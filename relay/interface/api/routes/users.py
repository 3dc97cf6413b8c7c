"""Signed-in user routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status

from relay.application.usecase.account import (
    GetCurrentUserUseCase,
    UnlinkFoursquareUseCase,
)
from relay.application.usecase.account.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from relay.application.usecase.account.unlink_foursquare import (
    UnlinkFoursquareRequest,
    UnlinkFoursquareResponse,
)
from relay.domain.error import NotFoundError
from relay.interface.api.session import require_session
from relay.util.jwt import SessionClaims

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/@me", response_model=GetCurrentUserResponse)
async def get_me(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    claims: SessionClaims = Depends(require_session),
) -> GetCurrentUserResponse:
    """Get the signed-in account.

    Example:
        GET /users/@me

        Response:
        {
            "primary": {"id": "80351110224678912", "display_name": "nelly"},
            "secondary": {"id": "12345678"}
        }
    """
    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(discord_user_id=claims.discord_user_id)
        )
    except NotFoundError:
        # Valid token for an account that no longer exists
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Account not found"
        )


@router.delete("/@me/foursquare", response_model=UnlinkFoursquareResponse)
async def unlink_foursquare(
    unlink_foursquare_use_case: FromDishka[UnlinkFoursquareUseCase],
    claims: SessionClaims = Depends(require_session),
) -> UnlinkFoursquareResponse:
    """Disconnect Foursquare Swarm from the signed-in account."""
    try:
        return await unlink_foursquare_use_case.execute(
            UnlinkFoursquareRequest(discord_user_id=claims.discord_user_id)
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Account not found"
        )
