"""Foursquare push webhook routes.

Foursquare retries pushes that are not acknowledged, so every outcome of
``POST /webhook/checkin`` is a 200 with ``success`` telling the real story.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, BackgroundTasks, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay.application.usecase.webhook import ProcessCheckinUseCase
from relay.application.usecase.webhook.process_checkin import ProcessCheckinRequest
from relay.config import Settings
from relay.domain.error import AuthError, ValidationError
from relay.domain.service import AccountService
from relay.domain.value import DiscordUserId

logger = logging.getLogger(__name__)
security_logger = logging.getLogger("relay.security")

router = APIRouter(prefix="/webhook", tags=["webhook"], route_class=DishkaRoute)

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class WebhookAck(BaseModel):
    """Acknowledgment returned to Foursquare."""

    success: bool
    message: str


class AuthenticationStatus(BaseModel):
    mode: str
    push_secret_configured: bool
    single_user_configured: bool


class DirectoryStatus(BaseModel):
    status: str


class WebhookHealthResponse(BaseModel):
    """Webhook health; reports degradation instead of failing."""

    status: str
    timestamp: datetime
    authentication: AuthenticationStatus
    directory: DirectoryStatus


class UnsupportedContentType(Exception):
    pass


async def _read_fields(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()

    if media_type == "application/json":
        body = await request.json()
        if not isinstance(body, dict):
            raise ValidationError("JSON body is not an object")
        return body

    if media_type in FORM_TYPES:
        try:
            form = await request.form()
        except StarletteHTTPException as e:
            # Malformed multipart body (e.g. missing boundary)
            raise ValidationError(f"Unreadable form body: {e.detail}") from e
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raise UnsupportedContentType(media_type or "none")


@router.post("/checkin", response_model=WebhookAck)
async def receive_checkin(
    request: Request,
    background_tasks: BackgroundTasks,
    process_checkin_use_case: FromDishka[ProcessCheckinUseCase],
    account_service: FromDishka[AccountService],
):
    """Receive a Foursquare check-in push.

    Accepts JSON or form bodies with ``user`` (JSON), ``checkin`` (JSON
    string) and ``secret``. The Discord notification is sent in the
    background; the acknowledgment never waits for it.

    Example:
        POST /webhook/checkin
        user={"id":"123","firstName":"Ada"}&checkin={...}&secret=...

        Response:
        {"success": true, "message": "Checkin received and processing"}
    """
    try:
        fields = await _read_fields(request)
    except UnsupportedContentType as e:
        logger.warning(f"Rejected webhook with content type: {e}")
        return JSONResponse(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            content=WebhookAck(
                success=False, message="Unsupported content type"
            ).model_dump(),
        )
    except (ValidationError, ValueError) as e:
        logger.warning(f"Unreadable webhook body: {e}")
        return WebhookAck(success=False, message="Invalid payload")

    try:
        result = await process_checkin_use_case.execute(
            ProcessCheckinRequest(fields=fields)
        )
    except AuthError as e:
        client_host = request.client.host if request.client else "unknown"
        security_logger.warning(
            f"Unauthorized webhook attempt from {client_host}: {e}"
        )
        return WebhookAck(success=False, message="Unauthorized")
    except ValidationError as e:
        logger.warning(f"Invalid check-in payload: {e}")
        return WebhookAck(success=False, message="Invalid payload")
    except Exception as e:
        logger.exception(f"Unexpected error processing check-in: {e}")
        return WebhookAck(success=False, message="Internal error")

    if result.discord_user_id:
        background_tasks.add_task(
            account_service.record_checkin, DiscordUserId(result.discord_user_id)
        )

    logger.info(f"Check-in {result.checkin_id} accepted")
    return WebhookAck(success=True, message="Checkin received and processing")


@router.get("/health", response_model=WebhookHealthResponse)
async def webhook_health(
    settings: FromDishka[Settings],
    account_service: FromDishka[AccountService],
) -> WebhookHealthResponse:
    """Webhook configuration and directory reachability."""
    directory_ok = await account_service.ping()
    return WebhookHealthResponse(
        status="healthy" if directory_ok else "degraded",
        timestamp=datetime.now(timezone.utc),
        authentication=AuthenticationStatus(
            mode=settings.webhook.auth_mode,
            push_secret_configured=bool(settings.webhook.push_secret),
            single_user_configured=bool(settings.webhook.single_user_foursquare_id),
        ),
        directory=DirectoryStatus(status="ok" if directory_ok else "unavailable"),
    )
