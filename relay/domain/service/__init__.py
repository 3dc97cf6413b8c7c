"""Domain services."""

from .account_service import AccountService
from .auth_service import AuthService, OAuthClient
from .base import Service
from .checkin_service import CheckinTransformer
from .jwt_service import JWTService
from .webhook_auth_service import (
    AccountWebhookAuthenticator,
    SingleUserCredential,
    SingleUserWebhookAuthenticator,
    WebhookAuthenticator,
    WebhookPrincipal,
    constant_time_equals,
)

__all__ = [
    "AccountService",
    "AccountWebhookAuthenticator",
    "AuthService",
    "CheckinTransformer",
    "JWTService",
    "OAuthClient",
    "Service",
    "SingleUserCredential",
    "SingleUserWebhookAuthenticator",
    "WebhookAuthenticator",
    "WebhookPrincipal",
    "constant_time_equals",
]
