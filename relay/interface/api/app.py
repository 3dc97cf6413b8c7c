"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from relay.adapter.discord.webhook import NotificationDispatcher
from relay.adapter.state import OAuthStateStore
from relay.config import Settings
from relay.interface.api.routes import auth, health, users, webhook
from relay.util.di.container import create_container, setup_di
from relay.util.observability import instrument_fastapi, instrument_httpx


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the OAuth state sweeper; drain deliveries on shutdown."""
    container: AsyncContainer = app.state.dishka_container
    settings = await container.get(Settings)
    state_store = await container.get(OAuthStateStore)
    dispatcher = await container.get(NotificationDispatcher)

    state_store.start_sweeper(settings.auth.state_sweep_interval_seconds)
    try:
        yield
    finally:
        await state_store.stop_sweeper()
        await dispatcher.aclose()
        await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: Prebuilt DI container (tests); production container if None
    """
    settings = Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="Swarm Relay",
        description="Relays Foursquare Swarm check-ins to a Discord channel",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    # Only the relay's own pages call the API from a browser
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.api.base_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(webhook.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(users.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
