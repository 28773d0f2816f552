"""FastAPI liveness application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from gate.interface.api.routes import health
from gate.util.di.container import setup_di
from gate.util.observability import SERVICE_VERSION, instrument_fastapi


def create_app(container: AsyncContainer) -> FastAPI:
    """Create FastAPI application.

    The app shares the bot's container; closing the container is left to
    the process that owns it.

    Note: Logfire should be configured before calling this function.

    Args:
        container: DI container

    Returns:
        Configured FastAPI application
    """
    app_instance = FastAPI(
        title="Channel Gate",
        description="Liveness endpoint for the channel gate bot",
        version=SERVICE_VERSION,
    )

    instrument_fastapi(app_instance)

    setup_di(app_instance, container)

    app_instance.include_router(health.router)

    return app_instance
