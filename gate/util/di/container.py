"""Production container and FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from gate.util.di import build_providers


def create_container() -> AsyncContainer:
    """Build the container shared by the bot, the sweeper and the HTTP app.

    Closing it disposes the database engine and the Telegram HTTP client.
    """
    return make_async_container(*build_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to a FastAPI app for ``FromDishka`` routes."""
    setup_dishka(container, app)
