"""Logfire setup and instrumentation helpers.

Application code logs through logfire directly::

    logfire.info("Code redeemed", user_id=user_id, days=days)

    with logfire.span("expiry_sweep"):
        ...

Redemption tokens are logged as their first four characters only.
"""

from typing import Any

import httpx
import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from gate.config import Settings

SERVICE_NAME = "channel-gate"
SERVICE_VERSION = "0.1.0"


def sends_to_logfire(settings: Settings) -> bool:
    """Whether spans leave the process.

    OBSERVABILITY__SEND_TO_LOGFIRE wins when set; otherwise a configured
    OBSERVABILITY__LOGFIRE_TOKEN turns sending on.
    """
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire with console output and optional cloud sending.

    Args:
        settings: Application settings
    """
    send = sends_to_logfire(settings)
    options: dict[str, Any] = {
        "service_name": SERVICE_NAME,
        "service_version": SERVICE_VERSION,
        "environment": settings.environment,
        "send_to_logfire": send,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        options["token"] = settings.observability.logfire_token

    logfire.configure(**options)
    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send,
        git_sha=settings.git_sha,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace requests to the liveness app."""
    logfire.instrument_fastapi(app)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx(client: httpx.AsyncClient) -> None:
    """Trace Bot API calls made through ``client``, long polls included."""
    logfire.instrument_httpx(client)
