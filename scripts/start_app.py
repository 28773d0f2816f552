#!/usr/bin/env python3
"""Start the bot, the expiry sweeper and the liveness endpoint.

Startup errors are reported to Logfire before the process exits.
"""

import asyncio
import sys

import logfire
import uvicorn

from gate.adapter.telegram import TelegramGateway
from gate.config import Settings
from gate.interface.api.app import create_app
from gate.interface.bot import AdminConversationStore, UpdateDispatcher, UpdatePoller
from gate.interface.worker import ExpirySweeper
from gate.util.di.container import create_container
from gate.util.logging import setup_logging
from gate.util.observability import configure_logfire


async def serve() -> None:
    """Run every component until the HTTP server is asked to exit."""
    container = create_container()
    try:
        settings = await container.get(Settings)
        gateway = await container.get(TelegramGateway)

        conversations = AdminConversationStore(
            settings.subscription.admin_prompt_timeout_seconds
        )
        dispatcher = UpdateDispatcher(container, gateway, settings, conversations)
        poller = UpdatePoller(gateway, dispatcher, settings)
        sweeper = ExpirySweeper(container, settings)

        server = uvicorn.Server(
            uvicorn.Config(
                create_app(container),
                host=settings.host,
                port=settings.port,
                log_level="info",
            )
        )
        stop = asyncio.Event()

        async def run_server() -> None:
            # uvicorn owns the signal handlers; its exit stops the rest
            try:
                await server.serve()
            finally:
                stop.set()

        logfire.info(
            "Channel gate starting",
            channel_id=settings.telegram.channel_id,
            redemption_trigger=settings.subscription.redemption_trigger,
        )
        await asyncio.gather(run_server(), poller.run(stop), sweeper.run(stop))
    finally:
        await container.close()
        logfire.info("Channel gate stopped")


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    setup_logging(settings)
    configure_logfire(settings)

    try:
        asyncio.run(serve())
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
