"""Long-poll loop for inbound updates."""

import asyncio
from typing import Any, Awaitable, Optional

import logfire

from gate.adapter.telegram import TelegramGateway
from gate.config import Settings
from gate.domain.error import GatewayUnavailableError
from gate.interface.bot.dispatcher import UpdateDispatcher


async def until_stopped(work: Awaitable[Any], stop: Optional[asyncio.Event]) -> Any:
    """Await ``work`` unless ``stop`` is set first.

    Work still pending when ``stop`` fires is cancelled and None is returned.
    """
    if stop is None:
        return await work

    task = asyncio.ensure_future(work)
    stopped = asyncio.ensure_future(stop.wait())
    try:
        await asyncio.wait({task, stopped}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        stopped.cancel()
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
    return None if task.cancelled() else task.result()


class UpdatePoller:
    """Fetches updates and hands each one to the dispatcher as its own task."""

    def __init__(
        self,
        gateway: TelegramGateway,
        dispatcher: UpdateDispatcher,
        settings: Settings,
    ) -> None:
        """Initialize poller.

        Args:
            gateway: Telegram gateway
            dispatcher: Update dispatcher
            settings: Application settings
        """
        self.gateway = gateway
        self.dispatcher = dispatcher
        self.poll_timeout = settings.telegram.poll_timeout_seconds
        self.retry_delay = settings.telegram.poll_retry_seconds
        self.offset: Optional[int] = None
        self._tasks: set[asyncio.Task] = set()

    async def poll_once(self) -> int:
        """Fetch one batch and schedule its processing.

        Entries that are not JSON objects are dropped.

        Returns:
            Number of updates dispatched

        Raises:
            GatewayUnavailableError: If the fetch fails
        """
        updates = await self.gateway.get_updates(self.offset, self.poll_timeout)
        dispatched = 0
        for update in updates:
            if not isinstance(update, dict):
                logfire.warn("Dropping malformed update", update=repr(update))
                continue
            update_id = update.get("update_id")
            if isinstance(update_id, int):
                self.offset = max(self.offset or 0, update_id + 1)
            task = asyncio.create_task(self.dispatcher.handle(update))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            dispatched += 1
        return dispatched

    async def run(self, stop: Optional[asyncio.Event] = None) -> None:
        """Poll until ``stop`` is set (forever when omitted).

        Setting ``stop`` abandons an in-flight long poll; its updates are
        not acknowledged and will be fetched again on the next start.
        """
        logfire.info("Update polling started", timeout=self.poll_timeout)
        while stop is None or not stop.is_set():
            try:
                await until_stopped(self.poll_once(), stop)
                continue
            except GatewayUnavailableError as e:
                logfire.warn(
                    "Polling failed, retrying",
                    error=str(e),
                    retry_in=self.retry_delay,
                )
            except Exception:
                logfire.exception("Unexpected polling error, retrying")
            await until_stopped(asyncio.sleep(self.retry_delay), stop)
        await self.drain()

    async def drain(self) -> None:
        """Wait for in-flight update handlers."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
