"""Periodic expiry sweeper."""

import asyncio
from datetime import datetime
from typing import Callable, Optional

import logfire
from dishka import AsyncContainer
from pydantic import BaseModel

from gate.application.usecase.sweep import (
    ExpireSubscriptionRequest,
    ExpireSubscriptionUseCase,
    ExpiryOutcome,
)
from gate.config import Settings
from gate.domain.model.common import utcnow
from gate.domain.service import SubscriptionService


class SweepReport(BaseModel):
    """Counters for one sweep."""

    processed: int = 0
    kicked: int = 0
    kick_failed: int = 0
    skipped: int = 0
    errors: int = 0


class ExpirySweeper:
    """Revokes lapsed subscriptions once at start and then on a fixed interval.

    Ticks are scheduled on the clock, not after the previous sweep finished;
    a tick that fires while a sweep is still running is skipped.
    """

    def __init__(
        self,
        container: AsyncContainer,
        settings: Settings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize sweeper.

        Args:
            container: Application-scope DI container
            settings: Application settings
            clock: Source of the current instant
        """
        self.container = container
        self.interval = settings.subscription.sweep_interval_seconds
        self.clock = clock
        self._lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()

    async def sweep(self) -> Optional[SweepReport]:
        """Run one sweep.

        Returns:
            The report, or None if another sweep was already running
        """
        if self._lock.locked():
            logfire.warn("Previous sweep still running, skipping tick")
            return None

        async with self._lock:
            with logfire.span("expiry_sweep"):
                report = SweepReport()

                try:
                    async with self.container() as request_container:
                        subscription_service = await request_container.get(
                            SubscriptionService
                        )
                        due = await subscription_service.list_expirable(self.clock())
                except Exception:
                    report.errors += 1
                    logfire.exception("Expiry snapshot failed")
                    return report

                for subscription in due:
                    report.processed += 1
                    try:
                        async with self.container() as request_container:
                            use_case = await request_container.get(
                                ExpireSubscriptionUseCase
                            )
                            response = await use_case.execute(
                                ExpireSubscriptionRequest(
                                    subscription_id=subscription.id, now=self.clock()
                                )
                            )
                    except Exception:
                        report.errors += 1
                        logfire.exception(
                            "Expiry failed",
                            subscription_id=str(subscription.id),
                        )
                        continue

                    if response.outcome == ExpiryOutcome.KICKED:
                        report.kicked += 1
                    elif response.outcome == ExpiryOutcome.KICK_FAILED:
                        report.kick_failed += 1
                    else:
                        report.skipped += 1

                logfire.info("Sweep finished", **report.model_dump())
                return report

    def tick(self) -> asyncio.Task:
        """Schedule a sweep without waiting for it."""
        task = asyncio.create_task(self.sweep())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def run(self, stop: Optional[asyncio.Event] = None) -> None:
        """Tick immediately and then every interval until ``stop`` is set."""
        logfire.info("Expiry sweeper started", interval_seconds=self.interval)
        while stop is None or not stop.is_set():
            self.tick()
            if stop is None:
                await asyncio.sleep(self.interval)
                continue
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
