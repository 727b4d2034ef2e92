# FILE: unloggarr/scheduler/service.py
"""
Analysis scheduler.

An explicitly owned service object (one per application, held on
`app.state`) that wakes every TICK_INTERVAL_S seconds and runs one analysis
cycle when the cron pattern matches the current wall-clock minute/hour.

Stopping cancels the timer only; a run already in progress finishes.
State is in memory only and is mutated by both the tick loop and control
calls without a lock; a manual trigger can overlap a tick-driven run.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional

from unloggarr.mcpo.client import ProxyClient
from unloggarr.scheduler import cron
from unloggarr.scheduler.pipeline import run_analysis_cycle
from unloggarr.scheduler.schemas import (
    ScheduleConfig,
    ScheduledAnalysisReport,
    ScheduleStatus,
)
from unloggarr.settings import TICK_INTERVAL_S, get_default_schedule

logger = logging.getLogger(__name__)

Runner = Callable[[], Awaitable[ScheduledAnalysisReport]]


class SchedulerService:
    """
    Cron-like scheduler for the analysis pipeline.

    At most one tick task exists at a time; start() replaces it.
    """

    def __init__(
        self,
        proxy: Optional[ProxyClient] = None,
        pattern: Optional[str] = None,
        tick_interval: float = TICK_INTERVAL_S,
        runner: Optional[Runner] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.proxy = proxy or ProxyClient()
        self.config = ScheduleConfig(pattern=pattern or get_default_schedule())
        self.tick_interval = tick_interval
        self._runner = runner or self._default_runner
        self._clock = clock
        self._task: Optional[asyncio.Task] = None
        self._runs: set[asyncio.Task] = set()
        self.last_report: Optional[ScheduledAnalysisReport] = None

    async def _default_runner(self) -> ScheduledAnalysisReport:
        return await run_analysis_cycle(self.proxy, notify=True)

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    async def start(self, pattern: Optional[str] = None) -> ScheduleConfig:
        """
        Enable the schedule and (re)install the tick task.

        Raises:
            ValueError: the pattern's minute/hour fields are unsupported
        """
        new_pattern = pattern or self.config.pattern
        next_run = cron.next_run_time(new_pattern, self._clock())

        self._cancel_task()
        self.config.pattern = new_pattern
        self.config.enabled = True
        self.config.next_run_at = next_run
        self.config.status = ScheduleStatus.RUNNING
        self._task = asyncio.create_task(self._run_loop())

        logger.info(f"[scheduler] Started with cron: {new_pattern}")
        return self.status()

    async def stop(self) -> ScheduleConfig:
        self._cancel_task()
        self.config.enabled = False
        self.config.next_run_at = None
        self.config.status = ScheduleStatus.STOPPED

        logger.info("[scheduler] Stopped")
        return self.status()

    async def trigger(self) -> ScheduleConfig:
        """Run one cycle now; the tick task is left as it is."""
        await self._run_once(self._clock())
        return self.status()

    def status(self) -> ScheduleConfig:
        return self.config.model_copy()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    # ------------------------------------------------------------------
    # Tick loop
    # ------------------------------------------------------------------

    def _cancel_task(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run_loop(self) -> None:
        while True:
            try:
                await asyncio.sleep(self.tick_interval)
                await self.tick()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"[scheduler] Tick error: {e}")

    async def tick(self, now: Optional[datetime] = None) -> bool:
        """Evaluate one tick. Returns True when a cycle ran."""
        now = now or self._clock()
        if not self.config.enabled:
            return False
        try:
            due = cron.matches(self.config.pattern, now)
        except ValueError as e:
            logger.error(f"[scheduler] Invalid pattern {self.config.pattern!r}: {e}")
            self.config.status = ScheduleStatus.ERROR
            return False
        if not due:
            return False

        # The run is its own task so stop() only cancels future ticks
        run = asyncio.create_task(self._run_once(now))
        self._runs.add(run)
        run.add_done_callback(self._runs.discard)
        await asyncio.shield(run)
        return True

    async def _run_once(self, now: datetime) -> None:
        """Run one cycle; every failure is absorbed into status=error."""
        logger.info("[scheduler] Triggering scheduled analysis")
        self.config.status = ScheduleStatus.RUNNING
        self.config.last_run_at = now

        try:
            self.last_report = await self._runner()
        except Exception as e:
            logger.error(f"[scheduler] Scheduled analysis failed: {e}")
            self.config.status = ScheduleStatus.ERROR
        else:
            logger.info("[scheduler] Scheduled analysis completed")
            self.config.status = ScheduleStatus.RUNNING if self.config.enabled else ScheduleStatus.STOPPED

        if self.config.enabled:
            try:
                self.config.next_run_at = cron.next_run_time(self.config.pattern, now)
            except ValueError:
                self.config.next_run_at = None


__all__ = ["SchedulerService"]
