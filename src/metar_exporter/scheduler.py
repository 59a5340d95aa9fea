"""Periodic collection rounds over all configured stations."""

import asyncio
import logging
from datetime import timedelta
from typing import Sequence

from .collector import StationCollector

logger = logging.getLogger(__name__)


class Scheduler:
    """Fires a collection round at startup and then every interval.

    Each round spawns one task per station. Tasks are never awaited or
    cancelled by the scheduler, so a slow station may still be running
    when the next round starts; whichever write lands last wins.
    """

    def __init__(
        self,
        stations: Sequence[str],
        collector: StationCollector,
        interval: timedelta,
    ) -> None:
        """Initialize scheduler.

        Args:
            stations: Station identifiers to collect every round.
            collector: Collector used for each station.
            interval: Time between two rounds.
        """
        self.stations = list(stations)
        self.collector = collector
        self.interval = interval
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of per-station tasks that have not finished yet."""
        return len(self._tasks)

    def run_round(self) -> list[asyncio.Task]:
        """Start one collection task per station and return them."""
        logger.info("Starting collection round for %d stations", len(self.stations))
        tasks: list[asyncio.Task] = []
        for station in self.stations:
            task = asyncio.create_task(self.collector.collect(station), name=f"collect-{station}")
            self._tasks.add(task)
            task.add_done_callback(self._task_done)
            tasks.append(task)
        return tasks

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Collection task %s failed: %s", task.get_name(), exc, exc_info=exc)

    async def run(self, shutdown_event: asyncio.Event, fire_immediately: bool = True) -> None:
        """Run rounds until shutdown is signaled.

        Args:
            shutdown_event: Event to signal shutdown.
            fire_immediately: If False, the first round fires after one
                interval (the caller already started the startup round).
        """
        interval = self.interval.total_seconds()
        if fire_immediately:
            self.run_round()

        while not shutdown_event.is_set():
            # Wait for next interval or shutdown
            try:
                await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
                break
            except asyncio.TimeoutError:
                self.run_round()

        logger.info("Scheduler stopped")
