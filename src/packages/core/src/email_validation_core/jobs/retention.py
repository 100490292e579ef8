"""Eviction of old terminal jobs from the job store."""
import asyncio
from datetime import datetime, timedelta

import structlog

from email_validation_core.jobs.store import JobStore
from email_validation_core.util.time import utc_now

logger = structlog.get_logger()


def sweep_stale_jobs(
    store: JobStore, max_age: timedelta, now: datetime | None = None
) -> list[str]:
    """Evict completed/failed jobs that finished more than ``max_age`` ago."""
    cutoff = (now or utc_now()) - max_age
    evicted = [upload_id for upload_id in store.list_stale_terminal_jobs(cutoff) if store.evict(upload_id)]
    for upload_id in evicted:
        logger.info("job_evicted", upload_id=upload_id)
    return evicted


class RetentionSweeper:
    """Periodically runs ``sweep_stale_jobs`` on the current event loop."""

    def __init__(self, store: JobStore, max_age: timedelta, interval: float):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.store = store
        self.max_age = max_age
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop(), name="retention-sweeper")
        logger.info("retention_sweeper_started", interval=self.interval, max_age=self.max_age.total_seconds())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("retention_sweeper_stopped")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                sweep_stale_jobs(self.store, self.max_age)
            except Exception as e:
                logger.exception("retention_sweep_failed", error=str(e))
