"""Job submission and status lookup."""
import asyncio
from functools import partial
from typing import Iterable

import structlog

from email_validation_core.jobs.models import JobSnapshot, Record, SubmitResult
from email_validation_core.jobs.pipeline import ValidationPipeline
from email_validation_core.jobs.store import InMemoryJobStore, JobStore
from email_validation_core.util.errors import EmptyBatchError, JobNotFoundError
from email_validation_core.util.ids import generate_id
from email_validation_core.validation.base import BaseValidator
from email_validation_core.validation.email import SimulatedEmailValidator

logger = structlog.get_logger()


class JobService:
    """Creates validation jobs and answers status queries.

    ``submit`` returns as soon as the job is stored; the pipeline runs as a
    detached task on the current event loop and is observed only through
    ``get_status``.
    """

    def __init__(
        self,
        store: JobStore | None = None,
        validator: BaseValidator | None = None,
        concurrency: int = 5,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.store = store if store is not None else InMemoryJobStore()
        self.validator = validator if validator is not None else SimulatedEmailValidator()
        self.concurrency = concurrency
        self._tasks: dict[str, asyncio.Task] = {}

    def submit(self, records: Iterable[Record]) -> SubmitResult:
        """Create a job for ``records`` and schedule its validation."""
        batch = list(records)
        if not batch:
            raise EmptyBatchError("CSV file contains no valid records")
        loop = asyncio.get_running_loop()

        upload_id = generate_id()
        self.store.put(upload_id, JobSnapshot.initial(upload_id, len(batch)))
        pipeline = ValidationPipeline(self.store, self.validator, self.concurrency)
        task = loop.create_task(pipeline.run(upload_id, batch), name=f"validate-{upload_id}")
        self._tasks[upload_id] = task
        task.add_done_callback(partial(self._on_done, upload_id))
        logger.info("job_submitted", upload_id=upload_id, total=len(batch))
        return SubmitResult(upload_id=upload_id, total_records=len(batch))

    def get_status(self, upload_id: str) -> JobSnapshot:
        """Return the latest snapshot or raise ``JobNotFoundError``."""
        snapshot = self.store.get(upload_id)
        if snapshot is None:
            raise JobNotFoundError(upload_id)
        return snapshot

    async def wait(self, upload_id: str) -> JobSnapshot:
        """Wait until the job's pipeline has finished, then return its status."""
        task = self._tasks.get(upload_id)
        if task is not None:
            await asyncio.wait({task})
        return self.get_status(upload_id)

    @property
    def active_jobs(self) -> int:
        return len(self._tasks)

    async def shutdown(self) -> None:
        """Let outstanding jobs run to completion."""
        if self._tasks:
            logger.info("waiting_for_jobs", count=len(self._tasks))
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    def _on_done(self, upload_id: str, task: asyncio.Task) -> None:
        self._tasks.pop(upload_id, None)
        if task.cancelled():
            logger.warning("job_task_cancelled", upload_id=upload_id)
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "job_task_crashed",
                upload_id=upload_id,
                error=str(exc),
                exc_info=exc,
            )
