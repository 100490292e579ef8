"""Validation pipeline: validates every record of a job through the limiter."""
import asyncio
from typing import Sequence

import structlog

from email_validation_core.jobs.limiter import ConcurrencyLimiter
from email_validation_core.jobs.models import (
    FailedRecord,
    JobSnapshot,
    JobState,
    Record,
    format_progress,
)
from email_validation_core.jobs.store import JobStore
from email_validation_core.util.time import utc_now
from email_validation_core.validation.base import INVALID_EMAIL_FORMAT, BaseValidator

logger = structlog.get_logger()


class _JobRun:
    """Counters for one job run; every mutation yields a fresh snapshot."""

    def __init__(self, base: JobSnapshot):
        self.base = base
        self.settled = 0
        self.succeeded = 0
        self.failures: list[FailedRecord] = []

    def settle(self, record: Record, error: str | None) -> JobSnapshot:
        if error is None:
            self.succeeded += 1
        else:
            self.failures.append(
                FailedRecord(name=record.name, email=record.email, error=error)
            )
        self.settled += 1
        return self.snapshot()

    def snapshot(self) -> JobSnapshot:
        return self.base.model_copy(
            update={
                "processed_records": self.settled,
                "failed_records": tuple(self.failures),
                "progress": format_progress(self.settled, self.base.total_records),
            }
        )

    def completed(self) -> JobSnapshot:
        # processed_records switches from "settled" to "succeeded" here
        return self.base.model_copy(
            update={
                "status": JobState.completed,
                "processed_records": self.succeeded,
                "failed_records": tuple(self.failures),
                "progress": "100%",
                "completed_at": utc_now(),
            }
        )

    def failed(self, error: str) -> JobSnapshot:
        return self.snapshot().model_copy(
            update={
                "status": JobState.failed,
                "completed_at": utc_now(),
                "error": error,
            }
        )


class ValidationPipeline:
    """Validates a batch with at most ``concurrency`` validator calls in flight.

    A failing record (invalid verdict or validator error) is recorded and never
    aborts the batch. Any other error drives the job to ``failed``.
    """

    def __init__(self, store: JobStore, validator: BaseValidator, concurrency: int = 5):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.store = store
        self.validator = validator
        self.concurrency = concurrency

    async def run(self, upload_id: str, records: Sequence[Record]) -> JobSnapshot:
        """Process all records and write the terminal snapshot."""
        job = _JobRun(JobSnapshot.initial(upload_id, len(records)))
        tasks: list[asyncio.Task] = []
        try:
            job = _JobRun(self.store.get(upload_id) or job.base)
            limiter = ConcurrencyLimiter(self.concurrency)
            for index, record in enumerate(records):
                tasks.append(
                    asyncio.create_task(limiter.run(self._process, job, index, record))
                )
            await asyncio.gather(*tasks)
            final = job.completed()
            self.store.put(upload_id, final)
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            final = job.failed(str(e) or e.__class__.__name__)
            self.store.put(upload_id, final)
            logger.error(
                "job_failed",
                upload_id=upload_id,
                error=final.error,
                processed=job.settled,
                failed=len(job.failures),
            )
            return final

        logger.info(
            "job_completed",
            upload_id=upload_id,
            total=job.base.total_records,
            succeeded=job.succeeded,
            failed=len(job.failures),
            peak_in_flight=limiter.peak_in_flight,
        )
        return final

    async def _process(self, job: _JobRun, index: int, record: Record) -> None:
        error = await self._check(job.base.upload_id, index, record)
        # No await between settle and put, so snapshots stay monotonic.
        self.store.put(job.base.upload_id, job.settle(record, error))

    async def _check(self, upload_id: str, index: int, record: Record) -> str | None:
        """Return None on success, otherwise the failure reason for the record."""
        logger.debug("record_validating", upload_id=upload_id, row=index + 1, email=record.email)
        try:
            verdict = await self.validator.validate(record)
        except Exception as e:
            logger.error(
                "record_validation_error",
                upload_id=upload_id,
                email=record.email,
                error=str(e),
            )
            return str(e) or e.__class__.__name__
        if verdict.valid:
            logger.info("record_valid", upload_id=upload_id, email=record.email)
            return None
        logger.warning("record_invalid", upload_id=upload_id, email=record.email)
        return verdict.reason or INVALID_EMAIL_FORMAT
