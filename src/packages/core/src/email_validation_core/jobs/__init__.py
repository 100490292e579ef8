"""Job management module."""
from email_validation_core.jobs.models import (
    FailedRecord,
    JobSnapshot,
    JobState,
    Record,
    SubmitResult,
    format_progress,
)
from email_validation_core.jobs.store import InMemoryJobStore, JobStore
from email_validation_core.jobs.limiter import ConcurrencyLimiter
from email_validation_core.jobs.pipeline import ValidationPipeline
from email_validation_core.jobs.service import JobService
from email_validation_core.jobs.retention import RetentionSweeper, sweep_stale_jobs

__all__ = [
    "FailedRecord",
    "JobSnapshot",
    "JobState",
    "Record",
    "SubmitResult",
    "format_progress",
    "InMemoryJobStore",
    "JobStore",
    "ConcurrencyLimiter",
    "ValidationPipeline",
    "JobService",
    "RetentionSweeper",
    "sweep_stale_jobs",
]
