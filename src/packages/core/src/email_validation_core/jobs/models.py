"""Job models."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from email_validation_core.util.time import utc_now


def format_progress(processed: int, total: int) -> str:
    """Render processed/total as a whole percentage, rounding halves up."""
    if total <= 0:
        return "0%"
    return f"{(processed * 200 + total) // (2 * total)}%"


class JobState(str, Enum):
    """Lifecycle of a validation job."""

    processing = "processing"
    completed = "completed"
    failed = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not JobState.processing


class Record(BaseModel):
    """One decoded row of an upload."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)


class FailedRecord(BaseModel):
    """A record whose validation did not succeed, with the reason."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    error: str


class JobSnapshot(BaseModel):
    """Full status of a job at one point in time.

    Snapshots are immutable and always replaced as a whole in the job store.
    While ``processing``, ``processed_records`` counts settled records; in a
    ``completed`` snapshot it counts successful records only.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    upload_id: str
    status: JobState
    total_records: int = Field(ge=0)
    processed_records: int = Field(default=0, ge=0)
    failed_records: tuple[FailedRecord, ...] = ()
    progress: str = "0%"
    created_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = None
    error: str | None = None

    @computed_field(alias="failedCount")
    @property
    def failed_count(self) -> int:
        return len(self.failed_records)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @classmethod
    def initial(cls, upload_id: str, total_records: int) -> "JobSnapshot":
        """Snapshot of a freshly submitted job."""
        return cls(
            upload_id=upload_id,
            status=JobState.processing,
            total_records=total_records,
        )


class SubmitResult(BaseModel):
    """What the submitter gets back immediately."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    upload_id: str
    total_records: int
