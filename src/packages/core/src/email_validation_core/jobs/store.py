"""Job state store."""
import threading
from abc import ABC, abstractmethod
from datetime import datetime

from email_validation_core.jobs.models import JobSnapshot


class JobStore(ABC):
    """Mapping from upload id to the latest full job snapshot.

    ``put`` always replaces the whole snapshot; there are no partial updates.
    """

    @abstractmethod
    def put(self, upload_id: str, snapshot: JobSnapshot) -> None:
        pass

    @abstractmethod
    def get(self, upload_id: str) -> JobSnapshot | None:
        pass

    @abstractmethod
    def list_stale_terminal_jobs(self, older_than: datetime) -> list[str]:
        """Ids of completed/failed jobs that finished before ``older_than``."""
        pass

    @abstractmethod
    def evict(self, upload_id: str) -> bool:
        """Remove a job. Returns False if it was not present."""
        pass


class InMemoryJobStore(JobStore):
    """Process-local store; job state lives for the lifetime of the process."""

    def __init__(self):
        self._jobs: dict[str, JobSnapshot] = {}
        self._lock = threading.Lock()

    def put(self, upload_id: str, snapshot: JobSnapshot) -> None:
        if snapshot.upload_id != upload_id:
            raise ValueError(f"snapshot for {snapshot.upload_id} stored under {upload_id}")
        with self._lock:
            self._jobs[upload_id] = snapshot

    def get(self, upload_id: str) -> JobSnapshot | None:
        with self._lock:
            return self._jobs.get(upload_id)

    def list_stale_terminal_jobs(self, older_than: datetime) -> list[str]:
        with self._lock:
            return [
                upload_id
                for upload_id, snap in self._jobs.items()
                if snap.is_terminal
                and snap.completed_at is not None
                and snap.completed_at < older_than
            ]

    def evict(self, upload_id: str) -> bool:
        with self._lock:
            return self._jobs.pop(upload_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
