"""Shared fixtures for core tests."""
import asyncio

import pytest

from email_validation_core.jobs import InMemoryJobStore, Record
from email_validation_core.util import TransientValidationError
from email_validation_core.validation import (
    INVALID_EMAIL_FORMAT,
    BaseValidator,
    Verdict,
    looks_like_email,
)


class ScriptedValidator(BaseValidator):
    """Deterministic validator that records how many calls overlap."""

    def __init__(self, delay: float = 0.0, errors: dict[str, str] | None = None):
        self.delay = delay
        self.errors = dict(errors or {})
        self.calls: list[str] = []
        self.in_flight = 0
        self.peak = 0

    async def validate(self, record):
        self.calls.append(record.email)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if record.email in self.errors:
                raise TransientValidationError(self.errors[record.email])
            if looks_like_email(record.email):
                return Verdict(valid=True)
            return Verdict(valid=False, reason=INVALID_EMAIL_FORMAT)
        finally:
            self.in_flight -= 1


class RecordingStore(InMemoryJobStore):
    """In-memory store that keeps every snapshot ever written."""

    def __init__(self):
        super().__init__()
        self.history = []

    def put(self, upload_id, snapshot):
        super().put(upload_id, snapshot)
        self.history.append(snapshot)


@pytest.fixture
def make_validator():
    return ScriptedValidator


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def scenario_a():
    return [
        Record(name="John", email="john@example.com"),
        Record(name="Jane", email="jane@example.com"),
        Record(name="Invalid", email="invalid-email"),
    ]


@pytest.fixture
def make_records():
    def _make(count: int) -> list[Record]:
        return [Record(name=f"User {i}", email=f"user{i}@example.com") for i in range(count)]

    return _make
