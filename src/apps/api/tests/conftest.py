"""Fixtures for HTTP tests."""
import asyncio

import pytest
from fastapi.testclient import TestClient

from email_validation_api.main import create_app
from email_validation_api.settings import Settings
from email_validation_core.validation import (
    INVALID_EMAIL_FORMAT,
    BaseValidator,
    Verdict,
    looks_like_email,
)


class FixedDelayValidator(BaseValidator):
    """Validator with a fixed latency and no random service failures."""

    def __init__(self, delay: float = 0.0):
        self.delay = delay

    async def validate(self, record):
        await asyncio.sleep(self.delay)
        if looks_like_email(record.email):
            return Verdict(valid=True)
        return Verdict(valid=False, reason=INVALID_EMAIL_FORMAT)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        upload_dir=str(tmp_path / "uploads"),
        retention_enabled=False,
        log_level="WARNING",
        max_upload_mb=1,
    )


@pytest.fixture
def make_client(settings):
    clients = []

    def _make(delay: float = 0.0) -> TestClient:
        client = TestClient(create_app(settings=settings, validator=FixedDelayValidator(delay)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
