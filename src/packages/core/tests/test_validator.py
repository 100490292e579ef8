"""Tests for the simulated email validator."""
import asyncio
import random

import pytest

from email_validation_core.jobs import Record
from email_validation_core.util import TransientValidationError
from email_validation_core.validation import (
    INVALID_EMAIL_FORMAT,
    SERVICE_UNAVAILABLE,
    SimulatedEmailValidator,
    looks_like_email,
)


def _validate(validator, email):
    return asyncio.run(validator.validate(Record(name="Someone", email=email)))


def test_looks_like_email():
    assert looks_like_email("john@example.com")
    assert not looks_like_email("invalid-email")
    assert not looks_like_email("john@localhost")


def test_valid_email():
    validator = SimulatedEmailValidator(min_latency=0, max_latency=0, failure_rate=0)
    assert _validate(validator, "test@example.com").valid


def test_invalid_email_has_reason():
    validator = SimulatedEmailValidator(min_latency=0, max_latency=0, failure_rate=0)
    verdict = _validate(validator, "invalid-email")
    assert not verdict.valid
    assert verdict.reason == INVALID_EMAIL_FORMAT


def test_service_failure():
    validator = SimulatedEmailValidator(min_latency=0, max_latency=0, failure_rate=1)
    with pytest.raises(TransientValidationError, match=SERVICE_UNAVAILABLE):
        _validate(validator, "test@example.com")


def test_some_calls_fail_at_partial_rate():
    validator = SimulatedEmailValidator(
        min_latency=0, max_latency=0, failure_rate=0.5, rng=random.Random(7)
    )

    async def scenario():
        record = Record(name="Someone", email="test@example.com")
        return await asyncio.gather(
            *(validator.validate(record) for _ in range(40)), return_exceptions=True
        )

    results = asyncio.run(scenario())
    errors = [r for r in results if isinstance(r, TransientValidationError)]
    assert 0 < len(errors) < 40


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_latency": -1},
        {"min_latency": 0.5, "max_latency": 0.1},
        {"failure_rate": 1.5},
    ],
)
def test_rejects_bad_configuration(kwargs):
    with pytest.raises(ValueError):
        SimulatedEmailValidator(**kwargs)
