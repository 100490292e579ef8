"""Simulated remote email validation service."""
import asyncio
import random

from email_validation_core.util.errors import TransientValidationError
from email_validation_core.validation.base import INVALID_EMAIL_FORMAT, BaseValidator, Verdict

SERVICE_UNAVAILABLE = "Validation service temporarily unavailable"


def looks_like_email(email: str) -> bool:
    """Cheap syntactic check used by the simulated service."""
    return "@" in email and "." in email


class SimulatedEmailValidator(BaseValidator):
    """Stand-in for an external email verification API.

    Every call waits a random latency between ``min_latency`` and
    ``max_latency`` seconds and fails with ``TransientValidationError`` with
    probability ``failure_rate``.
    """

    def __init__(
        self,
        min_latency: float = 0.1,
        max_latency: float = 0.3,
        failure_rate: float = 0.1,
        rng: random.Random | None = None,
    ):
        if min_latency < 0 or max_latency < min_latency:
            raise ValueError("latency bounds must satisfy 0 <= min_latency <= max_latency")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self.min_latency = min_latency
        self.max_latency = max_latency
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()

    async def validate(self, record) -> Verdict:
        await asyncio.sleep(self._rng.uniform(self.min_latency, self.max_latency))
        if self._rng.random() < self.failure_rate:
            raise TransientValidationError(SERVICE_UNAVAILABLE)
        if looks_like_email(record.email):
            return Verdict(valid=True)
        return Verdict(valid=False, reason=INVALID_EMAIL_FORMAT)
