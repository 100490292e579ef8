"""Record validators."""
from email_validation_core.validation.base import INVALID_EMAIL_FORMAT, BaseValidator, Verdict
from email_validation_core.validation.email import (
    SERVICE_UNAVAILABLE,
    SimulatedEmailValidator,
    looks_like_email,
)

__all__ = [
    "INVALID_EMAIL_FORMAT",
    "SERVICE_UNAVAILABLE",
    "BaseValidator",
    "Verdict",
    "SimulatedEmailValidator",
    "looks_like_email",
]
