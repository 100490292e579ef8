"""Record validator contract."""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from email_validation_core.jobs.models import Record

INVALID_EMAIL_FORMAT = "Invalid email format"


class Verdict(BaseModel):
    """Outcome of validating one record."""

    valid: bool
    reason: str | None = None


class BaseValidator(ABC):
    """Asynchronous, possibly unreliable, per-record validator.

    Implementations either return a ``Verdict`` or raise
    ``TransientValidationError`` when no verdict could be produced.
    """

    @abstractmethod
    async def validate(self, record: "Record") -> Verdict:
        """Validate a single record."""
        pass
