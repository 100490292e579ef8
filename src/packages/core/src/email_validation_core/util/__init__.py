"""Utility modules."""
from email_validation_core.util.ids import generate_id
from email_validation_core.util.time import utc_now, utc_now_iso, to_iso
from email_validation_core.util.errors import (
    ValidationError,
    InvalidFormatError,
    EmptyBatchError,
    JobNotFoundError,
    TransientValidationError,
)

__all__ = [
    "generate_id",
    "utc_now",
    "utc_now_iso",
    "to_iso",
    "ValidationError",
    "InvalidFormatError",
    "EmptyBatchError",
    "JobNotFoundError",
    "TransientValidationError",
]
