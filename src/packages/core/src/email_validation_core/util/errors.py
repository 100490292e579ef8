"""Error taxonomy shared by the ingest, validation and job layers."""


class ValidationError(ValueError):
    """Base class for errors raised while accepting a batch."""


class InvalidFormatError(ValidationError):
    """The uploaded file could not be decoded into records.

    ``faults`` lists every offending row as ``{"row": n, "error": "..."}`` so a
    single error describes the whole file.
    """

    def __init__(self, message: str, faults: list[dict] | None = None):
        super().__init__(message)
        self.faults = faults or []


class EmptyBatchError(ValidationError):
    """No records were decoded, so no job can be created."""


class JobNotFoundError(LookupError):
    """No job is known under the given upload id."""

    def __init__(self, upload_id: str):
        super().__init__(f"Upload ID not found: {upload_id}")
        self.upload_id = upload_id


class TransientValidationError(Exception):
    """The record validator could not produce a verdict this time."""
