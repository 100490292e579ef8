"""Decoding of raw rows into validated ``Record`` batches."""
import json
from typing import Any, Iterable, Iterator, NamedTuple

from email_validation_core.ingest.formats import detect_format, load_records
from email_validation_core.jobs.models import Record
from email_validation_core.util.errors import EmptyBatchError, InvalidFormatError

MISSING_FIELDS = "Missing required fields (name, email)"
REQUIRED_FIELDS = ("name", "email")


class RowFault(NamedTuple):
    """A row that could not be turned into a record (1-based data row)."""

    row: int
    error: str


def iter_records(rows: Iterable[dict[str, Any]]) -> Iterator[Record | RowFault]:
    """Lazily turn raw rows into records, reporting bad rows instead of dropping them."""
    for i, row in enumerate(rows, start=1):
        values = {f: str(row.get(f) or "").strip() for f in REQUIRED_FIELDS}
        if not all(values.values()):
            yield RowFault(row=i, error=MISSING_FIELDS)
            continue
        yield Record(**values)


def decode_records(rows: Iterable[dict[str, Any]]) -> list[Record]:
    """Decode a whole batch; any bad row rejects the entire batch."""
    records: list[Record] = []
    faults: list[dict] = []
    for item in iter_records(rows):
        if isinstance(item, RowFault):
            faults.append(item._asdict())
        else:
            records.append(item)
    if faults:
        raise InvalidFormatError(f"CSV parsing errors: {json.dumps(faults)}", faults)
    if not records:
        raise EmptyBatchError("CSV file contains no valid records")
    return records


def load_batch(file_path: str) -> list[Record]:
    """Detect the format of a staged file and decode it into records."""
    format_name = detect_format(file_path)
    if not format_name:
        raise InvalidFormatError("Unsupported or unrecognized file format")
    return decode_records(load_records(file_path, format_name))
