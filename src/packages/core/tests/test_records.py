"""Tests for decoding raw rows into record batches."""
import pytest

from email_validation_core.ingest import RowFault, decode_records, iter_records, load_batch
from email_validation_core.jobs import Record
from email_validation_core.util import EmptyBatchError, InvalidFormatError


def test_decode_records():
    rows = [
        {"name": "John", "email": "john@example.com"},
        {"name": " Jane ", "email": " jane@example.com ", "extra": "ignored"},
    ]
    assert decode_records(rows) == [
        Record(name="John", email="john@example.com"),
        Record(name="Jane", email="jane@example.com"),
    ]


def test_missing_field_rejects_whole_batch():
    rows = [
        {"name": "John", "email": "john@example.com"},
        {"name": "Jane", "email": ""},
        {"name": "", "email": "x@example.com"},
    ]
    with pytest.raises(InvalidFormatError) as exc_info:
        decode_records(rows)
    assert exc_info.value.faults == [
        {"row": 2, "error": "Missing required fields (name, email)"},
        {"row": 3, "error": "Missing required fields (name, email)"},
    ]
    assert "CSV parsing errors" in str(exc_info.value)


def test_missing_column_is_a_fault():
    with pytest.raises(InvalidFormatError):
        decode_records([{"name": "John"}])


def test_whitespace_only_field_is_missing():
    with pytest.raises(InvalidFormatError):
        decode_records([{"name": "John", "email": "   "}])


def test_empty_batch():
    with pytest.raises(EmptyBatchError, match="no valid records"):
        decode_records([])


def test_iter_records_is_lazy():
    def rows():
        yield {"name": "John", "email": "john@example.com"}
        raise AssertionError("consumed too far")

    it = iter_records(rows())
    assert next(it) == Record(name="John", email="john@example.com")


def test_iter_records_reports_faults_in_place():
    items = list(iter_records([{"name": "A", "email": ""}, {"name": "B", "email": "b@x.io"}]))
    assert items[0] == RowFault(row=1, error="Missing required fields (name, email)")
    assert isinstance(items[1], Record)


def test_load_batch_csv(tmp_path):
    p = tmp_path / "batch.csv"
    p.write_text("name,email\nJohn,john@example.com\nJane,jane@example.com\nInvalid,invalid-email")
    batch = load_batch(str(p))
    assert [r.email for r in batch] == ["john@example.com", "jane@example.com", "invalid-email"]


def test_load_batch_row_missing_email(tmp_path):
    p = tmp_path / "batch.csv"
    p.write_text("name,email\nJohn,john@example.com\nJane,")
    with pytest.raises(InvalidFormatError) as exc_info:
        load_batch(str(p))
    assert exc_info.value.faults == [{"row": 2, "error": "Missing required fields (name, email)"}]


def test_load_batch_header_only(tmp_path):
    p = tmp_path / "batch.csv"
    p.write_text("name,email\n")
    with pytest.raises(EmptyBatchError):
        load_batch(str(p))


def test_load_batch_unsupported_format(tmp_path):
    p = tmp_path / "batch.txt"
    p.write_text("name,email\nJohn,john@example.com")
    with pytest.raises(InvalidFormatError, match="Unsupported"):
        load_batch(str(p))
