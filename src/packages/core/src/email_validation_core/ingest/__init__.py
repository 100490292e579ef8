"""Ingest module for tabular file parsing and record decoding."""
from email_validation_core.ingest.formats import detect_format, load_records, get_loader
from email_validation_core.ingest.records import RowFault, iter_records, decode_records, load_batch

__all__ = [
    "detect_format",
    "load_records",
    "get_loader",
    "RowFault",
    "iter_records",
    "decode_records",
    "load_batch",
]
