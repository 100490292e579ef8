"""File loaders for CSV and TSV."""
from email_validation_core.ingest.loaders.base import BaseLoader
from email_validation_core.ingest.loaders.csv import CSVLoader
from email_validation_core.ingest.loaders.tsv import TSVLoader

__all__ = ["BaseLoader", "CSVLoader", "TSVLoader"]
