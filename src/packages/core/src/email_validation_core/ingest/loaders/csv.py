"""CSV file loader."""
import csv
from typing import Any

import pandas as pd

from email_validation_core.ingest.loaders.base import BaseLoader
from email_validation_core.ingest.normalize import normalize_header, normalize_record
from email_validation_core.util.errors import InvalidFormatError


class CSVLoader(BaseLoader):
    """Loader for CSV files."""

    name = "csv"
    suffix = ".csv"
    sep = ","

    def detect(self, head: bytes, suffix: str) -> bool:
        if suffix != self.suffix:
            return False
        try:
            text = head.decode("utf-8", errors="replace")
            list(csv.reader([text.split("\n")[0]], delimiter=self.sep))
            return True
        except csv.Error:
            return False

    def load(self, file_path: str, options: dict) -> list[dict[str, Any]]:
        try:
            df = pd.read_csv(
                file_path,
                sep=options.get("sep", self.sep),
                dtype=str,
                keep_default_na=False,
                encoding="utf-8-sig",
                header=None,
            )
        except pd.errors.EmptyDataError:
            return []
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise InvalidFormatError(f"{self.name.upper()} parse error: {e}") from e
        # header=None keeps duplicate headers unmangled so they can be rejected
        headers = [normalize_header(c) for c in df.iloc[0]]
        duplicates = sorted({h for h in headers if h and headers.count(h) > 1})
        if duplicates:
            raise InvalidFormatError(
                f"{self.name.upper()} parse error: duplicate column(s) {', '.join(duplicates)}"
            )
        df = df.iloc[1:]
        df.columns = headers
        df = df.fillna("")
        records = df.to_dict("records")
        return [normalize_record(r) for r in records]
