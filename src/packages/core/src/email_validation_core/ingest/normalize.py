"""Row normalization utilities."""
from typing import Any

import pandas as pd


def normalize_header(name: Any) -> str:
    """Trim and lowercase a column header."""
    return str(name).strip().lower()


def normalize_value(v: Any) -> str:
    """Normalize a cell to a trimmed string; missing cells become empty."""
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return ""
    return str(v).strip()


def normalize_record(row: dict) -> dict[str, str]:
    """Normalize a raw row dict to trimmed string values."""
    return {normalize_header(k): normalize_value(v) for k, v in row.items()}
