"""Tabular decoding of uploaded spreadsheets.

``read_rows`` yields one mapping per data row, keyed by the header row, in
file order. CSV cells are kept as text; Excel cells keep their numeric
types and the first sheet is used.
"""
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Any, Iterator

import numpy as np
import pandas as pd

from fileflow.errors import ValidationError

CSV_EXTENSIONS = {".csv"}
EXCEL_EXTENSIONS = {".xlsx", ".xls"}
ALLOWED_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS

ALLOWED_CONTENT_TYPES = {
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/csv",
    "application/csv",
}


def extension_of(name: str) -> str:
    return Path(name or "").suffix.lower()


def is_supported(original_name: str, content_type: str | None = None) -> bool:
    return extension_of(original_name) in ALLOWED_EXTENSIONS or content_type in ALLOWED_CONTENT_TYPES


def _cell(value: Any) -> Any:
    # NaN and NaT both count as blank
    if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, (pd.Timestamp, datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(pd.Timedelta(value))
    return value


def _read_frame(path: str, original_name: str) -> pd.DataFrame:
    ext = extension_of(original_name)
    try:
        if ext in CSV_EXTENSIONS:
            return pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
        if ext in EXCEL_EXTENSIONS:
            return pd.read_excel(path, sheet_name=0)
    except pd.errors.EmptyDataError:
        raise ValidationError(f"'{original_name}' contains no data")
    except Exception as e:
        raise ValidationError(f"Unable to process '{original_name}': {e}")
    raise ValidationError("Only Excel (.xlsx, .xls) and CSV files are allowed")


def read_rows(path: str, original_name: str) -> Iterator[dict[str, Any]]:
    frame = _read_frame(path, original_name)
    frame.columns = [str(c).strip() for c in frame.columns]
    frame = frame.dropna(how="all")
    for record in frame.to_dict(orient="records"):
        yield {column: _cell(value) for column, value in record.items()}


def column_names(rows: list[dict[str, Any]]) -> list[str]:
    """Columns across all rows, in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        for key in row:
            seen.setdefault(key, None)
    return list(seen)
