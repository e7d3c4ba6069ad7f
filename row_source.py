import logging
import os
import zipfile

import numpy as np
import pandas as pd

from row_filter import is_missing
from table_columns import Column

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".csv", ".tsv", ".json", ".jsonl", ".parquet", ".xlsx"}


class RowSourceError(Exception):
    pass


def _plain(value):
    if isinstance(value, (list, tuple, dict, set, np.ndarray)):
        if isinstance(value, np.ndarray):
            return [_plain(v) for v in value.tolist()]
        return value
    if is_missing(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def frame_to_rows(df: pd.DataFrame) -> list[dict]:
    rows = []
    columns = [str(c) for c in df.columns]
    for values in df.itertuples(index=False, name=None):
        rows.append({col: _plain(v) for col, v in zip(columns, values)})
    return rows


def default_columns(rows, sortable: bool = True) -> list[Column]:
    seen: list[str] = []
    for row in rows:
        for key in row.keys():
            if key not in seen:
                seen.append(key)
    return [Column(id=key, label=key, sortable=sortable) for key in seen]


def default_search_fields(rows) -> list[str]:
    fields: list[str] = []
    for row in rows:
        for key, value in row.items():
            if key not in fields and isinstance(value, str):
                fields.append(key)
    return fields


class RowSource:
    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in SUPPORTED_EXTENSIONS:
            raise RowSourceError(
                "Unsupported file type (use .csv, .tsv, .json, .jsonl, .parquet or .xlsx)"
            )

    def load(self) -> list[dict]:
        if not os.path.exists(self.path):
            raise RowSourceError(f"No such file: {self.path}")
        if os.path.getsize(self.path) == 0:
            return []

        try:
            df = self._read_frame()
        except pd.errors.EmptyDataError:
            return []
        except (ValueError, OSError, zipfile.BadZipFile) as exc:
            logger.error("Failed to read %s: %s", self.path, exc)
            raise RowSourceError(f"Cannot read {self.path}: {exc}") from exc

        rows = frame_to_rows(df)
        logger.info("Loaded %d rows from %s", len(rows), self.path)
        return rows

    def _read_frame(self) -> pd.DataFrame:
        if self.ext == ".csv":
            return pd.read_csv(self.path)
        if self.ext == ".tsv":
            return pd.read_csv(self.path, sep="\t")
        if self.ext == ".jsonl":
            return pd.read_json(self.path, lines=True)
        if self.ext == ".json":
            return self._read_json()
        if self.ext == ".parquet":
            self._ensure_engine("pyarrow", "Parquet")
            return pd.read_parquet(self.path)
        self._ensure_engine("openpyxl", "XLSX")
        return pd.read_excel(self.path, sheet_name=0)

    def _read_json(self) -> pd.DataFrame:
        try:
            return pd.read_json(self.path, orient="records")
        except ValueError:
            return pd.read_json(self.path, lines=True)

    def _ensure_engine(self, module: str, label: str):
        try:
            __import__(module)
        except ImportError as exc:
            raise RowSourceError(
                f"{label} support requires {module}. Install via: pip install {module}"
            ) from exc
