from __future__ import annotations

"""
Snapshot I/O and tabular views.

A snapshot is the interchange shape of a sheet:

    {
      "Revenue": {"A": 1000, "B": 2000, "C": 3000},
      "Costs":   {"A": 500,  "B": null, "C": 1200}
    }

This module reads and writes snapshots as JSON or YAML files and converts
them to and from pandas DataFrames for display and reporting. It does not
validate content; see `calcsheet.validation` for that.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import pandas as pd
import yaml

from .columns import column_letters
from .io_paths import SHEETS_DIR

logger = logging.getLogger(__name__)


TOTAL_ROW = "Total"
GRAND_TOTAL_COLUMN = "Grand total"
YAML_SUFFIXES = (".yaml", ".yml")


class SnapshotFormatError(ValueError):
    """Raised when snapshot text or a snapshot file cannot be decoded."""


def _resolve(path: Path) -> Path:
    path = Path(path)
    if not path.is_absolute():
        path = SHEETS_DIR / path
    return path


def snapshot_to_json(data: Mapping[str, Any], indent: Optional[int] = 2) -> str:
    """Encode a snapshot as JSON text (empty cells become `null`)."""
    return json.dumps(dict(data), indent=indent, ensure_ascii=False, allow_nan=False)


def snapshot_from_json(text: str) -> Dict[str, Any]:
    """Decode JSON text into a snapshot dict.

    Blank text decodes to an empty snapshot. Raises SnapshotFormatError for
    malformed JSON or a top-level value that is not an object.
    """
    if not str(text or "").strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SnapshotFormatError(f"Invalid snapshot JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"Snapshot JSON must be an object, got {type(data).__name__}")
    return data


def read_snapshot(path: Path) -> Dict[str, Any]:
    """Read a snapshot from a `.json` or `.yaml`/`.yml` file.

    Relative paths resolve under `sheets/`.
    """
    path = _resolve(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise SnapshotFormatError(f"Invalid snapshot YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SnapshotFormatError(f"Snapshot YAML must be a mapping, got {type(data).__name__}")
    else:
        data = snapshot_from_json(text)
    logger.debug("Read snapshot with %d row(s) from %s", len(data), path)
    return data


def write_snapshot(data: Mapping[str, Any], path: Path) -> Path:
    """Write `data` to `path` (format chosen by suffix) and return the path written.

    - Ensures parent directory exists
    - Does not modify input dict
    """
    path = _resolve(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in YAML_SUFFIXES:
        text = yaml.safe_dump(dict(data), sort_keys=False, allow_unicode=True)
    else:
        text = snapshot_to_json(data) + "\n"
    path.write_text(text, encoding="utf-8")
    logger.info("Wrote snapshot with %d row(s) to %s", len(data), path)
    return path


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return math.nan
    try:
        return float(value)
    except OverflowError:
        return math.nan


def snapshot_to_frame(data: Mapping[str, Any], column_count: int) -> pd.DataFrame:
    """DataFrame indexed by row key with one float column per letter.

    Empty cells and values that are not numbers become NaN.
    """
    letters = column_letters(column_count)
    records = []
    for key, row in data.items():
        row = row if isinstance(row, Mapping) else {}
        record = {}
        for letter in letters:
            record[letter] = _as_float(row.get(letter))
        records.append(record)
    frame = pd.DataFrame(records, index=[str(k) for k in data.keys()], columns=letters, dtype=float)
    frame.index.name = "Label"
    return frame


def totals_frame(store) -> pd.DataFrame:
    """One-row DataFrame with the column sums of `store` and its grand total."""
    sums = store.column_sums()
    record = {col.letter: col.sum for col in sums}
    record[GRAND_TOTAL_COLUMN] = store.grand_total()
    columns = [col.letter for col in sums] + [GRAND_TOTAL_COLUMN]
    return pd.DataFrame([record], index=[TOTAL_ROW], columns=columns, dtype=float)


__all__ = [
    "SnapshotFormatError",
    "GRAND_TOTAL_COLUMN",
    "TOTAL_ROW",
    "read_snapshot",
    "snapshot_from_json",
    "snapshot_to_frame",
    "snapshot_to_json",
    "totals_frame",
    "write_snapshot",
]
