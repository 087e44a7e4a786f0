"""Calculation sheet core package.

Framework-agnostic model of an Excel-like calculation sheet: labeled rows of
numeric cells under lettered columns, column sums and a grand total, and
import/export of the whole sheet as a nested JSON-shaped snapshot.

The Streamlit view in `ui/` and the `calc_sheet.py` runner are both thin
layers over `SheetStore`.
"""

from .columns import column_index, column_letter, column_letters, is_column_letter
from .config import SheetConfig, load_config
from .sheet_store import (
    Cell,
    ColumnHeader,
    ColumnSum,
    Row,
    SheetStore,
    Snapshot,
    parse_cell_value,
)
from .snapshot import SnapshotFormatError, read_snapshot, write_snapshot
from .validation import ValidationError, ValidationResult, validate_snapshot

__all__ = [
    "Cell",
    "ColumnHeader",
    "ColumnSum",
    "Row",
    "SheetConfig",
    "SheetStore",
    "Snapshot",
    "SnapshotFormatError",
    "ValidationError",
    "ValidationResult",
    "column_index",
    "column_letter",
    "column_letters",
    "is_column_letter",
    "load_config",
    "parse_cell_value",
    "read_snapshot",
    "validate_snapshot",
    "write_snapshot",
]
