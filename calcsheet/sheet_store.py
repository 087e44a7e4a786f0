from __future__ import annotations

"""
Calculation sheet store.

Framework-agnostic state for an Excel-like calculation sheet: an ordered list
of labeled rows, each holding one numeric-or-empty cell per lettered column,
with derived per-column sums and a grand total. The store is the single owner
of this state; a view renders `rows`/`column_headers`/`column_sums()` and
forwards user edits to the mutation methods.

Mutations never raise in normal operation. Bad numeric text is stored as an
empty cell, and out-of-range indices or an attempt to remove the last row are
no-ops reported through a `False` return value. After every successful
mutation the registered listeners receive the full exported snapshot.

Rows and cells are frozen dataclasses; an edit replaces the affected row at
its position so readers holding a previous `rows` tuple never see it change.
"""

from dataclasses import dataclass, replace
import logging
import math
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .columns import column_letter, column_letters
from .config import SheetConfig, coerce_column_count

logger = logging.getLogger(__name__)


CellValue = Optional[float]
Snapshot = Dict[str, Dict[str, CellValue]]
ChangeListener = Callable[[Snapshot], None]


def parse_cell_value(raw: Any) -> CellValue:
    """Normalize user input into a cell value.

    Returns a finite number, or None ("empty") for empty text, text that does
    not parse as a float, NaN/infinity, ints too large for a float, booleans
    and any other type.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            as_float = float(raw)
        except OverflowError:
            return None
        return raw if math.isfinite(as_float) else None
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class Cell:
    """A single numeric-or-empty value at a fixed column of its row."""

    id: str
    column_index: int
    value: CellValue = None

    @property
    def is_empty(self) -> bool:
        return self.value is None

    @property
    def letter(self) -> str:
        return column_letter(self.column_index)


@dataclass(frozen=True)
class Row:
    """A labeled row. `index` always equals the row's position in the sheet."""

    id: str
    index: int
    label: str
    cells: Tuple[Cell, ...]

    def values(self) -> List[CellValue]:
        return [cell.value for cell in self.cells]


@dataclass(frozen=True)
class ColumnHeader:
    key: str
    label: str


@dataclass(frozen=True)
class ColumnSum:
    column_index: int
    sum: float

    @property
    def key(self) -> str:
        return f"sum-{self.column_index}"

    @property
    def letter(self) -> str:
        return column_letter(self.column_index)


def _cell_id(row_id: str, column_index: int) -> str:
    return f"{row_id}/cell-{column_index}"


class SheetStore:
    """
    In-memory calculation sheet with reactive change notification.

    The sheet always holds at least one row. Row identities (`Row.id`) are
    assigned from a monotonic counter and stay stable across edits and across
    insertion/removal of other rows; `import_data` resets the counter.
    """

    def __init__(self, column_count: Optional[int] = None, config: Optional[SheetConfig] = None):
        """Create a sheet seeded with one empty row.

        Args:
            column_count: Number of numeric columns; overrides `config.column_count`
            config: Sheet settings (defaults to `SheetConfig()`)
        """
        self._config = (config or SheetConfig()).with_overrides(column_count=column_count)
        self._rows: List[Row] = []
        self._next_row_id = 0
        self._listeners: List[ChangeListener] = []
        self._append_row()

    def __repr__(self) -> str:
        return f"SheetStore(rows={len(self._rows)}, column_count={self.column_count})"

    def __len__(self) -> int:
        return len(self._rows)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def config(self) -> SheetConfig:
        return self._config

    @property
    def column_count(self) -> int:
        return self._config.column_count

    @property
    def next_row_id(self) -> int:
        return self._next_row_id

    @property
    def rows(self) -> Tuple[Row, ...]:
        """Current rows in display order."""
        return tuple(self._rows)

    @property
    def column_headers(self) -> List[ColumnHeader]:
        """Headers for the numeric columns: A, B, C, ..."""
        return [
            ColumnHeader(key=f"col-{i}", label=letter)
            for i, letter in enumerate(column_letters(self.column_count))
        ]

    def get_row(self, row_index: int) -> Optional[Row]:
        if not self._has_row(row_index):
            return None
        return self._rows[row_index]

    def cell_value(self, row_index: int, column_index: int) -> CellValue:
        """Value at (row, column); None for empty cells and unknown positions."""
        row = self.get_row(row_index)
        if row is None or not self._has_column(column_index):
            return None
        return row.cells[column_index].value

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, column_count: int) -> None:
        """Set the number of numeric columns.

        Existing rows keep their identity and are padded with empty cells or
        truncated so every row holds exactly `column_count` cells.
        Raises ValueError for a non-positive or non-integral count.
        """
        count = coerce_column_count(column_count)
        if count == self.column_count:
            return
        previous = self.column_count
        self._config = self._config.with_overrides(column_count=count)
        for pos, row in enumerate(self._rows):
            self._rows[pos] = replace(row, cells=self._reshape_cells(row, count))
        logger.debug("Column count changed from %d to %d", previous, count)

    def _reshape_cells(self, row: Row, count: int) -> Tuple[Cell, ...]:
        kept = row.cells[:count]
        added = tuple(Cell(id=_cell_id(row.id, k), column_index=k) for k in range(len(kept), count))
        return kept + added

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_row(self) -> Row:
        """Append an empty row and notify listeners."""
        row = self._append_row()
        logger.debug("Added row %s at index %d", row.id, row.index)
        self._emit_change()
        return row

    def remove_row(self, row_index: int) -> bool:
        """Remove the row at `row_index`; the last remaining row is kept."""
        if not self._has_row(row_index):
            logger.debug("remove_row ignored: no row at index %r", row_index)
            return False
        if len(self._rows) <= 1:
            logger.debug("remove_row ignored: sheet must keep at least one row")
            return False
        removed = self._rows.pop(row_index)
        for pos in range(row_index, len(self._rows)):
            self._rows[pos] = replace(self._rows[pos], index=pos)
        logger.debug("Removed row %s from index %d", removed.id, row_index)
        self._emit_change()
        return True

    def set_label(self, row_index: int, text: Optional[str]) -> bool:
        """Replace the label of the row at `row_index`."""
        if not self._has_row(row_index):
            logger.debug("set_label ignored: no row at index %r", row_index)
            return False
        label = "" if text is None else str(text)
        self._rows[row_index] = replace(self._rows[row_index], label=label)
        self._emit_change()
        return True

    def set_cell(self, row_index: int, column_index: int, raw_text: Any) -> bool:
        """Parse `raw_text` and store it at (row, column).

        Text that is empty or not a finite number is stored as an empty cell.
        """
        if not self._has_row(row_index) or not self._has_column(column_index):
            logger.debug("set_cell ignored: no cell at (%r, %r)", row_index, column_index)
            return False
        value = parse_cell_value(raw_text)
        row = self._rows[row_index]
        cells = list(row.cells)
        cells[column_index] = replace(cells[column_index], value=value)
        self._rows[row_index] = replace(row, cells=tuple(cells))
        self._emit_change()
        return True

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def column_sums(self) -> List[ColumnSum]:
        """Sum of every column across all rows; empty cells count as 0."""
        sums = []
        for col in range(self.column_count):
            total = 0.0
            for row in self._rows:
                value = row.cells[col].value
                if value is not None:
                    total += value
            sums.append(ColumnSum(column_index=col, sum=total))
        return sums

    def grand_total(self) -> float:
        return sum((col.sum for col in self.column_sums()), 0.0)

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    @property
    def data(self) -> Snapshot:
        return self.export()

    @data.setter
    def data(self, value: Optional[Mapping[str, Any]]) -> None:
        self.import_data(value)

    def row_key(self, row: Row) -> str:
        """Export key for `row` before duplicate resolution."""
        return row.label or self._config.placeholder.format(n=row.index + 1)

    def export(self) -> Snapshot:
        """Return the sheet as {row key: {column letter: value or None}}."""
        letters = column_letters(self.column_count)
        result: Snapshot = {}
        for row in self._rows:
            key = self._unique_key(self.row_key(row), result)
            result[key] = {letters[cell.column_index]: cell.value for cell in row.cells}
        return result

    def _unique_key(self, key: str, taken: Mapping[str, Any]) -> str:
        if key not in taken:
            return key
        if self._config.duplicate_keys == "overwrite":
            logger.warning("Export key %r is used by more than one row; keeping the last one", key)
            return key
        n = 2
        while f"{key} ({n})" in taken:
            n += 1
        return f"{key} ({n})"

    def import_data(self, snapshot: Optional[Mapping[str, Any]]) -> bool:
        """Replace all rows with the content of `snapshot`.

        Each key becomes a row label, in iteration order, and the value under
        each column letter becomes that cell (missing or non-numeric -> empty).
        `None` and non-mapping snapshots are ignored; an empty mapping leaves a
        single empty row. Returns True when the rows were replaced.
        """
        if snapshot is None:
            return False
        if not isinstance(snapshot, Mapping):
            logger.warning("Ignoring sheet import: expected a mapping, got %s", type(snapshot).__name__)
            return False

        # The old rows stay in place until every imported row is built
        letters = column_letters(self.column_count)
        rows: List[Row] = []
        for label, row_data in snapshot.items():
            if not isinstance(row_data, Mapping):
                logger.debug("Row %r has no column mapping; importing it empty", label)
                row_data = {}
            values = [parse_cell_value(row_data.get(letter)) for letter in letters]
            rows.append(self._build_row(len(rows), len(rows), "" if label is None else str(label), values))
        if not rows:
            rows.append(self._build_row(0, 0))

        self._rows = rows
        self._next_row_id = len(rows)
        logger.info("Imported %d row(s) x %d column(s)", len(self._rows), self.column_count)
        return True

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, callback: ChangeListener) -> None:
        """Register `callback(snapshot)` to run after every successful mutation."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: ChangeListener) -> None:
        try:
            self._listeners.remove(callback)
        except ValueError:
            pass

    def _emit_change(self) -> None:
        if not self._listeners:
            return
        snapshot = self.export()
        for callback in list(self._listeners):
            try:
                callback(snapshot)
            except Exception as e:
                logger.exception(f"Error in sheet change listener: {e}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _append_row(self, label: str = "", values: Optional[Sequence[CellValue]] = None) -> Row:
        row = self._build_row(self._next_row_id, len(self._rows), label, values)
        self._next_row_id += 1
        self._rows.append(row)
        return row

    def _build_row(
        self, serial: int, index: int, label: str = "", values: Optional[Sequence[CellValue]] = None
    ) -> Row:
        row_id = f"row-{serial}"
        values = list(values or [])
        cells = tuple(
            Cell(
                id=_cell_id(row_id, col),
                column_index=col,
                value=values[col] if col < len(values) else None,
            )
            for col in range(self.column_count)
        )
        return Row(id=row_id, index=index, label=label, cells=cells)

    def _has_row(self, row_index: Any) -> bool:
        return (
            isinstance(row_index, int)
            and not isinstance(row_index, bool)
            and 0 <= row_index < len(self._rows)
        )

    def _has_column(self, column_index: Any) -> bool:
        return (
            isinstance(column_index, int)
            and not isinstance(column_index, bool)
            and 0 <= column_index < self.column_count
        )


__all__ = [
    "Cell",
    "CellValue",
    "ChangeListener",
    "ColumnHeader",
    "ColumnSum",
    "Row",
    "SheetStore",
    "Snapshot",
    "parse_cell_value",
]
