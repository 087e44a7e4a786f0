from __future__ import annotations

"""
Text grid used by table editors.

A view that edits the sheet as one table (e.g. `st.data_editor`) works on a
string DataFrame built by `build_editor_frame`: one row per sheet row, indexed
by row id, with a `Label` column followed by one column per letter. After the
user edits the table, `apply_editor_changes` diffs it against the frame that
was shown and forwards each changed label or cell to the store, so all input
normalization stays inside `SheetStore`.
"""

import logging
import math
from typing import Any

import pandas as pd

from .columns import column_letters
from .sheet_store import CellValue, SheetStore

logger = logging.getLogger(__name__)


LABEL_COLUMN = "Label"


def format_cell(value: CellValue) -> str:
    """Display text for a cell value; empty cells are ""."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def build_editor_frame(store: SheetStore) -> pd.DataFrame:
    letters = column_letters(store.column_count)
    records = []
    for row in store.rows:
        record = {LABEL_COLUMN: row.label}
        for cell in row.cells:
            record[letters[cell.column_index]] = format_cell(cell.value)
        records.append(record)
    frame = pd.DataFrame(
        records,
        index=pd.Index([row.id for row in store.rows], name="id"),
        columns=[LABEL_COLUMN] + letters,
        dtype=object,
    )
    return frame


def apply_editor_changes(store: SheetStore, before: pd.DataFrame, after: pd.DataFrame) -> int:
    """Forward edits between two editor frames to `store`.

    Rows are matched by id; rows present in only one frame are skipped since
    adding and removing rows goes through the store directly. Returns the
    number of edits applied.
    """
    positions = {row.id: row.index for row in store.rows}
    letters = column_letters(store.column_count)
    applied = 0
    for row_id in before.index:
        if row_id not in after.index or row_id not in positions:
            continue
        row_index = positions[row_id]
        old = before.loc[row_id]
        new = after.loc[row_id]

        if LABEL_COLUMN in after.columns:
            old_label = _as_text(old.get(LABEL_COLUMN))
            new_label = _as_text(new.get(LABEL_COLUMN))
            if new_label != old_label and store.set_label(row_index, new_label):
                applied += 1

        for col, letter in enumerate(letters):
            if letter not in after.columns:
                continue
            old_text = _as_text(old.get(letter))
            new_text = _as_text(new.get(letter))
            if new_text != old_text and store.set_cell(row_index, col, new_text):
                applied += 1

    if applied:
        logger.debug("Applied %d edit(s) from editor frame", applied)
    return applied


__all__ = ["LABEL_COLUMN", "apply_editor_changes", "build_editor_frame", "format_cell"]
