from __future__ import annotations

"""Table-editor diffing forwards only what the user changed."""

from calcsheet.editor_frame import LABEL_COLUMN, apply_editor_changes, build_editor_frame, format_cell
from calcsheet.sheet_store import SheetStore


def test_build_editor_frame_shape():
    store = SheetStore(column_count=2)
    store.add_row()
    store.set_label(0, "Revenue")
    store.set_cell(0, 0, "1000")
    store.set_cell(1, 1, "2.5")
    frame = build_editor_frame(store)
    assert list(frame.columns) == [LABEL_COLUMN, "A", "B"]
    assert list(frame.index) == [row.id for row in store.rows]
    assert frame.iloc[0].tolist() == ["Revenue", "1000", ""]
    assert frame.iloc[1].tolist() == ["", "", "2.5"]


def test_format_cell():
    assert format_cell(None) == ""
    assert format_cell(3.0) == "3"
    assert format_cell(-0.5) == "-0.5"
    assert format_cell(7) == "7"


def test_apply_editor_changes_forwards_edits():
    store = SheetStore(column_count=2)
    store.add_row()
    seen = []
    store.add_listener(seen.append)
    before = build_editor_frame(store)
    after = before.copy()
    after.iloc[0, 0] = "Costs"
    after.iloc[1, 2] = "abc"
    after.iloc[0, 1] = "12"

    applied = apply_editor_changes(store, before, after)
    assert applied == 3
    assert len(seen) == 3
    assert store.rows[0].label == "Costs"
    assert store.cell_value(0, 0) == 12.0
    # Invalid text is normalized by the store
    assert store.cell_value(1, 1) is None


def test_apply_editor_changes_without_edits():
    store = SheetStore(column_count=3)
    before = build_editor_frame(store)
    assert apply_editor_changes(store, before, before.copy()) == 0


def test_apply_editor_changes_treats_cleared_cells_as_empty():
    store = SheetStore(column_count=1)
    store.set_cell(0, 0, "5")
    before = build_editor_frame(store)
    after = before.copy()
    after.iloc[0, 1] = None
    assert apply_editor_changes(store, before, after) == 1
    assert store.cell_value(0, 0) is None


def test_apply_editor_changes_skips_unknown_rows():
    store = SheetStore(column_count=1)
    before = build_editor_frame(store)
    after = before.copy()
    after.iloc[0, 0] = "Renamed"
    other = SheetStore(column_count=1)
    other.import_data({"x": {"A": 1}, "y": {"A": 2}})
    # Row ids restart after import; only the id present in both frames is applied
    assert apply_editor_changes(other, before, after) == 1
    assert other.rows[0].label == "Renamed"
    assert other.rows[1].label == "y"
