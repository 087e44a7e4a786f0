from __future__ import annotations

from ui.state import SheetUIState
from calcsheet.config import SheetConfig
from calcsheet.editor_frame import apply_editor_changes, build_editor_frame


def test_ui_state_roundtrip_labels_and_values():
    """Verify that UI state can be serialized to a snapshot dict and then
    reloaded into a fresh `SheetUIState` without losing labels, row order or
    cell values. This guards against silent shape drift in editor↔file flows."""
    state = SheetUIState.from_config(SheetConfig(column_count=3))
    store = state.store
    store.set_label(0, "Revenue")
    store.set_cell(0, 0, "1000")
    store.add_row()
    store.set_label(1, "Costs")
    store.set_cell(1, 2, "1200")

    snapshot = state.to_snapshot_dict()

    loaded = SheetUIState.from_config(SheetConfig(column_count=3))
    assert loaded.load_from_snapshot_dict(snapshot, name="budget")
    assert loaded.snapshot_name == "budget"
    assert [row.label for row in loaded.store.rows] == ["Revenue", "Costs"]
    assert loaded.store.cell_value(0, 0) == 1000.0
    assert loaded.store.cell_value(1, 2) == 1200.0
    assert loaded.store.grand_total() == store.grand_total()


def test_ui_state_tracks_store_changes():
    state = SheetUIState.from_config(SheetConfig(column_count=2))
    assert state.change_count == 0
    assert not state.has_unsaved_changes
    state.store.set_cell(0, 1, "4")
    assert state.change_count == 1
    assert state.has_unsaved_changes
    assert state.last_change == {"Row 1": {"A": None, "B": 4.0}}
    state.mark_saved("budget")
    assert not state.has_unsaved_changes
    assert state.snapshot_name == "budget"


def test_ui_state_ignores_missing_snapshot():
    state = SheetUIState()
    state.store.set_label(0, "Keep")
    count = state.change_count
    assert state.load_from_snapshot_dict(None) is False
    assert state.change_count == count
    assert state.store.rows[0].label == "Keep"


def test_table_edits_keep_editor_version():
    """Consecutive table edits go through the same editor widget; only imports
    and explicit resets start a new one."""
    state = SheetUIState.from_config(SheetConfig(column_count=2))
    version = state.editor_version

    for text in ("1", "2", "3"):
        before = build_editor_frame(state.store)
        after = before.copy()
        after.iloc[0, 1] = text
        assert apply_editor_changes(state.store, before, after) == 1
        assert state.editor_version == version

    assert state.store.cell_value(0, 0) == 3.0
    assert state.change_count == 3

    state.reset_editor()
    assert state.editor_version == version + 1
    assert state.load_from_snapshot_dict({"r": {"A": 1}})
    assert state.editor_version == version + 2
