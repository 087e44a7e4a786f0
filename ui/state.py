from __future__ import annotations

"""
UI state for the Streamlit sheet editor.

Holds the single `SheetStore` edited in a browser session together with the
bookkeeping the view needs: the last change payload pushed by the store, a
change counter, an editor version that keys the table widget, and the
snapshot name used for save/load. The helpers translate between this state
and snapshot dicts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from calcsheet.config import SheetConfig
from calcsheet.sheet_store import SheetStore, Snapshot


@dataclass
class SheetUIState:
    """Aggregate UI state for the sheet editor.

    - store: the sheet being edited
    - snapshot_name: basename used when saving/loading under `sheets/`
    - last_change: latest snapshot received from the store's change listener
    - change_count: number of change notifications received
    - editor_version: bumped when the sheet is replaced or reshaped outside the
      table editor (import, configure, add/remove row); keys the editor widget
    - has_unsaved_changes: set on every change, cleared after save/load
    """

    store: SheetStore = field(default_factory=SheetStore)
    snapshot_name: str = "working_sheet"
    last_change: Optional[Snapshot] = None
    change_count: int = 0
    editor_version: int = 0
    has_unsaved_changes: bool = False

    def __post_init__(self) -> None:
        self.store.add_listener(self.on_sheet_change)

    @classmethod
    def from_config(cls, config: SheetConfig, **kwargs: Any) -> "SheetUIState":
        return cls(store=SheetStore(config=config), **kwargs)

    def on_sheet_change(self, snapshot: Snapshot) -> None:
        self.last_change = snapshot
        self.change_count += 1
        self.has_unsaved_changes = True

    def to_snapshot_dict(self) -> Dict[str, Dict[str, Optional[float]]]:
        """Current sheet content in the snapshot wire shape."""
        return self.store.export()

    def load_from_snapshot_dict(self, data: Optional[Mapping[str, Any]], name: Optional[str] = None) -> bool:
        """Replace the sheet content; returns False when `data` was ignored."""
        loaded = self.store.import_data(data)
        if loaded:
            if name:
                self.snapshot_name = name
            # Import does not notify listeners
            self.change_count += 1
            self.reset_editor()
            self.last_change = self.store.export()
            self.has_unsaved_changes = False
        return loaded

    def reset_editor(self) -> None:
        """Discard table editor state so the next render starts from the store."""
        self.editor_version += 1

    def mark_saved(self, name: Optional[str] = None) -> None:
        if name:
            self.snapshot_name = name
        self.has_unsaved_changes = False
