from __future__ import annotations

"""Snapshot service: load, save, list and validate named sheet snapshots.

Named snapshots live as JSON files under `calcsheet.io_paths.SHEETS_DIR`
(YAML files with the same basename are read too). All file I/O is localized
here to keep UI components free of filesystem concerns.
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple

from calcsheet.snapshot import YAML_SUFFIXES, SnapshotFormatError, read_snapshot, write_snapshot
from calcsheet.io_paths import SHEETS_DIR
from calcsheet.validation import validate_snapshot


class SnapshotService:
    """High-level snapshot file operations."""

    def __init__(self, sheets_dir: Path | None = None) -> None:
        self.sheets_dir = Path(sheets_dir or SHEETS_DIR)
        self.sheets_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        """Existing file for `name` (JSON first, then YAML); defaults to the JSON path."""
        json_path = self.sheets_dir / f"{name}.json"
        if json_path.exists():
            return json_path
        for suffix in YAML_SUFFIXES:
            candidate = self.sheets_dir / f"{name}{suffix}"
            if candidate.exists():
                return candidate
        return json_path

    def load_snapshot(self, name: str) -> Dict[str, Any]:
        """Load a snapshot by name without extension."""
        path = self.path_for(name)
        if not path.exists():
            raise FileNotFoundError(f"No snapshot named '{name}' in {self.sheets_dir}")
        return read_snapshot(path)

    def save_snapshot(self, data: Dict[str, Any], name: str) -> Path:
        """Save a snapshot dict as JSON and return the saved path."""
        return write_snapshot(data, self.sheets_dir / f"{name}.json")

    def list_snapshots(self) -> List[str]:
        """List snapshot basenames (without extension)."""
        names = set()
        for pattern in ("*.json", "*.yaml", "*.yml"):
            names.update(p.stem for p in self.sheets_dir.glob(pattern))
        return sorted(names)

    def validate_snapshot(self, data: Any, column_count: int) -> Tuple[bool, List[str], List[str]]:
        """Validate a snapshot dict, return (ok, errors, warnings)."""
        result = validate_snapshot(data, column_count)
        return result.is_valid, result.messages("error"), result.messages("warning")

    def try_load(self, name: str) -> Tuple[Dict[str, Any] | None, str]:
        """Load a snapshot, returning (data, "") or (None, error message)."""
        try:
            return self.load_snapshot(name), ""
        except (FileNotFoundError, SnapshotFormatError) as exc:
            return None, str(exc)
