from __future__ import annotations

"""Validation helpers for UI input fields and pasted snapshots.

Keeps simple input checks local to the UI while delegating full snapshot
validation to `calcsheet.validation`.
"""

from typing import Any, Dict, List, Optional, Tuple

from calcsheet.config import coerce_column_count
from calcsheet.snapshot import SnapshotFormatError, snapshot_from_json
from calcsheet.validation import validate_snapshot


class ValidationService:
    """Lightweight validators for common UI inputs."""

    def validate_column_count(self, value: Any) -> Tuple[bool, str]:
        try:
            coerce_column_count(value)
            return True, ""
        except ValueError as exc:
            return False, str(exc)

    def validate_snapshot_name(self, name: Any) -> Tuple[bool, str]:
        text = str(name or "").strip()
        if not text:
            return False, "Snapshot name must not be empty"
        if any(ch in text for ch in "/\\") or text.startswith("."):
            return False, "Snapshot name must be a plain file name"
        return True, ""

    def parse_snapshot_text(self, text: str, column_count: int) -> Tuple[Optional[Dict], List[str], List[str]]:
        """Decode pasted JSON and validate it.

        Returns (data, errors, warnings); `data` is None when the text cannot
        be decoded or the snapshot has errors.
        """
        try:
            data = snapshot_from_json(text)
        except SnapshotFormatError as exc:
            return None, [str(exc)], []
        result = validate_snapshot(data, column_count)
        warnings = result.messages("warning")
        if not result.is_valid:
            return None, result.messages("error"), warnings
        return data, [], warnings
