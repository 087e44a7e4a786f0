"""Service layer for the sheet UI.

These services encapsulate file I/O and validation concerns so UI
components can remain thin and focused on presentation.
"""

from .snapshot_service import SnapshotService
from .validation_service import ValidationService

__all__ = [
    "SnapshotService",
    "ValidationService",
]
