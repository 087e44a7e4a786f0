from __future__ import annotations

"""Centralized path utilities for the project.

These provide absolute `Path` objects to key directories, avoiding
hard-coded relative paths throughout the codebase.
"""

from pathlib import Path


# The `calcsheet` package sits one level below the project root
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Canonical locations used by the CLI and the UI services
SHEETS_DIR = PROJECT_ROOT / "sheets"
LOGS_DIR = PROJECT_ROOT / "logs"
CONFIG_PATH = PROJECT_ROOT / "calcsheet.yaml"
