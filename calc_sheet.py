#!/usr/bin/env python3
from __future__ import annotations

"""
Command-line runner for calculation sheets.

Responsibilities:
- Configure logging to both console and `logs/run.log`
- Load sheet settings from `calcsheet.yaml` (or `--config`) and apply flags
- Load a JSON/YAML snapshot and optionally validate it strictly
- Import it into a `SheetStore` and print the sheet, column sums and grand total
- Optionally write the normalized snapshot back out (`--output`)
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from calcsheet.config import load_config
from calcsheet.io_paths import CONFIG_PATH, LOGS_DIR, SHEETS_DIR
from calcsheet.sheet_store import SheetStore
from calcsheet.snapshot import (
    SnapshotFormatError,
    read_snapshot,
    snapshot_to_frame,
    totals_frame,
    write_snapshot,
)
from calcsheet.utils_logging import configure_logging
from calcsheet.validation import validate_snapshot


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Exactly one of `--snapshot` or `--name` may be provided; `--name`
    resolves to a file under `sheets/`.
    """
    p = argparse.ArgumentParser(description="Calculation Sheet – load a snapshot and report its totals")
    group = p.add_mutually_exclusive_group(required=True)
    group.add_argument("--snapshot", type=str, help="Path to a snapshot JSON/YAML file")
    group.add_argument("--name", type=str, help="Snapshot name under the 'sheets/' directory")
    p.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    p.add_argument("--columns", type=int, default=None, help="Number of numeric columns (overrides config)")
    p.add_argument(
        "--duplicate-keys",
        choices=["suffix", "overwrite"],
        default=None,
        help="How rows sharing a label are exported (overrides config)",
    )
    p.add_argument("--strict", action="store_true", help="Fail when the snapshot has validation errors")
    p.add_argument("--output", type=str, default=None, help="Write the normalized snapshot to this path")
    p.add_argument("--debug", action="store_true")
    return p.parse_args(argv)


def _resolve_snapshot_path(snapshot: str | None, name: str | None) -> Path:
    """Resolve the snapshot file from an explicit path or a name under `sheets/`.

    For a name, `<name>.json` is tried before `<name>.yaml` and `<name>.yml`.
    """
    if snapshot:
        return Path(snapshot).resolve()
    for suffix in (".json", ".yaml", ".yml"):
        candidate = SHEETS_DIR / f"{name}{suffix}"
        if candidate.exists():
            return candidate
    return SHEETS_DIR / f"{name}.json"


def render_report(store: SheetStore) -> str:
    """Plain-text table of the sheet followed by its totals."""
    frame = snapshot_to_frame(store.export(), store.column_count)
    totals = totals_frame(store)
    combined = pd.concat([frame, totals.drop(columns=totals.columns[-1])])
    lines = [
        combined.to_string(na_rep="", float_format=lambda v: f"{v:,.2f}"),
        "",
        f"Grand total: {store.grand_total():,.2f}",
    ]
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(LOGS_DIR, debug=args.debug)
    log = logging.getLogger("calc_sheet")

    try:
        config = load_config(Path(args.config) if args.config else CONFIG_PATH)
        config = config.with_overrides(column_count=args.columns, duplicate_keys=args.duplicate_keys)
    except ValueError as e:
        log.error("Invalid configuration: %s", e)
        return 2

    snapshot_path = _resolve_snapshot_path(args.snapshot, args.name)
    try:
        data = read_snapshot(snapshot_path)
    except FileNotFoundError:
        log.error("Snapshot file not found: %s", snapshot_path)
        return 1
    except SnapshotFormatError as e:
        log.error("%s", e)
        return 1
    log.info("Loaded snapshot with %d row(s) from %s", len(data), snapshot_path)

    result = validate_snapshot(data, config.column_count)
    for error in result.errors:
        level = {"error": logging.ERROR, "warning": logging.WARNING}.get(error.severity, logging.INFO)
        log.log(level, "%s", error)
    if args.strict and not result.is_valid:
        log.error("Snapshot failed validation with %d error(s)", len(result.get_errors_by_severity("error")))
        return 1

    store = SheetStore(config=config)
    store.import_data(data)
    print(render_report(store))

    if args.output:
        written = write_snapshot(store.export(), Path(args.output).resolve())
        log.info("Wrote normalized snapshot to %s", written)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
