from __future__ import annotations

"""Snapshot file I/O, JSON codecs and DataFrame views."""

import json
import math
from pathlib import Path

import pandas as pd
import pytest

from calcsheet.sheet_store import SheetStore
from calcsheet.snapshot import (
    GRAND_TOTAL_COLUMN,
    SnapshotFormatError,
    read_snapshot,
    snapshot_from_json,
    snapshot_to_frame,
    snapshot_to_json,
    totals_frame,
    write_snapshot,
)


SAMPLE = {
    "Revenue": {"A": 1000, "B": 2000, "C": 3000},
    "Costs": {"A": 500, "B": None, "C": 1200},
}


def test_json_text_uses_null_for_empty_cells():
    text = snapshot_to_json(SAMPLE)
    assert '"B": null' in text
    assert json.loads(text) == SAMPLE
    assert snapshot_from_json(text) == SAMPLE


def test_snapshot_from_json_rejects_bad_text():
    with pytest.raises(SnapshotFormatError):
        snapshot_from_json("{not json")
    with pytest.raises(SnapshotFormatError):
        snapshot_from_json("[1, 2]")
    assert snapshot_from_json("   ") == {}


def test_write_and_read_json_file(tmp_path: Path):
    path = write_snapshot(SAMPLE, tmp_path / "nested" / "budget.json")
    assert path.exists()
    loaded = read_snapshot(path)
    assert loaded == SAMPLE
    # Row order survives the file round-trip
    assert list(loaded) == ["Revenue", "Costs"]


def test_write_and_read_yaml_file(tmp_path: Path):
    path = write_snapshot(SAMPLE, tmp_path / "budget.yaml")
    assert "Revenue:" in path.read_text(encoding="utf-8")
    assert read_snapshot(path) == SAMPLE


def test_read_yaml_that_is_not_a_mapping(tmp_path: Path):
    path = tmp_path / "bad.yml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(SnapshotFormatError):
        read_snapshot(path)


def test_read_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_snapshot(tmp_path / "missing.json")


def test_snapshot_to_frame():
    frame = snapshot_to_frame(SAMPLE, column_count=3)
    assert list(frame.columns) == ["A", "B", "C"]
    assert list(frame.index) == ["Revenue", "Costs"]
    assert math.isnan(frame.at["Costs", "B"])
    assert frame.at["Revenue", "C"] == 3000.0


def test_snapshot_to_frame_ignores_non_numeric_values():
    frame = snapshot_to_frame({"r": {"A": "x", "B": True}, "s": None, "t": {"A": 10**400}}, column_count=2)
    assert frame.isna().all().all()
    assert frame.shape == (3, 2)


def test_totals_frame():
    store = SheetStore(column_count=2)
    store.import_data({"r1": {"A": 1, "B": 2}, "r2": {"A": 3, "B": None}})
    totals = totals_frame(store)
    assert list(totals.columns) == ["A", "B", GRAND_TOTAL_COLUMN]
    assert totals.loc["Total"].tolist() == [4.0, 2.0, 6.0]
    assert isinstance(totals, pd.DataFrame)
