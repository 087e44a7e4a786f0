from __future__ import annotations

"""End-to-end checks for the `calc_sheet.py` runner."""

import json
from pathlib import Path

import pytest

import calc_sheet


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    # Keep the runner from reconfiguring root logging and writing logs/run.log
    monkeypatch.setattr(calc_sheet, "configure_logging", lambda *a, **k: None)


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_runner_prints_report(tmp_path: Path, capsys):
    snap = _write(tmp_path / "budget.json", {
        "Revenue": {"A": 1000, "B": 2000, "C": 3000},
        "Costs": {"A": 500, "B": None, "C": 1200},
    })
    rc = calc_sheet.main(["--snapshot", str(snap), "--columns", "3", "--config", str(tmp_path / "none.yaml")])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Revenue" in out and "Costs" in out and "Total" in out
    assert "Grand total: 7,700.00" in out


def test_runner_writes_normalized_output(tmp_path: Path):
    snap = _write(tmp_path / "in.json", {"r": {"A": "12", "B": "oops"}, "": {"A": 1}})
    out_path = tmp_path / "out" / "normalized.json"
    rc = calc_sheet.main([
        "--snapshot", str(snap), "--columns", "2",
        "--config", str(tmp_path / "none.yaml"), "--output", str(out_path),
    ])
    assert rc == 0
    written = json.loads(out_path.read_text(encoding="utf-8"))
    assert written == {"r": {"A": 12.0, "B": None}, "Row 2": {"A": 1, "B": None}}


def test_runner_strict_mode_fails_on_errors(tmp_path: Path):
    snap = _write(tmp_path / "bad.json", {"r": {"a": 1}})
    args = ["--snapshot", str(snap), "--config", str(tmp_path / "none.yaml")]
    assert calc_sheet.main(args) == 0
    assert calc_sheet.main(args + ["--strict"]) == 1


def test_runner_missing_or_malformed_snapshot(tmp_path: Path):
    assert calc_sheet.main(["--snapshot", str(tmp_path / "missing.json")]) == 1
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    assert calc_sheet.main(["--snapshot", str(broken)]) == 1


def test_runner_rejects_bad_column_count(tmp_path: Path):
    snap = _write(tmp_path / "s.json", {})
    assert calc_sheet.main(["--snapshot", str(snap), "--columns", "0"]) == 2


def test_runner_requires_a_source():
    with pytest.raises(SystemExit):
        calc_sheet.main([])
