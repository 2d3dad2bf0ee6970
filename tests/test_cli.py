from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from property_dedupe.cli import main, read_records
from property_dedupe.exceptions import InputFormatError

DASHBOARD_ROWS = [
    {"property_id": "a", "property_name": "Elm Street 12 Metroville", "last_balance": "2500"},
    {"property_id": "b", "property_name": "Elm Street ...", "last_balance": ""},
    {"property_id": "c", "property_name": "rls test object", "last_balance": "1"},
    {"property_id": "d", "property_name": "Kirchweg 3 (core-shadow)", "last_balance": "40"},
    {"property_id": "", "property_name": "Kirchweg 9", "last_balance": "7"},
]


def _write_csv(path: Path, rows: list[dict[str, str]]) -> Path:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)
    return path


def test_reconcile_command_writes_records_and_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = _write_csv(tmp_path / "dashboard.csv", DASHBOARD_ROWS)
    output_dir = tmp_path / "out"

    exit_code = main(["reconcile", "--input", str(input_path), "--output-dir", str(output_dir), "--explain", "1"])

    assert exit_code == 0
    records = json.loads((output_dir / "records.json").read_text(encoding="utf-8"))
    assert records == [{"property_id": "a", "property_name": "Elm Street 12 Metroville", "last_balance": "2500"}]

    summary = json.loads((output_dir / "summary.json").read_text(encoding="utf-8"))
    assert summary["raw_count"] == 4
    assert summary["after_placeholder_count"] == 3
    assert summary["unique_count"] == 2
    assert summary["shown_count"] == 1
    assert summary["dropped_by_stage"] == {"placeholder": 1, "loose": 1}
    assert summary["total_balance"] == 2500.0

    out = capsys.readouterr().out
    assert "unique=2" in out
    assert '"record_id": "a"' in out


def test_reconcile_command_filters_like_the_dashboard(tmp_path: Path) -> None:
    input_path = tmp_path / "dashboard.json"
    input_path.write_text(json.dumps(DASHBOARD_ROWS), encoding="utf-8")
    output_dir = tmp_path / "out"

    exit_code = main(
        [
            "reconcile",
            "--input",
            str(input_path),
            "--output-dir",
            str(output_dir),
            "--include-shadow",
            "--query",
            "kirchweg",
        ]
    )

    assert exit_code == 0
    records = json.loads((output_dir / "records.json").read_text(encoding="utf-8"))
    assert [(row["property_id"], row["property_name"]) for row in records] == [("d", "Kirchweg 3")]
    summary = json.loads((output_dir / "summary.json").read_text(encoding="utf-8"))
    assert summary["total_balance"] == 40.0


def test_read_records_passes_extra_columns_through(tmp_path: Path) -> None:
    rows = [{"property_id": "1", "property_name": "Kirchweg 3", "portfolio": "Nord"}]
    records = read_records(_write_csv(tmp_path / "rows.csv", rows))

    assert len(records) == 1
    assert records[0].record_id == "1"
    assert records[0].label == "Kirchweg 3"
    assert records[0].attributes == {"portfolio": "Nord"}


def test_read_records_rejects_bad_input(tmp_path: Path) -> None:
    with pytest.raises(InputFormatError, match="unsupported file type"):
        read_records(tmp_path / "rows.xlsx")

    missing = _write_csv(tmp_path / "missing.csv", [{"property_id": "1", "name": "Kirchweg 3"}])
    with pytest.raises(InputFormatError, match="property_name"):
        read_records(missing)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(InputFormatError, match="invalid JSON"):
        read_records(broken)

    scalar = tmp_path / "scalar.json"
    scalar.write_text('{"property_id": "1"}', encoding="utf-8")
    with pytest.raises(InputFormatError, match="JSON array"):
        read_records(scalar)

    with pytest.raises(InputFormatError, match="cannot read file"):
        read_records(tmp_path / "absent.csv")


def test_main_reports_input_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["reconcile", "--input", str(tmp_path / "rows.txt"), "--output-dir", str(tmp_path)])

    assert exit_code == 2
    assert "unsupported file type .txt" in capsys.readouterr().err


def test_run_test_command_outputs_dataset_and_summary(tmp_path: Path) -> None:
    exit_code = main(["run-test", "--size", "200", "--seed", "11", "--output-dir", str(tmp_path)])

    assert exit_code == 0
    assert (tmp_path / "test_dataset.csv").exists()
    summary = json.loads((tmp_path / "summary.json").read_text(encoding="utf-8"))
    assert summary["raw_count"] == 200
    assert summary["after_placeholder_count"] == 196
    assert summary["unique_count"] == 166

    dataset = read_records(tmp_path / "test_dataset.csv")
    assert len(dataset) == 200


def test_main_without_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "reconcile" in capsys.readouterr().out
