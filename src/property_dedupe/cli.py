from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Any

from property_dedupe.config import get_settings
from property_dedupe.datasets import LOAN_DASHBOARD_COLUMNS, LOAN_DASHBOARD_SCHEMA, ReferenceDatasetGenerator
from property_dedupe.exceptions import InputFormatError, PropertyDedupeError
from property_dedupe.logging_config import setup_logging
from property_dedupe.models import PropertyRecord, ReconcileResult
from property_dedupe.runners import build_pipeline
from property_dedupe.schema import FieldTag
from property_dedupe.view import explain, filter_records, total_balance

logger = logging.getLogger(__name__)

_ID_COLUMN = LOAN_DASHBOARD_SCHEMA.first_column(FieldTag.PROPERTY_ID)
_LABEL_COLUMN = LOAN_DASHBOARD_SCHEMA.first_column(FieldTag.LABEL)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=(args.log_level or settings.log_level).upper(),
        json_format=settings.json_logs,
    )
    output_dir = args.output_dir or settings.output_dir
    explain_limit = settings.explain_limit if args.explain is None else args.explain

    try:
        if args.command == "reconcile":
            run_reconcile(
                input_path=args.input,
                output_dir=output_dir,
                query=args.query,
                hide_zero_balance=args.hide_zero_balance,
                include_shadow=args.include_shadow,
                explain_limit=explain_limit,
            )
            return 0

        if args.command == "run-test":
            run_test(
                size=args.size,
                duplicate_rate=args.duplicate_rate,
                placeholder_rate=args.placeholder_rate,
                seed=args.seed,
                output_dir=output_dir,
                explain_limit=explain_limit,
            )
            return 0
    except PropertyDedupeError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    parser.print_help()
    return 1


def run_reconcile(
    *,
    input_path: Path,
    output_dir: Path,
    query: str = "",
    hide_zero_balance: bool = False,
    include_shadow: bool = False,
    explain_limit: int = 0,
) -> dict[str, object]:
    records = read_records(input_path)
    logger.info("Loaded %d records from %s", len(records), input_path)
    return _reconcile_and_report(
        records=records,
        dataset_path=input_path,
        output_dir=output_dir,
        query=query,
        hide_zero_balance=hide_zero_balance,
        include_shadow=include_shadow,
        explain_limit=explain_limit,
    )


def run_test(
    *,
    size: int,
    duplicate_rate: float,
    placeholder_rate: float,
    seed: int,
    output_dir: Path,
    explain_limit: int = 0,
) -> dict[str, object]:
    output_dir.mkdir(parents=True, exist_ok=True)
    records = ReferenceDatasetGenerator(seed=seed).generate(
        schema=LOAN_DASHBOARD_SCHEMA,
        size=size,
        duplicate_rate=duplicate_rate,
        placeholder_rate=placeholder_rate,
    )
    dataset_path = output_dir / "test_dataset.csv"
    write_records_csv(dataset_path, records, LOAN_DASHBOARD_COLUMNS)
    logger.info("Generated %d synthetic records into %s", len(records), dataset_path)

    return _reconcile_and_report(
        records=records,
        dataset_path=dataset_path,
        output_dir=output_dir,
        explain_limit=explain_limit,
    )


def _reconcile_and_report(
    *,
    records: list[PropertyRecord],
    dataset_path: Path,
    output_dir: Path,
    query: str = "",
    hide_zero_balance: bool = False,
    include_shadow: bool = False,
    explain_limit: int = 0,
) -> dict[str, object]:
    output_dir.mkdir(parents=True, exist_ok=True)

    result = build_pipeline(LOAN_DASHBOARD_SCHEMA).run(records)
    shown = filter_records(
        result,
        query=query,
        hide_zero_balance=hide_zero_balance,
        include_shadow=include_shadow,
    )

    records_path = output_dir / "records.json"
    summary_path = output_dir / "summary.json"

    _write_json(records_path, [_record_payload(record) for record in shown])
    summary = _build_summary(
        result=result,
        shown=shown,
        dataset_path=dataset_path,
        records_path=records_path,
    )
    _write_json(summary_path, summary)

    print(f"Dataset: {dataset_path}")
    print(f"Records: {records_path}")
    print(f"Summary: {summary_path}")
    print("---")
    print(f"raw={summary['raw_count']}")
    print(f"after_placeholders={summary['after_placeholder_count']}")
    print(f"unique={summary['unique_count']}")
    print(f"shown={summary['shown_count']}")
    print(f"dropped={summary['dropped_by_stage']}")
    print(f"total_balance={summary['total_balance']}")
    if explain_limit > 0:
        print("---")
        print("explain=")
        print(json.dumps(explain(result, limit=explain_limit), indent=2, ensure_ascii=False))
    return summary


def _build_summary(
    *,
    result: ReconcileResult,
    shown: list[PropertyRecord],
    dataset_path: Path,
    records_path: Path,
) -> dict[str, object]:
    dropped_by_stage = result.dropped_by_stage()
    return {
        "raw_count": result.input_count,
        "after_placeholder_count": result.input_count - dropped_by_stage.get("placeholder", 0),
        "unique_count": len(result.records),
        "shown_count": len(shown),
        "dropped_by_stage": dropped_by_stage,
        "total_balance": round(total_balance(shown), 2),
        "dataset_path": str(dataset_path),
        "records_path": str(records_path),
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="property-dedupe", description="Property record dedupe CLI")
    parser.add_argument("--log-level", type=str, default=None)
    parser.set_defaults(output_dir=None, explain=None)
    subparsers = parser.add_subparsers(dest="command")

    reconcile_parser = subparsers.add_parser(
        "reconcile",
        help="Reconcile a CSV or JSON export and write canonical records + summary",
    )
    reconcile_parser.add_argument("--input", type=Path, required=True)
    reconcile_parser.add_argument("--output-dir", type=Path, default=None)
    reconcile_parser.add_argument("--query", type=str, default="")
    reconcile_parser.add_argument("--hide-zero-balance", action="store_true")
    reconcile_parser.add_argument("--include-shadow", action="store_true")
    reconcile_parser.add_argument("--explain", type=int, default=None)

    run_test_parser = subparsers.add_parser(
        "run-test",
        help="Generate a synthetic dataset, reconcile it, and output records + summary",
    )
    run_test_parser.add_argument("--size", type=int, default=2000)
    run_test_parser.add_argument("--duplicate-rate", type=float, default=0.15)
    run_test_parser.add_argument("--placeholder-rate", type=float, default=0.02)
    run_test_parser.add_argument("--seed", type=int, default=42)
    run_test_parser.add_argument("--output-dir", type=Path, default=None)
    run_test_parser.add_argument("--explain", type=int, default=None)

    return parser


def read_records(path: Path) -> list[PropertyRecord]:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return _read_records_csv(path)
    if suffix == ".json":
        return _read_records_json(path)
    raise InputFormatError(path, f"unsupported file type {suffix or '(none)'}; expected .csv or .json")


def write_records_csv(path: Path, records: list[PropertyRecord], columns: list[str]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        for record in records:
            writer.writerow(_record_payload(record))


def _write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)


def _record_payload(record: PropertyRecord) -> dict[str, Any]:
    return {_ID_COLUMN: record.record_id, _LABEL_COLUMN: record.label, **record.attributes}


def _read_records_csv(path: Path) -> list[PropertyRecord]:
    try:
        with path.open("r", newline="", encoding="utf-8-sig") as handle:
            reader = csv.DictReader(handle)
            _require_columns(path, reader.fieldnames or [])
            return _records_from_rows(path, reader)
    except OSError as exc:
        raise InputFormatError(path, f"cannot read file ({exc.strerror or exc})") from exc


def _read_records_json(path: Path) -> list[PropertyRecord]:
    try:
        with path.open("r", encoding="utf-8-sig") as handle:
            payload = json.load(handle)
    except OSError as exc:
        raise InputFormatError(path, f"cannot read file ({exc.strerror or exc})") from exc
    except json.JSONDecodeError as exc:
        raise InputFormatError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    if not isinstance(payload, list) or not all(isinstance(row, dict) for row in payload):
        raise InputFormatError(path, "expected a JSON array of objects")
    if payload:
        _require_columns(path, {column for row in payload for column in row})
    return _records_from_rows(path, payload)


def _require_columns(path: Path, columns: Any) -> None:
    missing = [column for column in (_ID_COLUMN, _LABEL_COLUMN) if column not in columns]
    if missing:
        raise InputFormatError(path, f"missing required column(s): {', '.join(missing)}")


def _records_from_rows(path: Path, rows: Any) -> list[PropertyRecord]:
    records: list[PropertyRecord] = []
    for line, row in enumerate(rows, start=1):
        record_id = row.get(_ID_COLUMN)
        if record_id is None or not str(record_id).strip():
            logger.warning("Skipping row %d of %s without %s", line, path, _ID_COLUMN)
            continue
        label = row.get(_LABEL_COLUMN)
        attrs = {k: v for k, v in row.items() if k not in (_ID_COLUMN, _LABEL_COLUMN)}
        records.append(
            PropertyRecord(
                record_id=str(record_id),
                label="" if label is None else str(label),
                attributes=attrs,
            )
        )
    return records


if __name__ == "__main__":
    raise SystemExit(main())
