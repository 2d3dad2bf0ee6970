from __future__ import annotations

import argparse
from pathlib import Path

from property_dedupe.cli import write_records_csv
from property_dedupe.datasets import LOAN_DASHBOARD_COLUMNS, LOAN_DASHBOARD_SCHEMA, ReferenceDatasetGenerator


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic loan dashboard property rows")
    parser.add_argument("--size", type=int, default=10000)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--duplicate-rate", type=float, default=0.15)
    parser.add_argument("--placeholder-rate", type=float, default=0.02)
    parser.add_argument("--output", type=Path, default=Path("data/reference_loan_properties.csv"))
    args = parser.parse_args()

    records = ReferenceDatasetGenerator(seed=args.seed).generate(
        schema=LOAN_DASHBOARD_SCHEMA,
        size=args.size,
        duplicate_rate=args.duplicate_rate,
        placeholder_rate=args.placeholder_rate,
    )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    write_records_csv(args.output, records, LOAN_DASHBOARD_COLUMNS)
    print(f"Wrote {len(records)} rows to {args.output}")


if __name__ == "__main__":
    main()
