"""Consumer-side helpers for showing a reconcile result.

Mirrors the loan overview screen: search box, "balance > 0" toggle, shadow
rows hidden, a total over what is shown and a debug panel per row.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from property_dedupe.datasets.profiles import LOAN_DASHBOARD_SCHEMA
from property_dedupe.models import PropertyRecord, ReconcileResult
from property_dedupe.schema import FieldTag, RecordSchema


def filter_records(
    result: ReconcileResult,
    query: str = "",
    hide_zero_balance: bool = False,
    include_shadow: bool = False,
    schema: RecordSchema = LOAN_DASHBOARD_SCHEMA,
) -> list[PropertyRecord]:
    needle = query.strip().lower()
    shown: list[PropertyRecord] = []
    for record in result.records:
        keys = result.keys.get(record.record_id)
        if not include_shadow and keys is not None and keys.shadow:
            continue
        if hide_zero_balance:
            balance = schema.number_for(record.attributes, FieldTag.BALANCE)
            if balance is None or balance <= 0:
                continue
        if needle and needle not in f"{record.label} {record.record_id}".lower():
            continue
        shown.append(record)
    return shown


def total_balance(records: Sequence[PropertyRecord], schema: RecordSchema = LOAN_DASHBOARD_SCHEMA) -> float:
    return sum(schema.number_for(record.attributes, FieldTag.BALANCE) or 0.0 for record in records)


def explain(result: ReconcileResult, limit: int | None = None) -> list[dict[str, Any]]:
    """Per-record matching keys, as shown in the dashboard's debug panel."""
    records = result.records if limit is None else result.records[:limit]
    payload: list[dict[str, Any]] = []
    for record in records:
        keys = result.keys[record.record_id]
        payload.append(
            {
                "record_id": record.record_id,
                "raw": result.raw_labels.get(record.record_id, record.label),
                "label": record.label,
                "shadow": keys.shadow,
                "key": keys.canonical_key,
                "base": keys.base_key,
                "locality": keys.locality or None,
                "score": keys.score,
            }
        )
    return payload
