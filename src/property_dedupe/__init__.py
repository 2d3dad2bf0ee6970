"""Canonicalization and fuzzy deduplication of property dashboard records."""

from property_dedupe.models import DroppedRecord, PropertyRecord, ReconcileResult, RecordKeys
from property_dedupe.runners import LocalReconcilePipeline, reconcile
from property_dedupe.schema import FieldTag, RecordSchema

__all__ = [
    "DroppedRecord",
    "FieldTag",
    "LocalReconcilePipeline",
    "PropertyRecord",
    "ReconcileResult",
    "RecordKeys",
    "RecordSchema",
    "reconcile",
]
