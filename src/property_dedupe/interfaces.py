from __future__ import annotations

from typing import Protocol, Sequence

from property_dedupe.models import PropertyRecord, ReconcileResult


class LabelNormalizer(Protocol):
    """Turn a free-text label into a strict comparison key."""

    def __call__(self, label: str) -> str:
        ...


class LocalityExtractor(Protocol):
    """Isolate a trailing locality token from a label; ``""`` when unknown.

    Swap implementations here (e.g. a real address parser) without touching
    scoring or bucketing.
    """

    def extract(self, label: str) -> str:
        ...


class RecordScorer(Protocol):
    """Rank records so the most complete one wins its group."""

    def score(self, record: PropertyRecord) -> int:
        ...


class PlaceholderPolicy(Protocol):
    """Step 1: permanently exclude test fixtures and tidy shadow markup."""

    def is_placeholder(self, label: str) -> bool:
        ...

    def display_label(self, label: str) -> str:
        ...

    def split(self, records: Sequence[PropertyRecord]) -> tuple[list[PropertyRecord], list[PropertyRecord]]:
        ...


class ReconcilePipeline(Protocol):
    """Unified interface for turning raw rows into canonical rows."""

    def run(self, records: Sequence[PropertyRecord]) -> ReconcileResult:
        ...
