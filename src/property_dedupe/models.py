from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class PropertyRecord:
    """One property row as supplied by the upstream loan dashboard view."""

    record_id: str
    label: str
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RecordKeys:
    """Derived matching keys for a single record, recomputed on every run."""

    display_label: str
    canonical_key: str
    base_key: str
    locality: str
    shadow: bool
    incomplete: bool
    score: int

    @property
    def bucket(self) -> tuple[str, str]:
        return (self.base_key, self.locality)


@dataclass(frozen=True, slots=True)
class KeyedRecord:
    """A record, its position among the kept input records (the tie-breaker) and its derived keys."""

    position: int
    record: PropertyRecord
    keys: RecordKeys


@dataclass(slots=True)
class DroppedRecord:
    """A record removed from the output, with the stage that removed it."""

    record_id: str
    label: str
    stage: str
    kept_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ReconcileResult:
    """Canonical records plus the bookkeeping needed to explain them."""

    records: list[PropertyRecord]
    dropped: list[DroppedRecord]
    keys: dict[str, RecordKeys]
    raw_labels: dict[str, str]
    input_count: int

    def dropped_by_stage(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for dropped in self.dropped:
            counts[dropped.stage] = counts.get(dropped.stage, 0) + 1
        return counts
