from __future__ import annotations

from collections.abc import Callable, Sequence

from property_dedupe.models import DroppedRecord, KeyedRecord


class BucketIndex:
    """Best record per ``(base_key, locality)`` bucket.

    Buckets are grouped by base key so compatible-locality lookups only scan
    buckets that share the base key.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, dict[str, KeyedRecord]] = {}

    def build(self, keyed: Sequence[KeyedRecord]) -> None:
        self._buckets = {}
        for item in keyed:
            by_locality = self._buckets.setdefault(item.keys.base_key, {})
            current = by_locality.get(item.keys.locality)
            if current is None or _outranks(item, current):
                by_locality[item.keys.locality] = item

    def best_compatible(self, base_key: str, locality: str) -> KeyedRecord | None:
        """Best record over every bucket whose locality is compatible with ``locality``.

        Localities are compatible when equal or when either one is unknown (``""``).
        """
        best: KeyedRecord | None = None
        for bucket_locality, item in self._buckets.get(base_key, {}).items():
            if locality and bucket_locality and bucket_locality != locality:
                continue
            if best is None or _outranks(item, best):
                best = item
        return best


class LooseBucketDeduper:
    """Pass 2: drop incomplete records that a better record in a compatible bucket covers.

    Complete records (street number present, not truncated) are always kept.
    """

    stage = "loose"

    def __init__(self, index_factory: Callable[[], BucketIndex] = BucketIndex) -> None:
        self._index_factory = index_factory

    def dedupe(self, keyed: Sequence[KeyedRecord]) -> tuple[list[KeyedRecord], list[DroppedRecord]]:
        index = self._index_factory()
        index.build(keyed)

        survivors: list[KeyedRecord] = []
        dropped: list[DroppedRecord] = []
        for item in keyed:
            if not item.keys.incomplete:
                survivors.append(item)
                continue

            best = index.best_compatible(item.keys.base_key, item.keys.locality)
            if best is None or best.position == item.position or best.keys.score <= item.keys.score:
                survivors.append(item)
                continue

            dropped.append(
                DroppedRecord(
                    record_id=item.record.record_id,
                    label=item.record.label,
                    stage=self.stage,
                    kept_id=best.record.record_id,
                    metadata={
                        "rule": "base_key_locality",
                        "base_key": item.keys.base_key,
                        "locality": item.keys.locality,
                        "score": item.keys.score,
                        "kept_score": best.keys.score,
                    },
                )
            )
        return survivors, dropped


def _outranks(left: KeyedRecord, right: KeyedRecord) -> bool:
    if left.keys.score != right.keys.score:
        return left.keys.score > right.keys.score
    return left.position < right.position
