from __future__ import annotations

from collections.abc import Sequence

from property_dedupe.models import DroppedRecord, KeyedRecord


class StrictKeyDeduper:
    """Pass 1: one record per exact canonical key, highest score wins, first seen on ties."""

    stage = "strict"

    def dedupe(self, keyed: Sequence[KeyedRecord]) -> tuple[list[KeyedRecord], list[DroppedRecord]]:
        best_by_key: dict[str, KeyedRecord] = {}
        losers: list[tuple[KeyedRecord, str]] = []

        for item in keyed:
            key = item.keys.canonical_key
            current = best_by_key.get(key)
            if current is None:
                best_by_key[key] = item
            elif item.keys.score > current.keys.score:
                losers.append((current, key))
                best_by_key[key] = item
            else:
                losers.append((item, key))

        dropped = [
            DroppedRecord(
                record_id=loser.record.record_id,
                label=loser.record.label,
                stage=self.stage,
                kept_id=best_by_key[key].record.record_id,
                metadata={"rule": "canonical_key", "key": key, "score": loser.keys.score},
            )
            for loser, key in losers
        ]
        survivors = sorted(best_by_key.values(), key=lambda item: item.position)
        return survivors, dropped
