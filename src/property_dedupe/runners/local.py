from __future__ import annotations

import logging
from collections.abc import Sequence

from property_dedupe.collation import collation_key
from property_dedupe.datasets.profiles import LOAN_DASHBOARD_SCHEMA
from property_dedupe.interfaces import PlaceholderPolicy, ReconcilePipeline
from property_dedupe.models import DroppedRecord, KeyedRecord, PropertyRecord, ReconcileResult
from property_dedupe.schema import RecordSchema
from property_dedupe.steps.bucketing import LooseBucketDeduper
from property_dedupe.steps.deterministic import StrictKeyDeduper
from property_dedupe.steps.keys import RecordKeyBuilder
from property_dedupe.steps.placeholders import PlaceholderFilter
from property_dedupe.steps.scoring import CompletenessScorer

logger = logging.getLogger(__name__)

PLACEHOLDER_STAGE = "placeholder"


class LocalReconcilePipeline:
    """In-process runner: placeholder filter, strict pass, loose pass, final filter, sort.

    Holds no per-run state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        key_builder: RecordKeyBuilder,
        policy: PlaceholderPolicy | None = None,
        strict: StrictKeyDeduper | None = None,
        loose: LooseBucketDeduper | None = None,
    ) -> None:
        self._key_builder = key_builder
        self._policy = policy or PlaceholderFilter()
        self._strict = strict or StrictKeyDeduper()
        self._loose = loose or LooseBucketDeduper()

    def run(self, records: Sequence[PropertyRecord]) -> ReconcileResult:
        kept, excluded = self._policy.split(records)
        dropped: list[DroppedRecord] = [_placeholder_drop(record) for record in excluded]
        placeholder_count = len(dropped)

        # Positions index the kept records; relative input order is unchanged.
        keyed = [
            KeyedRecord(position=position, record=record, keys=self._key_builder.build(record))
            for position, record in enumerate(kept)
        ]

        strict_survivors, strict_dropped = self._strict.dedupe(keyed)
        loose_survivors, loose_dropped = self._loose.dedupe(strict_survivors)
        dropped.extend(strict_dropped)
        dropped.extend(loose_dropped)

        # Stripping shadow markup can expose a fixture name.
        survivors: list[KeyedRecord] = []
        for item in loose_survivors:
            if self._policy.is_placeholder(item.keys.display_label):
                dropped.append(_placeholder_drop(item.record))
            else:
                survivors.append(item)

        survivors.sort(key=_display_order)
        result = ReconcileResult(
            records=[
                PropertyRecord(
                    record_id=item.record.record_id,
                    label=item.keys.display_label,
                    attributes=dict(item.record.attributes),
                )
                for item in survivors
            ],
            dropped=dropped,
            keys={item.record.record_id: item.keys for item in survivors},
            raw_labels={item.record.record_id: str(item.record.label or "") for item in survivors},
            input_count=len(records),
        )

        logger.debug(
            "Reconciled %d records: %d placeholders, %d strict duplicates, %d loose duplicates, %d kept",
            len(records),
            placeholder_count,
            len(strict_dropped),
            len(loose_dropped),
            len(result.records),
        )
        return result


def build_pipeline(schema: RecordSchema = LOAN_DASHBOARD_SCHEMA) -> ReconcilePipeline:
    return LocalReconcilePipeline(key_builder=RecordKeyBuilder(scorer=CompletenessScorer(schema=schema)))


def reconcile(
    records: Sequence[PropertyRecord],
    schema: RecordSchema = LOAN_DASHBOARD_SCHEMA,
) -> list[PropertyRecord]:
    """Collapse duplicates to one canonical record each; labels come back shadow-stripped."""
    return build_pipeline(schema).run(records).records


def _display_order(item: KeyedRecord) -> tuple[str, str, int]:
    label = item.keys.display_label
    return (collation_key(label), label, item.position)


def _placeholder_drop(record: PropertyRecord) -> DroppedRecord:
    return DroppedRecord(
        record_id=record.record_id,
        label=record.label,
        stage=PLACEHOLDER_STAGE,
        metadata={"rule": "placeholder_name"},
    )
