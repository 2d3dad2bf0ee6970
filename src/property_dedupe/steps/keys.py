from __future__ import annotations

from property_dedupe.interfaces import LabelNormalizer, LocalityExtractor, PlaceholderPolicy, RecordScorer
from property_dedupe.models import PropertyRecord, RecordKeys
from property_dedupe.steps.locality import DEFAULT_EXTRACTOR, reduce_key
from property_dedupe.steps.normalization import normalize
from property_dedupe.steps.placeholders import PlaceholderFilter, is_shadow_marked
from property_dedupe.steps.scoring import CompletenessScorer, looks_incomplete


class RecordKeyBuilder:
    """Computes every derived key of a record from its shadow-stripped label."""

    def __init__(
        self,
        normalizer: LabelNormalizer = normalize,
        extractor: LocalityExtractor = DEFAULT_EXTRACTOR,
        scorer: RecordScorer | None = None,
        policy: PlaceholderPolicy | None = None,
    ) -> None:
        self._normalizer = normalizer
        self._extractor = extractor
        self._scorer = scorer or CompletenessScorer()
        self._policy = policy or PlaceholderFilter()

    def build(self, record: PropertyRecord) -> RecordKeys:
        raw_label = str(record.label or "")
        display = self._policy.display_label(raw_label)
        canonical = self._normalizer(display)
        locality = self._extractor.extract(display)
        return RecordKeys(
            display_label=display,
            canonical_key=canonical,
            base_key=reduce_key(canonical, locality, self._normalizer),
            locality=locality,
            shadow=is_shadow_marked(raw_label),
            incomplete=looks_incomplete(display),
            score=self._scorer.score(record),
        )
