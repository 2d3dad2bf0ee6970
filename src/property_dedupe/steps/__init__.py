from property_dedupe.steps.bucketing import BucketIndex, LooseBucketDeduper
from property_dedupe.steps.deterministic import StrictKeyDeduper
from property_dedupe.steps.keys import RecordKeyBuilder
from property_dedupe.steps.locality import TrailingLocalityExtractor, base_key, extract_locality
from property_dedupe.steps.normalization import normalize
from property_dedupe.steps.placeholders import (
    PlaceholderFilter,
    is_placeholder,
    is_shadow_marked,
    strip_shadow_marker,
)
from property_dedupe.steps.scoring import CompletenessScorer

__all__ = [
    "BucketIndex",
    "CompletenessScorer",
    "LooseBucketDeduper",
    "PlaceholderFilter",
    "RecordKeyBuilder",
    "StrictKeyDeduper",
    "TrailingLocalityExtractor",
    "base_key",
    "extract_locality",
    "is_placeholder",
    "is_shadow_marked",
    "normalize",
    "strip_shadow_marker",
]
