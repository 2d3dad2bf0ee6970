from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

from property_dedupe.datasets.profiles import LOAN_DASHBOARD_SCHEMA
from property_dedupe.models import PropertyRecord
from property_dedupe.schema import FieldTag, RecordSchema
from property_dedupe.steps.locality import has_street_number
from property_dedupe.steps.placeholders import is_shadow_marked, strip_shadow_marker

STREET_NUMBER_BONUS = 100
TRUNCATION_PENALTY = -50
SHADOW_PENALTY = -1000

# Points per populated field; the balance is the strongest sign of real data.
FIELD_WEIGHTS: Mapping[FieldTag, int] = MappingProxyType(
    {
        FieldTag.BALANCE: 10,
        FieldTag.BALANCE_YEAR: 5,
        FieldTag.LAST_YEAR: 2,
        FieldTag.INTEREST_TOTAL: 1,
        FieldTag.PRINCIPAL_TOTAL: 1,
    }
)

_TRUNCATION = re.compile(r"\.{3,}|[…⋯]")


def looks_truncated(label: str | None) -> bool:
    return bool(_TRUNCATION.search(str(label or "")))


def looks_incomplete(label: str | None) -> bool:
    """No street number, or visibly cut off."""
    return not has_street_number(label) or looks_truncated(label)


class CompletenessScorer:
    """Scores label quality plus data completeness; higher is better.

    The shadow penalty outweighs everything else, so a shadow row only wins
    when it is the sole candidate.
    """

    def __init__(
        self,
        schema: RecordSchema = LOAN_DASHBOARD_SCHEMA,
        weights: Mapping[FieldTag, int] = FIELD_WEIGHTS,
    ) -> None:
        self._schema = schema
        self._weights = dict(weights)

    def score(self, record: PropertyRecord) -> int:
        raw_label = str(record.label or "")
        label = strip_shadow_marker(raw_label)

        total = 0
        if has_street_number(label):
            total += STREET_NUMBER_BONUS
        if looks_truncated(label):
            total += TRUNCATION_PENALTY
        for tag, weight in self._weights.items():
            if self._schema.has_value(record.attributes, tag):
                total += weight
        if is_shadow_marked(raw_label):
            total += SHADOW_PENALTY
        return total
