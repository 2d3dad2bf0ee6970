from __future__ import annotations

import random

from property_dedupe.models import PropertyRecord
from property_dedupe.schema import FieldTag, RecordSchema

_STREETS = [
    "Hauptstraße",
    "Bahnhofstraße",
    "Schillerstraße",
    "Lindenallee",
    "Am Markt",
    "Kirchweg",
    "Gartenstraße",
    "Mühlenstraße",
]
_CITIES = [
    ("28211", "Bremen"),
    ("70174", "Stuttgart"),
    ("50667", "Köln"),
    ("80331", "München"),
    ("04109", "Leipzig"),
    ("1010", "Wien"),
]
_PLACEHOLDERS = ["RLS Test Objekt", "Trigger Test Objekt", "rls test"]


class ReferenceDatasetGenerator:
    """Generate synthetic dashboard rows (with intentional dupes) for tests and benchmarks."""

    def __init__(self, seed: int = 7) -> None:
        self._rng = random.Random(seed)

    def generate(
        self,
        schema: RecordSchema,
        size: int,
        duplicate_rate: float = 0.15,
        placeholder_rate: float = 0.02,
    ) -> list[PropertyRecord]:
        if size <= 0:
            return []

        records: list[PropertyRecord] = []
        unique_count = int(size * (1.0 - duplicate_rate - placeholder_rate))
        unique_count = max(1, min(unique_count, size))
        placeholder_count = min(int(size * placeholder_rate), size - unique_count)

        for i in range(unique_count):
            profile = self._profile(i)
            records.append(
                PropertyRecord(
                    record_id=f"prop_{i:07d}",
                    label=profile["label"],
                    attributes=self._attributes(schema, complete=True),
                )
            )

        for i in range(placeholder_count):
            label = f"{self._rng.choice(_PLACEHOLDERS)} {i + 1}"
            records.append(
                PropertyRecord(
                    record_id=f"prop_{len(records):07d}",
                    label=label,
                    attributes=self._attributes(schema, complete=False),
                )
            )

        while len(records) < size:
            source = self._rng.choice(records[:unique_count])
            records.append(
                PropertyRecord(
                    record_id=f"prop_{len(records):07d}",
                    label=self._perturb(source.label),
                    attributes=self._attributes(schema, complete=self._rng.random() < 0.3),
                )
            )

        self._rng.shuffle(records)
        return records

    def _profile(self, idx: int) -> dict[str, str]:
        street = _STREETS[idx % len(_STREETS)]
        # Unique street/number pairs keep distinct properties distinct.
        house_no = str(1 + idx // len(_STREETS))
        if self._rng.random() < 0.2:
            house_no += self._rng.choice("ab")
        postcode, city = self._rng.choice(_CITIES)

        layout = self._rng.choice(["postcode", "city", "bare"])
        if layout == "postcode":
            label = f"{street} {house_no}, {postcode} {city}"
        elif layout == "city":
            label = f"{street} {house_no} {city}"
        else:
            label = f"{street} {house_no}"
        return {"street": street, "house_no": house_no, "city": city, "label": label}

    def _attributes(self, schema: RecordSchema, complete: bool) -> dict[str, object]:
        first_year = self._rng.randint(2005, 2018)
        last_year = self._rng.randint(first_year, 2025)
        balance = round(self._rng.uniform(20_000, 650_000), 2)
        values: dict[FieldTag, object] = {
            FieldTag.FIRST_YEAR: first_year,
            FieldTag.LAST_YEAR: last_year,
            FieldTag.BALANCE_YEAR: last_year,
            FieldTag.BALANCE: balance,
            FieldTag.INTEREST_TOTAL: round(balance * self._rng.uniform(0.05, 0.4), 2),
            FieldTag.PRINCIPAL_TOTAL: round(balance * self._rng.uniform(0.1, 0.6), 2),
        }

        attrs: dict[str, object] = {}
        for tag, value in values.items():
            if not complete and self._rng.random() < 0.5:
                value = None
            for column in schema.columns_for(tag):
                attrs[column] = value
        return attrs

    def _perturb(self, label: str) -> str:
        mutation = self._rng.choice(["truncate", "suffix", "spacing", "shadow"])

        if mutation == "truncate":
            return self._truncated_variant(label)
        if mutation == "suffix":
            return self._suffix_variant(label)
        if mutation == "spacing":
            return self._spacing_variant(label)
        return self._shadow_variant(label)

    def _truncated_variant(self, label: str) -> str:
        street = _street_part(label)
        ellipsis = self._rng.choice(["...", "…"])
        return f"{street} {ellipsis}"

    def _suffix_variant(self, label: str) -> str:
        if "straße" in label:
            return label.replace("straße", self._rng.choice(["str.", "strasse", "str"]))
        if "Straße" in label:
            return label.replace("Straße", "Str.")
        return label.replace(", ", " ")

    def _spacing_variant(self, label: str) -> str:
        variant = self._rng.choice(["upper", "lower", "double"])
        if variant == "upper":
            return label.upper()
        if variant == "lower":
            return label.lower()
        return "  ".join(label.split(" "))

    def _shadow_variant(self, label: str) -> str:
        marker = self._rng.choice(["(core-shadow)", "core_shadow", "(Core – Shadow)"])
        return f"{label} {marker}"


def _street_part(label: str) -> str:
    tokens: list[str] = []
    for token in label.split():
        if any(char.isdigit() for char in token):
            break
        tokens.append(token)
    return " ".join(tokens) or label
