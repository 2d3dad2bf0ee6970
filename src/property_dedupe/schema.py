from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping, Sequence


class FieldTag(StrEnum):
    BALANCE = "BALANCE"
    BALANCE_YEAR = "BALANCE_YEAR"
    FIRST_YEAR = "FIRST_YEAR"
    INTEREST_TOTAL = "INTEREST_TOTAL"
    LABEL = "LABEL"
    LAST_YEAR = "LAST_YEAR"
    PRINCIPAL_TOTAL = "PRINCIPAL_TOTAL"
    PROPERTY_ID = "PROPERTY_ID"


@dataclass(frozen=True)
class RecordSchema:
    """Maps source-system columns to stable semantic tags."""

    tag_to_columns: Mapping[FieldTag, tuple[str, ...]]

    @classmethod
    def from_mapping(cls, mapping: Mapping[FieldTag, Sequence[str]]) -> "RecordSchema":
        frozen = {tag: tuple(columns) for tag, columns in mapping.items()}
        return cls(tag_to_columns=frozen)

    def columns_for(self, tag: FieldTag) -> tuple[str, ...]:
        return self.tag_to_columns.get(tag, ())

    def first_column(self, tag: FieldTag, default: str = "") -> str:
        columns = self.columns_for(tag)
        return columns[0] if columns else default

    def values_for(self, attributes: Mapping[str, object], tag: FieldTag) -> list[str]:
        values: list[str] = []
        for column in self.columns_for(tag):
            value = attributes.get(column)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                values.append(text)
        return values

    def has_value(self, attributes: Mapping[str, object], tag: FieldTag) -> bool:
        """True when any column tagged ``tag`` holds a non-blank value."""
        return bool(self.values_for(attributes, tag))

    def number_for(self, attributes: Mapping[str, object], tag: FieldTag) -> float | None:
        for value in self.values_for(attributes, tag):
            try:
                return float(value)
            except ValueError:
                continue
        return None

    @property
    def attribute_columns(self) -> tuple[str, ...]:
        """All tagged columns except the id and label columns, in tag order."""
        skip = {FieldTag.PROPERTY_ID, FieldTag.LABEL}
        columns: list[str] = []
        for tag, tagged in self.tag_to_columns.items():
            if tag in skip:
                continue
            columns.extend(column for column in tagged if column not in columns)
        return tuple(columns)
