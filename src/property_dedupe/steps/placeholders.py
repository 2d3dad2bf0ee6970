from __future__ import annotations

import re
import unicodedata
from collections.abc import Sequence

from property_dedupe.models import PropertyRecord
from property_dedupe.steps.normalization import collapse_whitespace

# Test-fixture rows created while exercising row-level security and triggers.
PLACEHOLDER_PREFIXES: tuple[str, ...] = ("rls test", "trigger test")
PLACEHOLDER_TOKENS: tuple[str, ...] = ("rls", "trigger")

# Word pairs marking internal non-canonical duplicates ("core-shadow", "Core_Shadow", ...).
SHADOW_MARKER_WORDS: tuple[tuple[str, str], ...] = (("core", "shadow"),)

_PLACEHOLDER_TOKEN = re.compile(
    r"\b(?:" + "|".join(re.escape(token) for token in PLACEHOLDER_TOKENS) + r")\b"
)
_MARKER = "|".join(
    rf"{re.escape(first)}[\W_]*{re.escape(second)}" for first, second in SHADOW_MARKER_WORDS
)
# Underscore counts as a separator so "x_core_shadow" still carries the marker.
_SHADOW_MARKER = re.compile(rf"(?<![^\W_])(?:{_MARKER})(?![^\W_])", re.IGNORECASE)
_SHADOW_PARENTHETICAL = re.compile(
    rf"\s*\([^)]*(?<![^\W_])(?:{_MARKER})(?![^\W_])[^)]*\)\s*", re.IGNORECASE
)


def is_placeholder(label: str | None) -> bool:
    text = collapse_whitespace(unicodedata.normalize("NFKC", str(label or ""))).lower()
    if not text:
        return False
    if text.startswith(PLACEHOLDER_PREFIXES):
        return True
    return bool(_PLACEHOLDER_TOKEN.search(text))


def is_shadow_marked(label: str | None) -> bool:
    return bool(_SHADOW_MARKER.search(str(label or "")))


def strip_shadow_marker(label: str | None) -> str:
    """Remove shadow markup: whole parentheticals holding the marker, then bare markers.

    Repeats until nothing changes, so the result is idempotent and marker-free.
    """
    text = collapse_whitespace(str(label or ""))
    while True:
        stripped = _SHADOW_PARENTHETICAL.sub(" ", text)
        stripped = collapse_whitespace(_SHADOW_MARKER.sub(" ", stripped))
        if stripped == text:
            return text
        text = stripped


class PlaceholderFilter:
    """Default ``PlaceholderPolicy``: drops fixture rows, tidies shadow-marked labels."""

    def is_placeholder(self, label: str) -> bool:
        return is_placeholder(label)

    def display_label(self, label: str) -> str:
        return strip_shadow_marker(label)

    def split(self, records: Sequence[PropertyRecord]) -> tuple[list[PropertyRecord], list[PropertyRecord]]:
        """Partition ``records`` into ``(kept, excluded)``, both in input order."""
        kept: list[PropertyRecord] = []
        excluded: list[PropertyRecord] = []
        for record in records:
            (excluded if self.is_placeholder(record.label) else kept).append(record)
        return kept, excluded
