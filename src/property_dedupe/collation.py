"""Locale-aware sort keys for display labels.

German phone-book order (DIN 5007-2): umlauts sort as their digraphs, so
"Müller" sorts with "Mueller". The key does not depend on the process locale.
"""
from __future__ import annotations

import unicodedata

from property_dedupe.steps.normalization import collapse_whitespace, fold_letters


def collation_key(label: str | None) -> str:
    text = unicodedata.normalize("NFKC", str(label or "")).casefold()
    return collapse_whitespace(fold_letters(text).casefold())
