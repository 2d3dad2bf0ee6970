"""Heuristic segmentation of a label into street, number and locality.

These are best-effort pattern matches, not geocoding: a street word such as
"Markt" at the end of "Am Markt" is read as a locality. Such misreads lower
dedupe quality but never raise.
"""
from __future__ import annotations

import re
import unicodedata

from property_dedupe.interfaces import LabelNormalizer, LocalityExtractor
from property_dedupe.steps.normalization import collapse_whitespace, normalize

MIN_BARE_LOCALITY_LENGTH = 3

_LETTER = r"[^\W\d_]"
# "28211 Bremen", "70174 Stuttgart-Mitte", "1010 Wien Innere Stadt"
_POSTAL_LOCALITY = re.compile(rf"\b\d{{4,5}}\s+({_LETTER}(?:{_LETTER}|[\s-])*)$")
# "... Bremen", "... Bad Homburg": the letter run after the last other token
_BARE_LOCALITY = re.compile(rf"\s({_LETTER}(?:{_LETTER}|[\s-])*)$")

_STREET_NUMBER = re.compile(r"\b\d{1,4}\s*[a-z]?\b", re.IGNORECASE)
_TRAILING_STREET_NUMBER = re.compile(r"\s+\d{1,4}\s*[a-z]?$")


def extract_locality(label: str | None) -> str:
    """Return the lower-cased trailing locality of ``label``, or ``""`` if unknown."""
    text = unicodedata.normalize("NFKC", str(label or "")).strip()
    if not text:
        return ""

    match = _POSTAL_LOCALITY.search(text)
    if match:
        return collapse_whitespace(match.group(1)).lower()

    match = _BARE_LOCALITY.search(text)
    if match:
        locality = collapse_whitespace(match.group(1)).lower()
        if len(locality) >= MIN_BARE_LOCALITY_LENGTH:
            return locality

    return ""


def has_street_number(label: str | None) -> bool:
    """True if a 1-4 digit token (optionally with a letter, "12a") appears anywhere."""
    return bool(_STREET_NUMBER.search(str(label or "")))


def strip_street_number(key: str) -> str:
    return collapse_whitespace(_TRAILING_STREET_NUMBER.sub("", key))


def strip_locality(key: str, locality: str, normalizer: LabelNormalizer = normalize) -> str:
    """Remove the normalized ``locality`` from the end of ``key`` if it is the trailing token run."""
    locality_key = normalizer(locality)
    if not locality_key:
        return key
    return collapse_whitespace(re.sub(rf"\s+{re.escape(locality_key)}$", "", key))


def reduce_key(canonical_key: str, locality: str, normalizer: LabelNormalizer = normalize) -> str:
    key = canonical_key
    if locality:
        key = strip_locality(key, locality, normalizer)
    return strip_street_number(key)


def base_key(label: str | None, extractor: LocalityExtractor | None = None) -> str:
    """Canonical key with trailing locality and street number removed.

    Used for loose bucketing only; never longer than ``normalize(label)``.
    """
    locality = (extractor or DEFAULT_EXTRACTOR).extract(str(label or ""))
    return reduce_key(normalize(label), locality)


class TrailingLocalityExtractor:
    """Default ``LocalityExtractor``: postal-code locality first, then a bare trailing word."""

    def extract(self, label: str) -> str:
        return extract_locality(label)


DEFAULT_EXTRACTOR = TrailingLocalityExtractor()
