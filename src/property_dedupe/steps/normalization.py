"""Label normalization for strict matching.

Every function here is total: any string (including empty) yields a string,
and ``normalize`` is idempotent.
"""
from __future__ import annotations

import re
import unicodedata
from types import MappingProxyType
from typing import Mapping

from unidecode import unidecode

# Locale letters folded to their ASCII digraphs before generic transliteration.
LETTER_FOLDING: Mapping[str, str] = MappingProxyType(
    {
        "ß": "ss",
        "ä": "ae",
        "ö": "oe",
        "ü": "ue",
    }
)

# All spellings of the street suffix, matched after letter folding.
STREET_SUFFIX_SPELLINGS: tuple[str, ...] = ("straße", "strasse", "str")
STREET_SUFFIX_TOKEN = "str"

# One-letter country prefixes allowed in front of a postal code ("D-28211").
POSTAL_COUNTRY_MARKERS: tuple[str, ...] = ("d",)

_INVISIBLE_WHITESPACE = re.compile(r"[\u00a0\u2000-\u200b\u202f\u205f\u3000\ufeff]")
_ELLIPSIS = re.compile(r"[\u2026\u22ef]+|\.{3,}")
_DASHES = re.compile(r"[\-\u2010-\u2015\u2212\u2043\ufe58\ufe63\uff0d]")
_PUNCTUATION = re.compile(r"[.,;:()\[\]_/\"'\u2018\u2019\u201a\u201c\u201d\u201e\u00ab\u00bb]")
_WHITESPACE = re.compile(r"\s+")

_SUFFIX_ALTERNATION = "|".join(
    re.escape(spelling) for spelling in sorted(STREET_SUFFIX_SPELLINGS, key=len, reverse=True)
)
# Underscore counts as a separator, not as part of a word.
_GLUED_SUFFIX = re.compile(rf"(?<=[^\W\d_])(?:{_SUFFIX_ALTERNATION})(?![^\W_])")
_STANDALONE_SUFFIX = re.compile(rf"(?<![^\W_])(?:{_SUFFIX_ALTERNATION})(?![^\W_])")

_COUNTRY_ALTERNATION = "|".join(re.escape(marker) for marker in POSTAL_COUNTRY_MARKERS)
_TRAILING_POSTAL_CLAUSE = re.compile(
    rf"\s+(?:(?:{_COUNTRY_ALTERNATION})\s?)?\d{{4,5}}\s+\S.*\Z", re.DOTALL
)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def fold_letters(text: str) -> str:
    """Fold locale letters via ``LETTER_FOLDING``, then transliterate the rest to ASCII."""
    for letter, replacement in LETTER_FOLDING.items():
        text = text.replace(letter, replacement)
    return unidecode(text)


def fold_street_suffix(text: str) -> str:
    """Canonicalize every spelling of the street suffix to ``STREET_SUFFIX_TOKEN``.

    A suffix glued onto the street name is split off, so "musterstraße",
    "musterstr." and "muster str" all end up as "muster str".
    """
    # Splitting one suffix can expose another glued in front of it ("bstrassestr").
    while True:
        split = _GLUED_SUFFIX.sub(f" {STREET_SUFFIX_TOKEN}", text)
        if split == text:
            break
        text = split
    return _STANDALONE_SUFFIX.sub(STREET_SUFFIX_TOKEN, text)


def strip_postal_clause(text: str) -> str:
    """Drop a trailing "<postal code> <locality...>" clause."""
    return _TRAILING_POSTAL_CLAUSE.sub("", text)


def normalize(label: str | None) -> str:
    """Return the canonical comparison key of ``label``.

    Steps, in order: NFKC, lower-case, every whitespace run (invisible ones
    included) to one space, ellipsis runs to space, letter folding and
    transliteration, street-suffix folding, dashes to space, structural
    punctuation to space, trailing postal clause removal, whitespace collapse.

    Example:
        >>> normalize("Musterstraße 5, D-28211 Bremen")
        'muster str 5'
    """
    text = unicodedata.normalize("NFKC", str(label or ""))
    text = text.lower()
    text = _WHITESPACE.sub(" ", _INVISIBLE_WHITESPACE.sub(" ", text))
    text = _ELLIPSIS.sub(" ", text)
    text = fold_letters(text).lower()
    text = fold_street_suffix(text)
    text = _DASHES.sub(" ", text)
    text = _PUNCTUATION.sub(" ", text)
    text = strip_postal_clause(text)
    return collapse_whitespace(text)
