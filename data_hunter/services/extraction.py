"""
Field extraction from free web text.

Patterns are composed from the label tables in ``data_hunter.core.vocabulary``:

* free-text fields capture ``label [:|-] value`` where the value ends at the
  next known section label (in any supported language) or at the end of text;
* numeric fields capture ``label``, a short non-digit gap that may not cross
  a header or another label, an optional comparator, a number and a required
  unit;
* weight, nutrition header and organic certification code have dedicated
  patterns.

Fields that cannot be resolved keep the sentinel value.
"""

import re
from functools import lru_cache
from typing import Dict, Iterable, Optional, Tuple, Union

from data_hunter.core.vocabulary import (
    LANGUAGES,
    NUMERIC_FIELDS,
    NUMERIC_UNITS,
    ORGANIC_MARKERS,
    PER_100_WORDS,
    TEXT_FIELDS,
    WEIGHT_UNITS,
    stop_words,
    synonyms,
)
from data_hunter.models.schemas import SENTINEL, NutritionFields

FLAGS = re.IGNORECASE

# Room for words like "approx." or ":" between a label and its number
MAX_LABEL_GAP = 20

NUMBER = r"(?P<number>\d+(?:[.,]\d+)?)"
COMPARATOR = r"(?:(?P<cmp>[<>≤≥])\s*)?"
VALUE_EDGE_CHARS = " :;,|-–—"


def _phrase(word: str) -> str:
    return r"\s+".join(re.escape(part) for part in word.split())


def _alternation(words: Iterable[str]) -> str:
    return "(?:" + "|".join(_phrase(w) for w in words) + ")"


def _label(words: Iterable[str]) -> str:
    return r"(?<!\w)" + _alternation(words) + r"(?!\w)"


def _units(units: Iterable[str]) -> str:
    return "(?P<unit>" + "|".join(re.escape(u) for u in units) + r")(?!\w)"


NUTRITION_HEADER = (
    r"(?<!\w)" + _alternation(sorted(PER_100_WORDS, key=len, reverse=True))
    + r"\s*100\s*(?:g|ml)(?:\s*/\s*(?:100\s*)?ml)?(?!\w)"
)

ORGANIC_CERT = (
    r"(?<![^\W\d_])[a-z]{2}[-\s]?" + _alternation(ORGANIC_MARKERS) + r"[-\s]?\d{2,3}(?!\d)"
)

STOP_LABEL = _label(stop_words())

STOP_LOOKAHEAD = r"(?=" + STOP_LABEL + "|" + NUTRITION_HEADER + "|$)"

# A value may not start on whitespace, punctuation or another label
VALUE_START = r"(?![\s:\-–—])(?!" + STOP_LABEL + ")"

MEASURE_LABEL = _label(
    sorted({word for field in NUMERIC_FIELDS + ("weight",) for word in synonyms(field, LANGUAGES)}, key=len, reverse=True)
)

# The label-to-number gap may not run into a header or another label
GAP_BARRIER = r"(?!" + NUTRITION_HEADER + "|" + MEASURE_LABEL + "|" + STOP_LABEL + ")"


def _gap(excluded: str) -> str:
    return r"(?:" + GAP_BARRIER + excluded + r"){0,%d}" % MAX_LABEL_GAP


@lru_cache(maxsize=32)
def compile_patterns(languages: Tuple[str, ...]) -> Dict[str, re.Pattern]:
    """Compile every field pattern for a tuple of language codes."""
    patterns: Dict[str, re.Pattern] = {}

    for field in TEXT_FIELDS:
        patterns[field] = re.compile(
            _label(synonyms(field, languages))
            + r"\s*[:\-–—]?\s*" + VALUE_START + r"(?P<value>.+?)\s*"
            + STOP_LOOKAHEAD,
            FLAGS,
        )

    gap = _gap(r"[^\d<>≤≥]")
    for field in NUMERIC_FIELDS:
        patterns[field] = re.compile(
            _label(synonyms(field, languages)) + gap + COMPARATOR + NUMBER + r"\s*" + _units(NUMERIC_UNITS[field]),
            FLAGS,
        )

    patterns["weight"] = re.compile(
        _label(synonyms("weight", languages)) + _gap(r"[^\d]") + NUMBER + r"\s*" + _units(WEIGHT_UNITS),
        FLAGS,
    )
    patterns["nutrition_header"] = re.compile(NUTRITION_HEADER, FLAGS)
    patterns["organic_cert"] = re.compile(ORGANIC_CERT, FLAGS)
    return patterns


def normalize_languages(languages: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """Hinted languages first, English always last, unknown codes dropped."""
    if languages is None:
        languages = ()
    elif isinstance(languages, str):
        languages = (languages,)
    ordered = []
    for code in list(languages) + ["en"]:
        code = (code or "").strip().lower()
        if code in LANGUAGES and code not in ordered:
            ordered.append(code)
    return tuple(ordered)


class FieldExtractionEngine:
    """Turns a raw text blob into :class:`NutritionFields`."""

    def __init__(self, max_value_length: int = 500):
        self.max_value_length = max_value_length

    def extract(self, blob: str, languages: Union[str, Iterable[str], None] = None) -> NutritionFields:
        text = " ".join((blob or "").split())
        if not text:
            return NutritionFields()

        patterns = compile_patterns(normalize_languages(languages))
        values = {}
        for field in TEXT_FIELDS:
            values[field] = self._free_text(patterns[field], text)
        for field in NUMERIC_FIELDS + ("weight",):
            values[field] = self._measurement(patterns[field], text)
        values["nutrition_header"] = self._whole_match(patterns["nutrition_header"], text)
        organic = self._whole_match(patterns["organic_cert"], text)
        values["organic_cert"] = organic.upper() if organic != SENTINEL else SENTINEL
        return NutritionFields(**values)

    @staticmethod
    def has_ingredients(fields: Optional[NutritionFields]) -> bool:
        return fields is not None and fields.ingredients != SENTINEL

    def _free_text(self, pattern: re.Pattern, text: str) -> str:
        # A bare label ("Allergens:") is not a match; try the next occurrence
        for match in pattern.finditer(text):
            value = match.group("value").strip(VALUE_EDGE_CHARS)
            if value:
                return self._cap(value)
        return SENTINEL

    def _measurement(self, pattern: re.Pattern, text: str) -> str:
        match = pattern.search(text)
        if not match:
            return SENTINEL
        comparator = match.groupdict().get("cmp") or ""
        return f"{comparator}{match.group('number')}{match.group('unit')}"

    def _whole_match(self, pattern: re.Pattern, text: str) -> str:
        match = pattern.search(text)
        if not match:
            return SENTINEL
        return self._cap(" ".join(match.group(0).split()))

    def _cap(self, value: str) -> str:
        if len(value) <= self.max_value_length:
            return value
        return value[: self.max_value_length].rstrip()
