"""
Weekday vocabulary for the catalog.
Benefits and filter chips may name days in Spanish or English; matching is
done on a canonical (English) token so both locales compare equal.
"""

from typing import Dict, List
from enum import Enum
import unicodedata


class Language(str, Enum):
    """Supported UI languages."""
    ES = "es"
    EN = "en"


DEFAULT_LANG = Language.ES

# Supported language codes set
SUPPORTED_LANGS = {lang.value for lang in Language}

CANONICAL_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_DAY_LABELS: Dict[str, List[str]] = {
    Language.ES.value: ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"],
    Language.EN.value: list(CANONICAL_DAYS),
}

_DAY_MAPPING: Dict[str, str] = {
    label: canonical
    for labels in _DAY_LABELS.values()
    for label, canonical in zip(labels, CANONICAL_DAYS)
}


def normalize_day(day: str) -> str:
    """Map a weekday abbreviation in any supported locale to its canonical token.

    Input is NFC-normalized first, so "Mi\u00e9" spelled with a combining accent
    still matches.
    Unknown values are returned unchanged.
    """
    return _DAY_MAPPING.get(unicodedata.normalize("NFC", day), day)


def day_labels(lang: str = DEFAULT_LANG.value) -> List[str]:
    """Weekday labels for a language, Monday first. Falls back to Spanish."""
    lang = (lang or "").lower()
    if lang not in SUPPORTED_LANGS:
        lang = DEFAULT_LANG.value
    return list(_DAY_LABELS[lang])
