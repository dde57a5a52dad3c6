"""Locale-aware, case-insensitive sort keys for service names.

Comparison works at "base letter" strength: case and most accents are
ignored (``"Éclair" == "eclair"``), but letters that a locale's alphabet
treats as distinct keep their own position right after their base letter
(in Polish ``a < ą < b`` and ``z < ź < ż``).
"""

from __future__ import annotations

import unicodedata
from functools import lru_cache

CollationKey = tuple[tuple[str, int], ...]

# letter -> (base letter, rank after base)
_TAILORINGS: dict[str, dict[str, tuple[str, int]]] = {
    "pl": {
        "ą": ("a", 1),
        "ć": ("c", 1),
        "ę": ("e", 1),
        "ł": ("l", 1),
        "ń": ("n", 1),
        "ó": ("o", 1),
        "ś": ("s", 1),
        "ź": ("z", 1),
        "ż": ("z", 2),
    },
}


def _language(locale: str) -> str:
    return locale.replace("-", "_").split("_", 1)[0].strip().lower()


def _strip_marks(char: str) -> str:
    decomposed = unicodedata.normalize("NFKD", char)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


@lru_cache(maxsize=2048)
def collation_key(text: str, locale: str = "pl") -> CollationKey:
    """Return a sort key for *text* under *locale*.

    Unknown locales fall back to accent-stripped casefold ordering.
    """
    tailoring = _TAILORINGS.get(_language(locale), {})
    key: list[tuple[str, int]] = []
    for char in unicodedata.normalize("NFC", text).casefold():
        tailored = tailoring.get(char)
        if tailored is not None:
            key.append(tailored)
            continue
        for base in _strip_marks(char):
            key.append((base, 0))
    return tuple(key)
