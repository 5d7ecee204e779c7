"""
Text helpers (pure string functions).

- normalize(text): the comparison key used everywhere; nothing compares raw strings.
- normalize_url(u): scheme/www/trailing-slash insensitive URL key.
- first_field(row, aliases): first header alias with a non-blank value.
- is_usable_image(val): filters "N/A"-style placeholders out of image columns.
- display_sort_key(name): case-insensitive ordering for display names.

Keeps string munging out of the matching code.
"""

import re
import unicodedata
from typing import Dict, Iterable, Optional, Tuple

from lexicon.patterns import UNUSABLE_IMAGE_VALUES

_NON_WORD = re.compile(r"[^\w\s]")
_SPACES = re.compile(r"\s+")


def normalize(text: Optional[str]) -> str:
    """
    Lowercase, NFKD-decompose, drop accents and punctuation, collapse spaces.

    normalize("Café") == normalize("cafe") == "cafe". Idempotent.
    """
    if text is None:
        return ""
    s = unicodedata.normalize("NFKD", str(text).lower()).lower()
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = _NON_WORD.sub(" ", s)
    return _SPACES.sub(" ", s).strip()


def normalize_url(u: Optional[str]) -> str:
    """'https://www.Shop.com/deal/' -> 'shop.com/deal'"""
    if not u:
        return ""
    s = str(u).strip().lower()
    s = re.sub(r"^https?:///?", "", s)
    s = re.sub(r"^www\.", "", s)
    if s.endswith("/"):
        s = s[:-1]
    return s


def first_field(row: Optional[Dict[str, str]], aliases: Iterable[str]) -> Optional[str]:
    """Return the value of the first alias present in `row` and not blank."""
    if not row:
        return None
    for key in aliases:
        val = row.get(key)
        if val is not None and str(val).strip() != "":
            return val
    return None


def is_usable_image(val: Optional[str]) -> bool:
    if not val:
        return False
    s = str(val).strip()
    return bool(s) and s.lower() not in UNUSABLE_IMAGE_VALUES


def display_sort_key(name: str) -> Tuple[str, str]:
    return (name.lower(), name)
