"""
Similarity scoring between a query and a candidate name.

- distance(a, b): Levenshtein edit distance over normalized text (unit costs).
- similarity(a, b): 1 - distance / longer length; 1.0 when both are empty.
- score(query, candidate): 100 on substring hit, else word coverage * 0.7 +
  whole-string similarity * 0.3.
- is_fuzzy_match(query, label): substring, close whole string, or one close
  word pair ("selct" ~ "select").

Everything normalizes first; callers can pass raw display names.
"""

from typing import List, Optional

from rapidfuzz.distance import Levenshtein

from offerfinder.models.schemas import MatchSettings
from offerfinder.util.text import normalize

DEFAULT_SETTINGS = MatchSettings()


def _words(s: str) -> List[str]:
    return [w for w in s.split(" ") if w]


def _ratio(a: str, b: str) -> float:
    # a and b are already normalized
    longest = max(len(a), len(b))
    if not longest:
        return 1.0
    return 1.0 - Levenshtein.distance(a, b) / longest


def distance(a: Optional[str], b: Optional[str]) -> int:
    return Levenshtein.distance(normalize(a), normalize(b))


def similarity(a: Optional[str], b: Optional[str]) -> float:
    return _ratio(normalize(a), normalize(b))


def score(query: str, candidate: str, settings: MatchSettings = DEFAULT_SETTINGS) -> float:
    """
    How well `candidate` answers `query`. Not symmetric.

    Returns:
        float: settings.substring_score (100) when the normalized candidate
        contains the normalized query, else a value in [0, 1]. An empty
        query scores 0.
    """
    qs = normalize(query)
    cs = normalize(candidate)
    if not qs:
        return 0.0
    if qs in cs:
        return settings.substring_score

    q_words = _words(qs)
    c_words = _words(cs)
    covered = sum(1 for qw in q_words if any(qw in cw for cw in c_words))
    coverage = covered / max(1, len(q_words))

    return coverage * settings.coverage_weight + _ratio(qs, cs) * settings.whole_similarity_weight


def is_fuzzy_match(query: str, label: str, settings: MatchSettings = DEFAULT_SETTINGS) -> bool:
    q = normalize(query)
    lab = normalize(label)
    if not q or not lab:
        return False

    if q in lab:
        return True

    if _ratio(q, lab) >= settings.whole_similarity_threshold:
        return True

    # per-word: lets a 5-letter typo of a 6-letter word through
    min_len = settings.min_fuzzy_word_length
    label_words = [w for w in _words(lab) if len(w) >= min_len]
    for qw in _words(q):
        if len(qw) < min_len:
            continue
        for lw in label_words:
            if _ratio(qw, lw) >= settings.word_similarity_threshold:
                return True
    return False
