"""
Ranking rules (one independent ranking per kind):
- score(query, name), +2.0 if the name contains the raw lowercased query,
  +1.5 if it is a fuzzy match.
- Keep substring hits, fuzzy hits, and anything scoring above 0.3.
- Sort by score desc, then display name; cap at 50 per kind.
- Nothing left in any kind -> SuggestionList(no_matches=True).

Intents are classified once per query, separately from scoring:
- SelectIntent: "select card", "select credit card", or any word close to
  "select" ("selct", "slect") -> names containing "select" float to the top of
  each kind, order otherwise kept.
- PaymentKindIntent: "upi" / "net banking" / "debit" in the raw query decide
  which section comes first. It never hides a kind.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from lexicon.patterns import (
    PAYMENT_INTENT_KEYWORDS,
    SECTION_LABELS,
    SECTION_ORDERS,
    SELECT_PHRASES,
    SELECT_WORD,
)
from offerfinder.models.schemas import (
    KINDS,
    Catalog,
    CatalogEntity,
    Intent,
    MatchSettings,
    PaymentKindIntent,
    SelectIntent,
    SuggestionItem,
    SuggestionList,
    SuggestionSection,
)
from offerfinder.services.similarity import DEFAULT_SETTINGS, is_fuzzy_match, score, similarity
from offerfinder.util.logger import get_logger
from offerfinder.util.text import display_sort_key, normalize


# ---------- intents ----------

def _has_select_word(words: Iterable[str], settings: MatchSettings) -> bool:
    for w in words:
        if w == SELECT_WORD:
            return True
        if len(w) < settings.min_fuzzy_word_length:
            continue
        if similarity(w, SELECT_WORD) >= settings.select_similarity_threshold:
            return True
    return False


def detect_payment_kind(query: str) -> Optional[str]:
    """Substring checks on the lowercased raw query; None means no preference."""
    low = query.strip().lower()
    for kind, keywords in PAYMENT_INTENT_KEYWORDS:
        if any(k in low for k in keywords):
            return kind
    return None


def classify_intents(query: str, settings: MatchSettings = DEFAULT_SETTINGS) -> List[Intent]:
    q_norm = normalize(query)
    intents: List[Intent] = []

    if any(p in q_norm for p in SELECT_PHRASES) or _has_select_word(q_norm.split(), settings):
        intents.append(SelectIntent())

    kind = detect_payment_kind(query)
    if kind:
        intents.append(PaymentKindIntent(kind=kind))
    return intents


def promote_select(items: List[SuggestionItem]) -> List[SuggestionItem]:
    """Stable partition: names containing "select" first."""
    hits = [it for it in items if SELECT_WORD in normalize(it.entity.canonical_name)]
    rest = [it for it in items if SELECT_WORD not in normalize(it.entity.canonical_name)]
    return hits + rest


def section_order(intents: Iterable[Intent]) -> List[str]:
    for intent in intents:
        if isinstance(intent, PaymentKindIntent):
            return list(SECTION_ORDERS[intent.kind])
    return list(SECTION_ORDERS["credit"])


def apply_intents(per_kind: Dict[str, List[SuggestionItem]], intents: Iterable[Intent]) -> Dict[str, List[SuggestionItem]]:
    out = dict(per_kind)
    for intent in intents:
        if isinstance(intent, SelectIntent):
            out = {k: promote_select(v) for k, v in out.items()}
    return out


# ---------- ranking ----------

def rank_kind(query: str, entities: Iterable[CatalogEntity], settings: MatchSettings = DEFAULT_SETTINGS) -> List[SuggestionItem]:
    """Score, filter, sort and cap one kind's candidates."""
    trimmed = query.strip()
    if not trimmed:
        return []
    q_lower = trimmed.lower()

    kept: List[SuggestionItem] = []
    for ent in entities:
        s = score(trimmed, ent.canonical_name, settings)
        inc = q_lower in ent.canonical_name.lower()
        fuzzy = is_fuzzy_match(trimmed, ent.canonical_name, settings)
        if inc:
            s += settings.substring_boost
        if fuzzy:
            s += settings.fuzzy_boost
        if inc or fuzzy or s > settings.keep_threshold:
            kept.append(SuggestionItem(entity=ent, score=s))

    kept.sort(key=lambda it: (-it.score, display_sort_key(it.entity.canonical_name)))
    return kept[: settings.max_suggestions]


def rank(query: str, catalog: Catalog, settings: MatchSettings = DEFAULT_SETTINGS) -> SuggestionList:
    """
    Full dropdown for one query.

    Returns:
        SuggestionList: sections in intent order, only for kinds with hits.
        Blank query -> empty list; no hits anywhere -> no_matches=True.
    """
    logger = get_logger()
    if not query or not query.strip():
        return SuggestionList()

    per_kind = {k: rank_kind(query, catalog.entities(k), settings) for k in KINDS}
    if not any(per_kind.values()):
        logger.debug(f"No entity matches for query {query!r}")
        return SuggestionList(no_matches=True)

    intents = classify_intents(query, settings)
    per_kind = apply_intents(per_kind, intents)

    sections = [
        SuggestionSection(kind=k, label=SECTION_LABELS[k], items=per_kind[k])
        for k in section_order(intents)
        if per_kind[k]
    ]
    logger.debug(
        f"Ranked {query!r}: "
        + ", ".join(f"{s.kind}={len(s.items)}" for s in sections)
        + f" intents={[i.tag for i in intents]}"
    )
    return SuggestionList(sections=sections, intents=intents)
