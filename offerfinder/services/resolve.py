"""
Offer resolution for a selected entity.

- Match: a row matches when one of its mentions (in the list column for the
  entity's kind) has a base name whose normalized form equals the entity key.
  The first matching mention wins and its variant rides along.
- De-dupe: one seen-set of (title, description, image, link) keys shared across
  ALL sources, walked in priority order; later duplicates are dropped.
- Permanent (inbuilt) benefits are consulted first, and only for credit cards.

This runs on every selection change and every dataset reload; it is pure.
"""

from typing import Dict, Iterable, List, Optional, Set, Tuple

from lexicon.patterns import LIST_FIELDS, VARIANT_NOTE_SOURCES
from offerfinder.models.schemas import (
    CatalogEntity,
    Datasets,
    OfferMatch,
    OfferRecord,
    Row,
    SourceSpec,
)
from offerfinder.services.entities import canonical_name, extract_variant, mentions
from offerfinder.util.logger import get_logger
from offerfinder.util.text import first_field, normalize, normalize_url


def offer_key(offer: OfferRecord) -> str:
    """
    Define 'uniqueness' for offers.

    Same title + description + image + link (all normalized) is the same offer,
    no matter which sheet it came from.
    """
    return "||".join((
        normalize(offer.title),
        normalize(offer.description),
        normalize_url(offer.lookup("image")),
        normalize_url(offer.link),
    ))


def match_row(row: Row, kind: str, entity_key: str, permanent: bool = False) -> Tuple[bool, Optional[str]]:
    """
    Does this row reference the entity?

    Permanent rows name one card per row (the whole cell is the name);
    everything else is a comma list.

    Returns:
        (matched, variant): variant is None when the winning mention had none.
    """
    if permanent:
        cell = first_field(row, LIST_FIELDS["permanent_card"])
        raws = [cell] if cell else []
    else:
        raws = mentions(row, kind)

    for raw in raws:
        if normalize(canonical_name(raw)) == entity_key:
            return True, extract_variant(raw) or None
    return False, None


def matches_for(rows: Iterable[Row], entity: CatalogEntity, source: str,
                permanent: bool = False, variant_note_sources: Iterable[str] = VARIANT_NOTE_SOURCES) -> List[OfferMatch]:
    show = source in set(variant_note_sources)
    out: List[OfferMatch] = []
    for row in rows or []:
        hit, variant = match_row(row, entity.kind, entity.normalized_key, permanent=permanent)
        if hit:
            out.append(OfferMatch(
                offer=OfferRecord(row=row, source=source),
                source=source,
                variant=variant,
                show_variant=show and bool(variant),
            ))
    return out


def dedupe(matches: List[OfferMatch], seen: Set[str]) -> List[OfferMatch]:
    """Drop matches whose key is already in `seen`; adds kept keys to `seen`."""
    out: List[OfferMatch] = []
    for m in matches:
        k = offer_key(m.offer)
        if k in seen:
            continue
        seen.add(k)
        out.append(m)
    return out


def resolution_order(entity: CatalogEntity, sources: List[SourceSpec]) -> List[SourceSpec]:
    """Permanent sources first (credit only), then offer sources in configured order."""
    order: List[SourceSpec] = []
    if entity.kind == "credit":
        order.extend(s for s in sources if s.role == "permanent")
    order.extend(s for s in sources if s.role == "offers")
    return order


def resolve(entity: CatalogEntity, datasets: Datasets, sources: List[SourceSpec],
            variant_note_sources: Iterable[str] = VARIANT_NOTE_SOURCES) -> Dict[str, List[OfferMatch]]:
    """
    Group offers that reference `entity` by source name.

    Returns:
        Dict[str, List[OfferMatch]]: one entry per consulted source, in priority
        order (possibly empty lists). Nothing at all -> every list empty.
    """
    logger = get_logger()
    seen: Set[str] = set()
    allow = set(variant_note_sources)
    groups: Dict[str, List[OfferMatch]] = {}

    for src in resolution_order(entity, sources):
        rows = datasets.get(src.name, [])
        found = matches_for(rows, entity, src.name, permanent=src.role == "permanent", variant_note_sources=allow)
        groups[src.name] = dedupe(found, seen)
        if len(found) != len(groups[src.name]):
            logger.debug(f"{src.name}: dropped {len(found) - len(groups[src.name])} duplicate offers")

    total = sum(len(v) for v in groups.values())
    logger.debug(f"Resolved {entity.kind}:{entity.canonical_name!r} -> {total} offers")
    return groups


def has_offers(groups: Dict[str, List[OfferMatch]]) -> bool:
    return any(groups.values())
