"""
Entity extraction rules:
- A list cell looks like "HDFC Regalia (Visa Signature), Hdfc Millennia\nSBI Cashback".
  Newlines become spaces, then we split on commas and drop blanks.

- Each mention splits into:
    base    -> "HDFC Regalia"     (entity identity)
    variant -> "Visa Signature"   (only the LAST trailing parenthetical)
  "Axis (Old) Magnus (Visa)" keeps "(Old)" inside the base.

- Brand casing is fixed on whole words ("Hdfc" -> "HDFC", never "Hdfcx").

- Catalog:
    * credit/debit entries come from "catalog" sources (the all-cards sheet)
    * upi/netbanking entries come from "offers" sources
    * first display name seen for a normalized key wins

- Chip strips ("cards which have offers") come from "offers" sources plus the
  card column of the "permanent" source (credit only).
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from lexicon.patterns import BRAND_CANONICAL, LIST_FIELDS
from offerfinder.models.schemas import (
    KINDS,
    Catalog,
    CatalogEntity,
    Datasets,
    Row,
    SourceSpec,
)
from offerfinder.util.logger import get_logger
from offerfinder.util.text import display_sort_key, first_field, normalize

# Trailing "(...)" group, anchored at the very end
TRAILING_PAREN_PAT = re.compile(r"\s*\([^)]*\)\s*$")
VARIANT_PAT = re.compile(r"\(([^)]+)\)\s*$")

BRAND_PAT = re.compile(
    r"\b(" + "|".join(re.escape(k) for k in sorted(BRAND_CANONICAL, key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)


def split_list(val: Optional[str]) -> List[str]:
    """'A, B\\nC,,' -> ['A', 'B C']"""
    if not val:
        return []
    parts = str(val).replace("\n", " ").split(",")
    return [p.strip() for p in parts if p.strip()]


def extract_base(raw_name: Optional[str]) -> str:
    """'HDFC Regalia (Visa Signature)' -> 'HDFC Regalia'"""
    if not raw_name:
        return ""
    return TRAILING_PAREN_PAT.sub("", str(raw_name)).strip()


def extract_variant(raw_name: Optional[str]) -> str:
    """'HDFC Regalia (Visa Signature)' -> 'Visa Signature'; '' when there is none."""
    if not raw_name:
        return ""
    m = VARIANT_PAT.search(str(raw_name))
    return m.group(1).strip() if m else ""


def brand_canonicalize(text: Optional[str]) -> str:
    """'Hdfc bank' -> 'HDFC bank'. Whole words only, case-insensitive."""
    return BRAND_PAT.sub(lambda m: BRAND_CANONICAL[m.group(1).lower()], str(text or ""))


def canonical_name(raw_name: Optional[str]) -> str:
    return brand_canonicalize(extract_base(raw_name))


def entity_from_name(name: str, kind: str) -> CatalogEntity:
    """Build an entity from any raw mention (variant dropped, brand casing fixed)."""
    display = canonical_name(name)
    return CatalogEntity(kind=kind, canonical_name=display, normalized_key=normalize(display))


def mentions(row: Row, kind: str) -> List[str]:
    return split_list(first_field(row, LIST_FIELDS[kind]))


def _harvest(rows: Iterable[Row], field: str, into: Dict[str, str], whole_cell: bool = False) -> None:
    for row in rows or []:
        if whole_cell:
            cell = first_field(row, LIST_FIELDS[field])
            raws = [cell] if cell else []
        else:
            raws = mentions(row, field)
        for raw in raws:
            base = canonical_name(raw)
            key = normalize(base)
            if key and key not in into:
                into[key] = base


def _sources_with_role(sources: Iterable[SourceSpec], role: str) -> List[SourceSpec]:
    return [s for s in sources if s.role == role]


def build_catalog(datasets: Datasets, sources: List[SourceSpec]) -> Catalog:
    """
    Rebuild the dropdown catalog from whatever has loaded so far.

    Missing datasets count as empty; the result is sorted by display name per kind.
    """
    logger = get_logger()
    found: Dict[str, Dict[str, str]] = {k: {} for k in KINDS}

    for src in _sources_with_role(sources, "catalog"):
        rows = datasets.get(src.name, [])
        _harvest(rows, "credit", found["credit"])
        _harvest(rows, "debit", found["debit"])

    for src in _sources_with_role(sources, "offers"):
        rows = datasets.get(src.name, [])
        _harvest(rows, "upi", found["upi"])
        _harvest(rows, "netbanking", found["netbanking"])

    catalog = Catalog()
    for kind in KINDS:
        for display in sorted(found[kind].values(), key=display_sort_key):
            catalog.add(CatalogEntity(kind=kind, canonical_name=display, normalized_key=normalize(display)))

    logger.info(
        "Built catalog: "
        + ", ".join(f"{k}={len(catalog.entities(k))}" for k in KINDS)
    )
    return catalog


def harvest_chips(datasets: Datasets, sources: List[SourceSpec]) -> Dict[str, List[str]]:
    """Per kind, sorted display names that actually appear in an offer sheet."""
    found: Dict[str, Dict[str, str]] = {k: {} for k in KINDS}

    for src in _sources_with_role(sources, "offers"):
        rows = datasets.get(src.name, [])
        for kind in KINDS:
            _harvest(rows, kind, found[kind])

    for src in _sources_with_role(sources, "permanent"):
        _harvest(datasets.get(src.name, []), "permanent_card", found["credit"], whole_cell=True)

    return {k: sorted(found[k].values(), key=display_sort_key) for k in KINDS}
