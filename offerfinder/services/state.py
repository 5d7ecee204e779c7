"""
View-state reducer: (state, event) -> new state.

- DatasetsLoaded: merge the loaded sheets, rebuild catalog + chip strips, then
  recompute whatever is on screen (offers if something is selected, else the
  dropdown for the current query).
- QueryChanged: clear the selection and re-rank.
- EntitySelected: pin the entity (from the dropdown or a chip), close the
  dropdown and resolve its offers.

States are frozen; every event returns a fresh copy.
"""

from typing import Iterable, List

from lexicon.patterns import VARIANT_NOTE_SOURCES
from offerfinder.models.schemas import (
    DatasetsLoaded,
    EntitySelected,
    Event,
    MatchSettings,
    QueryChanged,
    SourceSpec,
    SuggestionList,
    ViewState,
)
from offerfinder.services.entities import build_catalog, entity_from_name, harvest_chips
from offerfinder.services.rank import rank
from offerfinder.services.resolve import has_offers, resolve
from offerfinder.services.similarity import DEFAULT_SETTINGS
from offerfinder.util.logger import get_logger


def _query_status(query: str, suggestions: SuggestionList) -> str:
    if not query.strip():
        return "idle"
    return "no_match" if suggestions.no_matches else "suggestions"


def reduce(state: ViewState, event: Event, sources: List[SourceSpec],
           settings: MatchSettings = DEFAULT_SETTINGS,
           variant_note_sources: Iterable[str] = VARIANT_NOTE_SOURCES) -> ViewState:
    logger = get_logger()

    if isinstance(event, DatasetsLoaded):
        datasets = {**state.datasets, **event.datasets}
        catalog = build_catalog(datasets, sources)
        chips = harvest_chips(datasets, sources)
        logger.info(f"Datasets loaded: {sorted(event.datasets)}; catalog size {len(catalog)}")

        if state.selected is not None:
            offers = resolve(state.selected, datasets, sources, variant_note_sources)
            return state.model_copy(update={
                "datasets": datasets, "catalog": catalog, "chips": chips,
                "offers": offers,
                "status": "offers" if has_offers(offers) else "no_offers",
            })

        suggestions = rank(state.query, catalog, settings)
        return state.model_copy(update={
            "datasets": datasets, "catalog": catalog, "chips": chips,
            "suggestions": suggestions,
            "status": _query_status(state.query, suggestions),
        })

    if isinstance(event, QueryChanged):
        suggestions = rank(event.text, state.catalog, settings)
        return state.model_copy(update={
            "query": event.text,
            "selected": None,
            "offers": {},
            "suggestions": suggestions,
            "status": _query_status(event.text, suggestions),
        })

    if isinstance(event, EntitySelected):
        picked = entity_from_name(event.name, event.kind)
        entity = state.catalog.get(picked.kind, picked.normalized_key) or picked
        offers = resolve(entity, state.datasets, sources, variant_note_sources)
        return state.model_copy(update={
            "query": entity.canonical_name,
            "selected": entity,
            "suggestions": SuggestionList(),
            "offers": offers,
            "status": "offers" if has_offers(offers) else "no_offers",
        })

    raise ValueError(f"Unknown event: {event!r}")
