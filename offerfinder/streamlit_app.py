"""
Streamlit front-end for the offer finder.

- Loads every configured sheet once (cached per sheet) via `iter_loads()`;
  each finished sheet is dispatched as its own DatasetsLoaded event.
- Feeds user actions through `reduce()` as events; the ViewState in
  `st.session_state` is the only thing this page reads from.
- Shows chip strips of cards that have offers, a search box with a sectioned
  dropdown, and offer cards grouped by source.

Goal: type a card / UPI app / bank name, see every offer that applies to it.
No matching logic lives here.
"""

from __future__ import annotations

# --- ensure package imports work when launched directly ---
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from typing import Dict, List

import streamlit as st

# --- Internal modules ---
from lexicon.patterns import SECTION_LABELS
from offerfinder.config import load_settings, load_sources
from offerfinder.models.schemas import (
    DatasetsLoaded,
    EntitySelected,
    OfferMatch,
    QueryChanged,
    Row,
    ViewState,
)
from offerfinder.services.load import iter_loads, load_csv
from offerfinder.services.state import reduce

# ---------------------------- Page setup ----------------------------

st.set_page_config(page_title="Card Offer Finder", layout="wide")
st.title("Card Offer Finder")
st.caption("Type a Credit Card, Debit Card, UPI, or Net Banking name → see the offers that apply.")

SOURCES = load_sources()
SETTINGS = load_settings()
HEADINGS = {s.name: s.heading for s in SOURCES}
PERMANENT = {s.name for s in SOURCES if s.role == "permanent"}

with st.sidebar:
    st.header("How it works")
    st.markdown(
        "- Offer sheets are loaded once; a broken sheet just shows no offers.\n"
        "- Search is typo-tolerant (\"selct\" still finds *Select* cards).\n"
        "- Typing *debit*, *UPI* or *net banking* moves that section to the top.\n"
        "- The same offer listed on two sites is shown once."
    )
    st.divider()
    st.markdown(
        "**Disclaimer:** offers are listed for information only. Verify terms "
        "with the merchant before you buy."
    )


# ---------------------------- Helpers ----------------------------

# runs in loader threads, so no spinner here
@st.cache_data(show_spinner=False)
def cached_csv(location: str, source: str) -> List[Row]:
    return load_csv(location, source)


def dispatch(event) -> None:
    st.session_state["view"] = reduce(st.session_state["view"], event, SOURCES, SETTINGS)


def on_query_change() -> None:
    dispatch(QueryChanged(text=st.session_state["query_box"]))


def on_pick(kind: str, name: str) -> None:
    dispatch(EntitySelected(kind=kind, name=name))
    st.session_state["query_box"] = st.session_state["view"].query


def render_chips(chips: Dict[str, List[str]]) -> None:
    if not any(chips.values()):
        return
    st.subheader("Cards Which Have Offers")
    for kind in ("credit", "debit", "upi", "netbanking"):
        names = chips.get(kind, [])
        if not names:
            continue
        st.markdown(f"**{SECTION_LABELS[kind]}:**")
        cols = st.columns(min(len(names), 6))
        for i, name in enumerate(names):
            cols[i % len(cols)].button(
                name, key=f"chip-{kind}-{i}", on_click=on_pick, args=(kind, name),
                help="Click to select",
            )


def render_offer(m: OfferMatch) -> None:
    o = m.offer
    with st.container(border=True):
        if o.image:
            st.image(o.image)
        st.markdown(f"### {o.title or 'Offer'}")
        if m.source in PERMANENT:
            if o.benefit:
                st.write(o.benefit)
            st.markdown("**This is an inbuilt feature of this credit card**")
        elif o.description:
            st.write(o.description)
        if m.show_variant:
            st.markdown(
                f":red[**Note:** This benefit is applicable only on *{m.variant}* variant]"
            )
        if o.link:
            st.link_button("View Offer", o.link)


# ---------------------------- Main run ----------------------------

if "view" not in st.session_state:
    st.session_state["view"] = ViewState()
    # each finished sheet is merged in on its own
    with st.spinner("Loading offers…"):
        for name, rows, reason in iter_loads(SOURCES, loader=cached_csv):
            if reason is not None:
                st.warning(f"Could not load {name}: {reason}")
            dispatch(DatasetsLoaded(datasets={name: rows}))

view: ViewState = st.session_state["view"]

render_chips(view.chips)

st.text_input(
    "Search",
    key="query_box",
    on_change=on_query_change,
    placeholder="Type a Credit Card, Debit Card, UPI, or Net Banking...",
)

view = st.session_state["view"]

if view.status == "suggestions":
    for sec in view.suggestions.sections:
        st.markdown(f"**{sec.label}**")
        for i, item in enumerate(sec.items):
            st.button(
                item.entity.canonical_name,
                key=f"pick-{sec.kind}-{i}",
                on_click=on_pick,
                args=(sec.kind, item.entity.canonical_name),
            )

elif view.status == "no_match":
    st.error("No matching card/payment method found. Please try a different name.")

elif view.status == "no_offers":
    st.info(f"No offers found for {view.selected.canonical_name} right now.")

elif view.status == "offers":
    for source, matches in view.offers.items():
        if not matches:
            continue
        st.markdown(f"## {HEADINGS.get(source, source)}")
        cols = st.columns(3)
        for i, m in enumerate(matches):
            with cols[i % 3]:
                render_offer(m)
