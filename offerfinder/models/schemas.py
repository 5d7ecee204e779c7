"""
Data shapes for the offer finder.

- CatalogEntity: one canonical payment instrument (kind + display name + key).
- Catalog: entities keyed by (kind, normalized_key); re-adding merges.
- OfferRecord: one CSV row from a source dataset, with typed accessors.
- OfferMatch: an offer that references the selected entity (+ optional variant).
- SuggestionItem / SuggestionSection / SuggestionList: ranked dropdown output.
- SelectIntent / PaymentKindIntent: what the query "means" beyond its score.
- MatchSettings / SourceSpec: tuned numbers (env-overridable) and dataset sources.
- ViewState + events: one immutable value per user interaction.

If I need a new field on an offer card, I add an accessor to `OfferRecord` here
first and then surface it in `streamlit_app.py`.
"""

from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lexicon.patterns import LIST_FIELDS, TITLE_FALLBACK_FIELD
from offerfinder.util.text import first_field, is_usable_image

Kind = Literal["credit", "debit", "upi", "netbanking"]
KINDS: Tuple[Kind, ...] = ("credit", "debit", "upi", "netbanking")

SourceRole = Literal["catalog", "offers", "permanent"]
Row = Dict[str, str]
Datasets = Dict[str, List[Row]]


class CatalogEntity(BaseModel):
    """
    A canonical instrument, e.g. (credit, "HDFC Regalia", "hdfc regalia").

    Identity is (kind, normalized_key); canonical_name is just what we show.
    """

    model_config = ConfigDict(frozen=True)

    kind: Kind
    canonical_name: str
    normalized_key: str

    @property
    def identity(self) -> Tuple[str, str]:
        return (self.kind, self.normalized_key)


class Catalog(BaseModel):
    """Entities per kind, keyed by normalized key. First display name seen wins."""

    by_kind: Dict[str, Dict[str, CatalogEntity]] = Field(default_factory=dict)

    def add(self, entity: CatalogEntity) -> CatalogEntity:
        bucket = self.by_kind.setdefault(entity.kind, {})
        return bucket.setdefault(entity.normalized_key, entity)

    def get(self, kind: str, key: str) -> Optional[CatalogEntity]:
        return self.by_kind.get(kind, {}).get(key)

    def entities(self, kind: str) -> List[CatalogEntity]:
        return list(self.by_kind.get(kind, {}).values())

    def __len__(self) -> int:
        return sum(len(b) for b in self.by_kind.values())


class OfferRecord(BaseModel):
    """
    One row from an offer dataset.

    Opaque beyond the accessors below; every accessor goes through the header
    aliases in `lexicon.patterns.LIST_FIELDS`.
    """

    model_config = ConfigDict(frozen=True)

    row: Row
    source: str

    def lookup(self, name: str) -> Optional[str]:
        return first_field(self.row, LIST_FIELDS[name])

    @property
    def title(self) -> str:
        return self.lookup("title") or self.row.get(TITLE_FALLBACK_FIELD) or ""

    @property
    def description(self) -> str:
        return self.lookup("desc") or ""

    @property
    def benefit(self) -> str:
        return self.lookup("permanent_benefit") or ""

    @property
    def link(self) -> Optional[str]:
        return self.lookup("link")

    @property
    def image(self) -> Optional[str]:
        img = self.lookup("image")
        return img if is_usable_image(img) else None


class OfferMatch(BaseModel):
    """An offer that references the selected entity."""

    offer: OfferRecord
    source: str
    variant: Optional[str] = None      # e.g. "Visa Signature"
    show_variant: bool = False         # source is on the variant-note allow-list


class SuggestionItem(BaseModel):
    entity: CatalogEntity
    score: float


class SuggestionSection(BaseModel):
    kind: Kind
    label: str
    items: List[SuggestionItem] = Field(default_factory=list)


class SelectIntent(BaseModel):
    """Query asks for a "Select" card (typos like "selct" included)."""

    tag: Literal["select"] = "select"


class PaymentKindIntent(BaseModel):
    """Query names a payment kind; that section goes first."""

    tag: Literal["payment_kind"] = "payment_kind"
    kind: Kind


Intent = Annotated[Union[SelectIntent, PaymentKindIntent], Field(discriminator="tag")]


class SuggestionList(BaseModel):
    """
    Sectioned dropdown content for one query.

    no_matches is the "nothing matched anywhere" state; it is not an error.
    An empty query yields no sections and no_matches=False.
    """

    sections: List[SuggestionSection] = Field(default_factory=list)
    no_matches: bool = False
    intents: List[Intent] = Field(default_factory=list)

    def entities(self) -> List[CatalogEntity]:
        return [item.entity for sec in self.sections for item in sec.items]

    def section(self, kind: str) -> Optional[SuggestionSection]:
        for sec in self.sections:
            if sec.kind == kind:
                return sec
        return None


class MatchSettings(BaseSettings):
    """
    Tuned matching numbers. Defaults are the values the browser has always used;
    they have no derivation beyond "works on our card names".

    Every field can be overridden from the environment as OFFERFINDER_<FIELD>,
    e.g. OFFERFINDER_MAX_SUGGESTIONS=20. Blank values are ignored.
    """

    model_config = SettingsConfigDict(
        env_prefix="OFFERFINDER_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    whole_similarity_threshold: float = 0.6
    word_similarity_threshold: float = 0.7
    select_similarity_threshold: float = 0.7
    min_fuzzy_word_length: int = 3
    coverage_weight: float = 0.7
    whole_similarity_weight: float = 0.3
    substring_score: float = 100.0
    substring_boost: float = 2.0
    fuzzy_boost: float = 1.5
    keep_threshold: float = 0.3
    max_suggestions: int = Field(default=50, ge=1)


class SourceSpec(BaseModel):
    """
    One dataset to load.

    - role "catalog": the all-cards list (credit/debit dropdown entries only)
    - role "offers": a retail offer sheet
    - role "permanent": inbuilt credit-card benefits (credit selections only)
    """

    name: str
    location: str
    role: SourceRole = "offers"
    title: Optional[str] = None

    @property
    def heading(self) -> str:
        return self.title or self.name


class LoadReport(BaseModel):
    """Result of loading every source. Failed sources map to [] in `datasets`."""

    datasets: Datasets = Field(default_factory=dict)
    failed: Dict[str, str] = Field(default_factory=dict)


# ---------- interaction state ----------

ViewStatus = Literal["idle", "suggestions", "no_match", "offers", "no_offers"]


class QueryChanged(BaseModel):
    type: Literal["query_changed"] = "query_changed"
    text: str


class EntitySelected(BaseModel):
    type: Literal["entity_selected"] = "entity_selected"
    kind: Kind
    name: str


class DatasetsLoaded(BaseModel):
    type: Literal["datasets_loaded"] = "datasets_loaded"
    datasets: Datasets


Event = Annotated[Union[QueryChanged, EntitySelected, DatasetsLoaded], Field(discriminator="type")]


class ViewState(BaseModel):
    """Everything the front-end needs to draw one frame."""

    model_config = ConfigDict(frozen=True)

    datasets: Datasets = Field(default_factory=dict)
    catalog: Catalog = Field(default_factory=Catalog)
    chips: Dict[str, List[str]] = Field(default_factory=dict)
    query: str = ""
    suggestions: SuggestionList = Field(default_factory=SuggestionList)
    selected: Optional[CatalogEntity] = None
    offers: Dict[str, List[OfferMatch]] = Field(default_factory=dict)
    status: ViewStatus = "idle"
