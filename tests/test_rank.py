"""
Unit and scenario tests for ranking and intent detection.
"""

from offerfinder.models.schemas import (
    Catalog,
    CatalogEntity,
    MatchSettings,
    PaymentKindIntent,
    SelectIntent,
    SourceSpec,
)
from offerfinder.services.entities import build_catalog
from offerfinder.services.rank import (
    classify_intents,
    detect_payment_kind,
    promote_select,
    rank,
    rank_kind,
    section_order,
)
from offerfinder.util.text import normalize


def make_catalog(**names_by_kind):
    cat = Catalog()
    for kind, names in names_by_kind.items():
        for n in names:
            cat.add(CatalogEntity(kind=kind, canonical_name=n, normalized_key=normalize(n)))
    return cat


def names(items):
    return [it.entity.canonical_name for it in items]


class TestClassifyIntents:
    """Test the classify_intents function."""

    def test_select_typos(self):
        """Test near-miss spellings of "select" trigger the select intent."""
        for q in ["select", "selct card", "slect", "SELECT Credit Card"]:
            assert SelectIntent() in classify_intents(q), q

    def test_short_word_not_select(self):
        """Test a too-short word never counts as "select"."""
        assert classify_intents("sel") == []

    def test_payment_kinds(self):
        """Test substring-based payment kind detection."""
        assert classify_intents("hdfc debit") == [PaymentKindIntent(kind="debit")]
        assert classify_intents("phonepe UPI") == [PaymentKindIntent(kind="upi")]
        assert classify_intents("hdfc net banking") == [PaymentKindIntent(kind="netbanking")]

    def test_upi_beats_debit(self):
        """Test precedence when several kinds are mentioned."""
        assert detect_payment_kind("debit upi") == "upi"
        assert detect_payment_kind("netbanking debit") == "netbanking"

    def test_short_keywords(self):
        """Test the "debit card", "dc" and "nb" keywords."""
        assert detect_payment_kind("debit card") == "debit"
        assert detect_payment_kind("sbi dc") == "debit"
        assert detect_payment_kind("nb") == "netbanking"
        assert detect_payment_kind("hdfc nb") == "netbanking"

    def test_hdfc_has_no_keyword(self):
        """Test "hdfc" carries no payment keyword (h-d-f-c has no "dc")."""
        assert detect_payment_kind("hdfc") is None
        assert classify_intents("HDFC") == []

    def test_no_intent(self):
        """Test a plain card name has no intent."""
        assert classify_intents("regalia") == []
        assert detect_payment_kind("regalia") is None


class TestSectionOrder:
    """Test the section_order function."""

    def test_default(self):
        """Test credit-first default."""
        assert section_order([]) == ["credit", "debit", "upi", "netbanking"]

    def test_payment_intents(self):
        """Test each payment kind's order."""
        assert section_order([PaymentKindIntent(kind="debit")]) == ["debit", "credit", "upi", "netbanking"]
        assert section_order([PaymentKindIntent(kind="upi")]) == ["upi", "netbanking", "credit", "debit"]
        assert section_order([PaymentKindIntent(kind="netbanking")]) == ["netbanking", "upi", "credit", "debit"]


class TestRankKind:
    """Test the rank_kind function."""

    def test_truncates_to_fifty(self):
        """Test 60 qualifying candidates come back as exactly 50."""
        cat = make_catalog(credit=[f"Test Card {i:02d}" for i in range(60)])
        items = rank_kind("test card", cat.entities("credit"))
        assert len(items) == 50
        assert names(items)[0] == "Test Card 00"
        assert names(items)[-1] == "Test Card 49"

    def test_custom_cap(self):
        """Test the cap comes from settings."""
        cat = make_catalog(credit=[f"Test Card {i:02d}" for i in range(10)])
        assert len(rank_kind("test card", cat.entities("credit"), MatchSettings(max_suggestions=5))) == 5

    def test_boosts(self):
        """Test substring + fuzzy boosts on top of the base score."""
        cat = make_catalog(credit=["HDFC Regalia"])
        (item,) = rank_kind("Regalia", cat.entities("credit"))
        assert item.score == 100 + 2.0 + 1.5

    def test_ties_break_on_name(self):
        """Test equal scores sort by display name."""
        cat = make_catalog(credit=["b card", "A card"])
        assert names(rank_kind("card", cat.entities("credit"))) == ["A card", "b card"]

    def test_kept_on_score_alone(self):
        """Test a candidate that is neither substring nor fuzzy survives above 0.3."""
        cat = make_catalog(credit=["Cardholders Club", "Zeta Prime"])
        assert names(rank_kind("card gold", cat.entities("credit"))) == ["Cardholders Club"]

    def test_blank_query(self):
        """Test a blank query ranks nothing."""
        cat = make_catalog(credit=["HDFC Regalia"])
        assert rank_kind("   ", cat.entities("credit")) == []


class TestPromoteSelect:
    """Test the promote_select function."""

    def test_stable_partition(self):
        """Test "select" names move up, relative order kept."""
        cat = make_catalog(credit=["Alpha", "Axis Select", "Beta", "SBI SELECT Black"])
        items = rank_kind("a", cat.entities("credit"))
        reordered = names(promote_select(items))
        selects = [n for n in names(items) if "select" in n.lower()]
        others = [n for n in names(items) if "select" not in n.lower()]
        assert reordered == selects + others


class TestRankScenarios:
    """End-to-end ranking scenarios."""

    def test_regalia_query(self):
        """Test "regalia" puts HDFC Regalia at the top of Credit Cards."""
        rows = {"All Cards": [{"Eligible Credit Cards": "HDFC Regalia (Visa Signature), HDFC Millennia"}]}
        cat = build_catalog(rows, [SourceSpec(name="All Cards", location="-", role="catalog")])

        result = rank("regalia", cat)

        credit = result.section("credit")
        assert credit is not None
        assert credit.label == "Credit Cards"
        ranked = names(credit.items)
        assert ranked[0] == "HDFC Regalia"
        # "millennia" is too far from "regalia" to survive the keep filter
        assert "HDFC Millennia" not in ranked
        assert [e.canonical_name for e in result.entities()] == ["HDFC Regalia"]

    def test_select_typo_reorders_every_kind(self):
        """Test "selct card" floats Select cards to the top of each kind."""
        cat = make_catalog(
            credit=["Card Zero", "HDFC Select"],
            debit=["Axis Debit Card", "SBI Select Debit Card"],
        )
        # without the intent, the plain "card" hit outranks the typo hit
        assert names(rank_kind("selct card", cat.entities("credit")))[0] == "Card Zero"

        result = rank("selct card", cat)

        assert SelectIntent() in result.intents
        assert names(result.section("credit").items) == ["HDFC Select", "Card Zero"]
        assert names(result.section("debit").items)[0] == "SBI Select Debit Card"

    def test_debit_query_orders_sections(self):
        """Test "debit" puts Debit Cards first."""
        cat = make_catalog(
            credit=["Debit Plus Credit Card"],
            debit=["SBI Debit Card"],
            upi=["Debit Wallet"],
            netbanking=["Debit Bank"],
        )
        result = rank("debit", cat)
        assert [s.kind for s in result.sections] == ["debit", "credit", "upi", "netbanking"]
        assert [s.label for s in result.sections] == ["Debit Cards", "Credit Cards", "UPI", "Net Banking"]

    def test_dc_query_orders_debit_first(self):
        """Test "sbi dc" puts Debit Cards above Credit Cards."""
        cat = make_catalog(credit=["SBI Card Elite"], debit=["SBI Debit Card"])
        result = rank("sbi dc", cat)
        assert result.intents == [PaymentKindIntent(kind="debit")]
        assert [s.kind for s in result.sections] == ["debit", "credit"]

    def test_debit_card_query_orders_debit_first(self):
        """Test "debit card" puts Debit Cards above Credit Cards."""
        cat = make_catalog(credit=["Debit Card Rewards Credit"], debit=["SBI Debit Card"])
        result = rank("debit card", cat)
        assert [s.kind for s in result.sections] == ["debit", "credit"]

    def test_nb_query_orders_netbanking_first(self):
        """Test "hdfc nb" puts Net Banking above Credit Cards."""
        cat = make_catalog(credit=["HDFC Regalia"], netbanking=["HDFC Bank"])
        result = rank("hdfc nb", cat)
        assert result.intents == [PaymentKindIntent(kind="netbanking")]
        assert [s.kind for s in result.sections] == ["netbanking", "credit"]

    def test_hdfc_query_keeps_default_order(self):
        """Test a plain bank name keeps the credit-first order."""
        cat = make_catalog(credit=["HDFC Regalia"], debit=["HDFC Debit Card"])
        result = rank("hdfc", cat)
        assert result.intents == []
        assert [s.kind for s in result.sections] == ["credit", "debit"]
        assert [e.canonical_name for e in result.entities()] == ["HDFC Regalia", "HDFC Debit Card"]

    def test_only_kinds_with_hits_get_sections(self):
        """Test intent orders sections but never adds empty ones."""
        cat = make_catalog(credit=["HDFC UPI RuPay"], upi=["BHIM UPI"], debit=["SBI Classic"])
        result = rank("upi", cat)
        assert [s.kind for s in result.sections] == ["upi", "credit"]

    def test_empty_catalog_is_no_match(self):
        """Test zero datasets -> no matches for any non-empty query."""
        result = rank("hdfc", Catalog())
        assert result.no_matches is True
        assert result.sections == []

    def test_blank_query_is_not_no_match(self):
        """Test a blank query is simply empty."""
        result = rank("  ", make_catalog(credit=["HDFC Regalia"]))
        assert result.no_matches is False
        assert result.sections == []
