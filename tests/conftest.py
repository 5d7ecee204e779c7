"""Shared sources and sample sheets for the offer finder tests."""

import pytest

from offerfinder.models.schemas import SourceSpec


@pytest.fixture
def sources():
    return [
        SourceSpec(name="All Cards", location="allCards.csv", role="catalog"),
        SourceSpec(name="Permanent", location="permanent_offers.csv", role="permanent", title="Permanent Offers"),
        SourceSpec(name="Blinkit", location="blinkit.csv", role="offers", title="Offers On Blinkit"),
        SourceSpec(name="Swiggy Instamart", location="swiggy_instamart.csv", role="offers"),
        SourceSpec(name="Zepto", location="zepto.csv", role="offers"),
    ]


@pytest.fixture
def datasets():
    return {
        "All Cards": [
            {"Eligible Credit Cards": "HDFC Regalia (Visa Signature), Hdfc Millennia",
             "Eligible Debit Cards": "SBI Classic Debit"},
            {"Eligible Credit Cards": "Axis Select,\nICICI Amazon Pay", "Eligible Debit Cards": ""},
        ],
        "Permanent": [
            {"Eligible Credit Cards": "HDFC Regalia", "Grocery Benefits": "4 reward points per Rs 150"},
        ],
        "Blinkit": [
            {"Offer": "10% off on groceries", "Description": "Up to Rs 150",
             "Eligible Credit Cards": "HDFC Regalia (Visa Signature), SBI SimplyCLICK",
             "UPI": "PhonePe", "Link": "https://blinkit.com/offers/hdfc"},
        ],
        "Swiggy Instamart": [
            {"Title": "Rs 100 off", "Details": "Net banking orders",
             "Net Banking": "HDFC Bank", "Offer Link": "https://swiggy.com/nb"},
        ],
        "Zepto": [
            {"Offer": "Rs 50 off", "Description": "Debit orders",
             "Eligible Debit Cards": "SBI Classic Debit (Visa)", "Link": "https://zepto.com/dc"},
        ],
    }
