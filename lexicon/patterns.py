"""
Centralized lookups for the offer catalog.

- LIST_FIELDS: acceptable header aliases per semantic field (first present wins).
- BRAND_CANONICAL: lowercase brand token -> canonical casing (whole words only).
- SECTION_LABELS / SECTION_ORDERS: dropdown headings and payment-intent orders.
- DEFAULT_SOURCES: the datasets we load, in dedup priority order.
- VARIANT_NOTE_SOURCES: sources allowed to show the "only on <variant>" note.

These live here so matching code stays readable and we change lookups in one place.
"""


# Header aliases. CSVs from different merchants don't agree on column names,
# so every field is a list and lookups take the first non-blank one.
LIST_FIELDS = {
    "credit": ["Eligible Credit Cards", "Eligible Cards"],
    "debit": ["Eligible Debit Cards", "Applicable Debit Cards"],
    "upi": ["UPI"],
    "netbanking": ["Net Banking"],
    "title": ["Offer", "Title"],
    "image": ["Image", "Credit Card Image", "Offer Image", "image", "Image URL"],
    "link": ["Link", "Offer Link"],
    "desc": ["Description", "Details", "Offer Description", "Flight Benefit"],
    # permanent (inbuilt) benefits file
    "permanent_card": ["Eligible Credit Cards"],
    "permanent_benefit": ["Grocery Benefits", "Benefit", "Offer", "Hotel Benefit"],
}

# Some sheets only carry the merchant name; used as a title fallback.
TITLE_FALLBACK_FIELD = "Website"

# Brand spellings we fix up before building display names.
# Keys are lowercase; values are desired output.
BRAND_CANONICAL = {
    "makemytrip": "MakeMyTrip",
    "icici": "ICICI",
    "hdfc": "HDFC",
    "sbi": "SBI",
    "idfc": "IDFC",
    "pnb": "PNB",
    "rbl": "RBL",
    "yes": "YES",
}

# Kind value -> dropdown heading
SECTION_LABELS = {
    "credit": "Credit Cards",
    "debit": "Debit Cards",
    "upi": "UPI",
    "netbanking": "Net Banking",
}

# Section order per detected payment kind ("credit" doubles as the default)
SECTION_ORDERS = {
    "credit": ["credit", "debit", "upi", "netbanking"],
    "debit": ["debit", "credit", "upi", "netbanking"],
    "upi": ["upi", "netbanking", "credit", "debit"],
    "netbanking": ["netbanking", "upi", "credit", "debit"],
}

# Substring checks on the lowercased raw query. Checked in this order; first hit wins.
PAYMENT_INTENT_KEYWORDS = [
    ("upi", ["upi"]),
    ("netbanking", ["net banking", "netbanking", "nb"]),
    ("debit", ["debit card", "debit", "dc"]),
]

SELECT_WORD = "select"
SELECT_PHRASES = ["select credit card", "select card"]

# Values that mean "no image" in the sheets
UNUSABLE_IMAGE_VALUES = {"na", "n/a", "null", "undefined", "-", "image unavailable"}

# name, file, role, heading. Offer sources are listed in dedup priority order.
DEFAULT_SOURCES = [
    {"name": "All Cards", "file": "allCards.csv", "role": "catalog", "title": None},
    {"name": "Permanent", "file": "permanent_offers.csv", "role": "permanent", "title": "Permanent Offers"},
    {"name": "Blinkit", "file": "blinkit.csv", "role": "offers", "title": "Offers On Blinkit"},
    {"name": "Swiggy Instamart", "file": "swiggy_instamart.csv", "role": "offers", "title": "Offers On Swiggy Instamart"},
    {"name": "Zepto", "file": "zepto.csv", "role": "offers", "title": "Offers On Zepto"},
    {"name": "BigBasket", "file": "bigbasket.csv", "role": "offers", "title": "Offers On BigBasket"},
]

# Sources that show the red per-card "applicable only on {variant} variant" note
VARIANT_NOTE_SOURCES = {
    "EaseMyTrip",
    "Yatra (Domestic)",
    "Yatra (International)",
    "Ixigo",
    "MakeMyTrip",
    "ClearTrip",
    "Goibibo",
    "Airline",
    "Permanent",
    "Blinkit",
    "Swiggy Instamart",
}
