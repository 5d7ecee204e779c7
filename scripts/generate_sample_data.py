import os

import pandas as pd

out_dir = os.path.join(os.path.dirname(__file__), "..", "data")
os.makedirs(out_dir, exist_ok=True)


def write(name, rows):
    path = os.path.join(out_dir, name)
    pd.DataFrame(rows).to_csv(path, index=False)
    print(f"Created {path}")


write("allCards.csv", [
    {"Eligible Credit Cards": "HDFC Regalia (Visa Signature), Hdfc Millennia, SBI SimplyCLICK",
     "Eligible Debit Cards": "HDFC Millennia Debit, SBI Classic Debit"},
    {"Eligible Credit Cards": "ICICI Amazon Pay, Axis Select, Icici Sapphiro (Mastercard)",
     "Eligible Debit Cards": "Axis Select Debit, Kotak 811 Debit"},
])

write("blinkit.csv", [
    {"Offer": "10% off on groceries", "Description": "Up to Rs 150 on orders above Rs 999",
     "Eligible Credit Cards": "HDFC Regalia (Visa Signature), SBI SimplyCLICK",
     "Link": "https://blinkit.com/offers/hdfc", "Image": "N/A"},
    {"Offer": "Flat Rs 75 cashback", "Description": "Pay via PhonePe UPI",
     "UPI": "PhonePe, Google Pay", "Link": "https://blinkit.com/offers/upi"},
])

write("swiggy_instamart.csv", [
    {"Title": "10% off on groceries", "Details": "Up to Rs 150 on orders above Rs 999",
     "Eligible Cards": "Hdfc Regalia, Axis Select",
     "Offer Link": "http://www.blinkit.com/offers/hdfc/"},
    {"Title": "Rs 100 off", "Details": "Net banking orders above Rs 1200",
     "Net Banking": "HDFC Bank, ICICI Bank", "Offer Link": "https://swiggy.com/instamart/nb"},
])

write("zepto.csv", [
    {"Offer": "Rs 50 off", "Description": "Debit card orders above Rs 499",
     "Eligible Debit Cards": "SBI Classic Debit, Axis Select Debit (Visa)",
     "Link": "https://zepto.com/offers/dc"},
])

write("bigbasket.csv", [
    {"Offer": "5% cashback", "Description": "On ICICI credit cards",
     "Eligible Credit Cards": "ICICI Amazon Pay, Icici Sapphiro (Mastercard)",
     "Link": "https://bigbasket.com/offers/icici"},
])

write("permanent_offers.csv", [
    {"Eligible Credit Cards": "HDFC Regalia", "Grocery Benefits": "4 reward points per Rs 150 spent"},
    {"Eligible Credit Cards": "SBI SimplyCLICK", "Benefit": "10X rewards on partner merchants"},
])
