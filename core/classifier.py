"""Heuristic asset-class tagging of instrument identifiers."""

import re

CASH = "cash"
BOND = "bond"
DERIVATIVE = "derivative"
EQUITY = "equity"
ETF = "etf"
FX = "fx"

# Evaluated top to bottom, first match wins.
RULES = [
    (re.compile(r"^CASH_"), CASH),
    (re.compile(r"^[A-Z]{2}[A-Z\d]{9}[A-Z\d]$|US\d{9}[A-Z\d]"), BOND),
    (re.compile(r"_FUT_|^ES_|^CL_|^EURUSD_"), DERIVATIVE),
    (re.compile(r"CDS_|IRS_"), DERIVATIVE),
    (re.compile(r"[A-Z]+\.[A-Z]{1,3}$"), EQUITY),
    (re.compile(r"ETF|SPY|QQQ|IVV|GLD"), ETF),
    (re.compile(r"FX|_SPOT|USDINR"), FX),
]


def classify(instrument: str) -> str:
    instrument_id = instrument.upper()
    for pattern, asset in RULES:
        if pattern.search(instrument_id):
            return asset
    return EQUITY
