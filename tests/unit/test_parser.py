"""Tests for position text parsing."""

import pytest

from core.notional import compute_notional
from core.parser import parse_number, parse_positions


def test_empty_input_is_flagged():
    positions, flags = parse_positions("  \n\r\n   ")

    assert positions == {}
    assert flags == ["Empty input"]


def test_none_input_is_treated_as_empty():
    positions, flags = parse_positions(None)

    assert positions == {}
    assert flags == ["Empty input"]


def test_header_row_is_skipped():
    positions, flags = parse_positions("instrument,qty,price\nAAPL,100,195.30")

    assert list(positions) == ["AAPL"]
    assert positions["AAPL"].qty == 100.0
    assert positions["AAPL"].price == 195.30
    assert positions["AAPL"].multiplier == 1.0
    assert positions["AAPL"].notional is None
    assert positions["AAPL"].flags == []
    assert flags == []


def test_first_line_without_header_tokens_is_data():
    positions, _ = parse_positions("AAPL,100,195.30\nMSFT,75,410.20")

    assert list(positions) == ["AAPL", "MSFT"]


def test_whitespace_delimited_with_quantity_header():
    raw = "Instrument   Quantity  Price\nVOD.L  1000   1.12\nBRK.B\t60\t415.20"

    positions, _ = parse_positions(raw)

    assert list(positions) == ["VOD.L", "BRK.B"]
    assert positions["VOD.L"].qty == 1000.0
    assert positions["BRK.B"].price == 415.20


def test_comma_fields_are_trimmed():
    positions, _ = parse_positions("AAPL , 100 , 195.30")

    assert "AAPL" in positions
    assert positions["AAPL"].qty == 100.0


def test_instrument_ids_are_case_sensitive():
    positions, _ = parse_positions("aapl,1,10\nAAPL,2,10")

    assert list(positions) == ["aapl", "AAPL"]


def test_short_rows_are_skipped_silently():
    positions, flags = parse_positions("instrument,qty\nAAPL\nMSFT,5")

    assert list(positions) == ["MSFT"]
    assert flags == []


def test_bad_qty_defaults_to_zero_with_flag():
    positions, flags = parse_positions("AAPL,abc,10")

    assert positions["AAPL"].qty == 0.0
    assert positions["AAPL"].flags == ["Bad qty"]
    assert flags == []


def test_missing_price_defaults_to_zero_with_flag():
    positions, _ = parse_positions("AAPL,10")

    assert positions["AAPL"].price == 0.0
    assert positions["AAPL"].flags == ["Missing price"]


def test_unparseable_price_defaults_to_zero_with_flag():
    positions, _ = parse_positions("AAPL,,n/a")

    assert positions["AAPL"].qty == 0.0
    assert positions["AAPL"].price == 0.0
    assert positions["AAPL"].flags == ["Bad qty", "Missing price"]


def test_short_positions_keep_sign():
    positions, _ = parse_positions("AAPL,-50,195.30")

    assert positions["AAPL"].qty == -50.0


def test_multiplier_from_fourth_column():
    raw = "instrument,qty,price,multiplier\nES_FUT_DEC24,5,5000,50\nGLD,500,198,1"

    positions, _ = parse_positions(raw)

    assert positions["ES_FUT_DEC24"].multiplier == 50.0
    assert positions["GLD"].multiplier == 1.0


def test_multiplier_prefers_first_large_trailing_field():
    positions, _ = parse_positions("X,10,5,1,999")

    assert positions["X"].multiplier == 999.0
    assert positions["X"].notional == 999.0


def test_multiplier_ignores_non_numeric_fourth_column():
    positions, _ = parse_positions("X,10,5,lots")

    assert positions["X"].multiplier == 1.0


@pytest.mark.parametrize("value", ["1e3", "150abc", "+500"])
def test_large_multiplier_must_be_plain_decimal(value):
    positions, _ = parse_positions(f"X,10,5,2,{value}")

    assert positions["X"].multiplier == 2.0


def test_large_multiplier_accepts_fraction():
    positions, _ = parse_positions("X,10,5,2,1000.5")

    assert positions["X"].multiplier == 1000.5


def test_notional_from_fifth_column():
    positions, _ = parse_positions("IRS_USD_2Y,10,0,1,1000000")

    assert positions["IRS_USD_2Y"].notional == 1000000.0


def test_notional_header_column_overrides_position():
    raw = "instrument,qty,price,notional\nIRS_USD_2Y,10,0,1000000\nHYG,300,79.1"

    positions, _ = parse_positions(raw)

    assert positions["IRS_USD_2Y"].notional == 1000000.0
    assert positions["HYG"].notional is None


def test_notional_header_with_spaces():
    raw = "instrument, qty, price, notional\nCDS_IBM_5Y, 5, 0, 2500000"

    positions, _ = parse_positions(raw)

    assert positions["CDS_IBM_5Y"].notional == 2500000.0


def test_inexact_notional_header_leaves_notional_absent():
    raw = "instrument,qty,price,multiplier,notional_usd\nX,10,5,1,999"

    positions, _ = parse_positions(raw)

    assert positions["X"].multiplier == 999.0
    assert positions["X"].notional is None
    assert compute_notional(positions["X"]) == 49950.0


def test_duplicates_are_aggregated():
    raw = "instrument,qty,price\nSPY,100,507.50\nSPY,100,507.50\nSPY,50,507.50"

    positions, _ = parse_positions(raw)

    spy = positions["SPY"]
    assert spy.qty == 250.0
    assert spy.price == 507.50
    assert spy.count == 3
    assert spy.flags == ["Duplicate aggregated", "Duplicate aggregated"]


def test_duplicate_with_zero_price_keeps_prior_price():
    positions, _ = parse_positions("A,10,5\nA,10,0")

    assert positions["A"].price == 5.0
    assert positions["A"].qty == 20.0


def test_latest_non_zero_duplicate_price_wins():
    positions, _ = parse_positions("A,10,5\nA,10,6\nA,10,0")

    assert positions["A"].price == 6.0


def test_duplicate_notionals_are_summed():
    raw = "instrument,qty,price,notional\nIRS,1,0\nIRS,1,0,500\nIRS,1,0,250"

    positions, _ = parse_positions(raw)

    assert positions["IRS"].notional == 750.0


def test_insertion_order_is_preserved():
    positions, _ = parse_positions("B,1,1\nA,1,1\nB,1,1\nC,1,1")

    assert list(positions) == ["B", "A", "C"]


@pytest.mark.parametrize("value, expected", [
    ("100", 100.0),
    ("-45", -45.0),
    ("1.5e3", 1500.0),
    (".5", 0.5),
    ("12abc", 12.0),
    ("abc", None),
    ("", None),
    ("inf", None),
    ("1e999", None),
    (None, None),
])
def test_parse_number(value, expected):
    assert parse_number(value) == expected
