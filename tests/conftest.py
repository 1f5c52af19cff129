import pytest


@pytest.fixture
def abor_raw():
    return "instrument,qty,price\nAAPL,100,195.30\nTSLA,50,250.10\nMSFT,75,410.20"


@pytest.fixture
def ibor_raw():
    return "instrument,qty,price\nAAPL,100,195.30\nTSLA,40,260.00\nMSFT,80,409.70"


@pytest.fixture
def result_dict():
    return {
        "rows": [
            {
                "instrument": "TSLA",
                "asset": "equity",
                "ab_qty": 50.0,
                "ib_qty": 40.0,
                "diff_qty": -10.0,
                "ab_notional": 12505.0,
                "ib_notional": 10400.0,
                "diff_notional": -2105.0,
                "pct_aum": 0.05,
                "flags": [],
                "is_exception": True,
            },
            {
                "instrument": "AAPL",
                "asset": "equity",
                "ab_qty": 100.0,
                "ib_qty": 100.0,
                "diff_qty": 0.0,
                "ab_notional": 19530.0,
                "ib_notional": 19530.0,
                "diff_notional": 0.0,
                "pct_aum": 0.0,
                "flags": [],
                "is_exception": False,
            },
        ],
        "aum": 42100.0,
        "total_diff": 2105.0,
        "exception_count": 1,
        "parse_flags": [],
    }
