"""Position and reconciliation records."""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional


@dataclass
class Position:
    instrument: str
    qty: float
    price: float
    multiplier: float = 1.0
    notional: Optional[float] = None
    flags: List[str] = field(default_factory=list)
    count: int = 1


@dataclass
class ReconciliationRow:
    instrument: str
    asset: str
    ab_qty: float
    ib_qty: float
    diff_qty: float
    ab_notional: float
    ib_notional: float
    diff_notional: float
    pct_aum: float
    flags: List[str]
    is_exception: bool


@dataclass
class ReconciliationResult:
    rows: List[ReconciliationRow]
    aum: float
    total_diff: float
    exception_count: int
    parse_flags: List[str]

    def to_dict(self) -> Dict:
        return asdict(self)
