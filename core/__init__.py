"""
ABOR / IBOR position reconciliation.

- Parsing of loosely structured position text
- Instrument classification and notional computation
- Corporate action heuristics
- Reconciliation of both books against AUM
"""

from .classifier import classify
from .corporate_actions import detect_corporate_action
from .models import Position, ReconciliationResult, ReconciliationRow
from .notional import compute_notional
from .parser import parse_positions
from .reconciliation import ReconciliationCancelled, reconcile

__version__ = "1.0.0"

__all__ = [
    "Position",
    "ReconciliationCancelled",
    "ReconciliationResult",
    "ReconciliationRow",
    "classify",
    "compute_notional",
    "detect_corporate_action",
    "parse_positions",
    "reconcile",
]
