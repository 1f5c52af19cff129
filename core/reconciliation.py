import logging
from typing import Callable, Dict, List, Optional

from .classifier import FX, classify
from .corporate_actions import detect_corporate_action
from .models import Position, ReconciliationResult, ReconciliationRow
from .notional import compute_notional
from .parser import parse_positions

logger = logging.getLogger(__name__)

MISSING_PRICE_NOTIONAL = "Missing price/notional"
FX_ROUNDING = "FX rounding"
FX_ROUNDING_TOLERANCE = 1e-6


class ReconciliationCancelled(RuntimeError):
    """Raised when a caller-supplied cancellation check fires mid-run."""


def compute_aum(positions: Dict[str, Position]) -> float:
    aum = sum(abs(compute_notional(p)) for p in positions.values())
    if aum == 0:
        logger.debug("ABOR notional sums to zero, flooring AUM to 1")
        return 1.0
    return aum


def _lacks_valuation(position: Optional[Position]) -> bool:
    return position is not None and position.price == 0 and position.notional is None


def _row_flags(
    abor: Optional[Position],
    ibor: Optional[Position],
    asset: str,
    diff_qty: float,
    diff_notional: float
) -> List[str]:
    flags = []
    if abor is not None:
        flags.extend(abor.flags)
    if ibor is not None:
        flags.extend(ibor.flags)

    if _lacks_valuation(abor) or _lacks_valuation(ibor):
        flags.append(MISSING_PRICE_NOTIONAL)

    corporate_action = detect_corporate_action(abor, ibor)
    if corporate_action:
        flags.append(corporate_action)

    if asset == FX and diff_qty != 0 and abs(diff_notional) < FX_ROUNDING_TOLERANCE:
        flags.append(FX_ROUNDING)

    return flags


def reconcile(
    abor_raw: str,
    ibor_raw: str,
    threshold: float,
    should_cancel: Optional[Callable[[], bool]] = None
) -> ReconciliationResult:
    """
        Reconcile ABOR against IBOR positions.

        Every instrument on either side yields one row. A row is an exception
        when its absolute notional break is at least ``threshold`` of AUM,
        where AUM is the absolute ABOR notional. Rows come back ordered by
        absolute notional break, largest first.
    """
    abor, abor_flags = parse_positions(abor_raw)
    ibor, ibor_flags = parse_positions(ibor_raw)

    instruments = list(abor)
    instruments.extend(i for i in ibor if i not in abor)

    aum = compute_aum(abor)

    rows = []
    total_diff = 0.0
    exception_count = 0

    for instrument in instruments:
        if should_cancel is not None and should_cancel():
            raise ReconciliationCancelled(
                f"Reconciliation cancelled after {len(rows)} of {len(instruments)} instruments"
            )

        ab = abor.get(instrument)
        ib = ibor.get(instrument)
        asset = classify(instrument)

        ab_qty = ab.qty if ab is not None else 0.0
        ib_qty = ib.qty if ib is not None else 0.0
        ab_notional = compute_notional(ab) if ab is not None else 0.0
        ib_notional = compute_notional(ib) if ib is not None else 0.0

        diff_qty = ib_qty - ab_qty
        diff_notional = ib_notional - ab_notional
        pct_aum = abs(diff_notional) / aum
        is_exception = pct_aum >= threshold

        if is_exception:
            exception_count += 1
        total_diff += abs(diff_notional)

        rows.append(ReconciliationRow(
            instrument=instrument,
            asset=asset,
            ab_qty=ab_qty,
            ib_qty=ib_qty,
            diff_qty=diff_qty,
            ab_notional=ab_notional,
            ib_notional=ib_notional,
            diff_notional=diff_notional,
            pct_aum=pct_aum,
            flags=_row_flags(ab, ib, asset, diff_qty, diff_notional),
            is_exception=is_exception,
        ))

    rows.sort(key=lambda row: abs(row.diff_notional), reverse=True)

    return ReconciliationResult(
        rows=rows,
        aum=aum,
        total_diff=total_diff,
        exception_count=exception_count,
        parse_flags=abor_flags + ibor_flags,
    )
