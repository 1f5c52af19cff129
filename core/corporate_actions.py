from typing import Optional

from .models import Position

SPLIT = "Possible 2-for-1 split"
REVERSE_SPLIT = "Possible 1-for-2 reverse split"

QTY_TOLERANCE = 0.05
PRICE_TOLERANCE = 0.1


def _ratio(numerator: float, denominator: float) -> Optional[float]:
    if not numerator or not denominator:
        return None
    return numerator / denominator


def detect_corporate_action(
    abor: Optional[Position],
    ibor: Optional[Position]
) -> Optional[str]:
    """Guess whether a qty/price break between the books is a stock split."""
    if abor is None or ibor is None:
        return None

    qty_ratio = _ratio(ibor.qty, abor.qty)
    price_ratio = _ratio(ibor.price, abor.price)
    if qty_ratio is None or price_ratio is None:
        return None

    if abs(qty_ratio - 2) < QTY_TOLERANCE and abs(price_ratio - 0.5) < PRICE_TOLERANCE:
        return SPLIT
    if abs(qty_ratio - 0.5) < QTY_TOLERANCE and abs(price_ratio - 2) < PRICE_TOLERANCE:
        return REVERSE_SPLIT
    return None
