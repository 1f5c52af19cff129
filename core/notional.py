import math

from .models import Position


def compute_notional(position: Position) -> float:
    if position.notional is not None and math.isfinite(position.notional):
        return position.notional
    if position.price and math.isfinite(position.qty):
        return position.price * position.qty * (position.multiplier or 1)
    return 0.0
