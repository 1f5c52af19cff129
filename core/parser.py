"""Parsing of free-form position text into aggregated position records."""

import logging
import math
import re
from typing import Dict, List, Optional, Tuple

from .models import Position

logger = logging.getLogger(__name__)

EMPTY_INPUT = "Empty input"
BAD_QTY = "Bad qty"
MISSING_PRICE = "Missing price"
DUPLICATE_AGGREGATED = "Duplicate aggregated"

MULTIPLIER_FLOOR = 100

_LINE_BREAK = re.compile(r"\r?\n")
_NUMBER_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_PLAIN_DECIMAL = re.compile(r"^\d+(\.\d+)?$")


def parse_number(value: Optional[str]) -> Optional[float]:
    """Read the leading number of a field, ``None`` if there is none."""
    if value is None:
        return None
    match = _NUMBER_PREFIX.match(value.strip())
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def _is_header(line: str) -> bool:
    lowered = line.lower()
    return "instrument" in lowered and ("qty" in lowered or "quantity" in lowered)


def _split(line: str, comma: bool) -> List[str]:
    if comma:
        return [part.strip() for part in line.split(",")]
    return line.split()


def _notional_column(header: str, comma: bool) -> Optional[int]:
    columns = [column.lower() for column in _split(header, comma)]
    if "notional" in columns:
        return columns.index("notional")
    return None


def _multiplier(fields: List[str]) -> float:
    # Only plain unsigned decimals qualify as a large multiplier
    for value in fields[3:]:
        if not _PLAIN_DECIMAL.match(value):
            continue
        number = float(value)
        if math.isfinite(number) and number > MULTIPLIER_FLOOR:
            return number

    if len(fields) > 3:
        number = parse_number(fields[3])
        if number is not None:
            return number
    return 1.0


def _notional(
    fields: List[str],
    notional_header: bool,
    column: Optional[int]
) -> Optional[float]:
    # A header naming notional overrides the positional column, even without an exact match
    if notional_header:
        if column is None or column >= len(fields):
            return None
        return parse_number(fields[column])
    if len(fields) >= 5:
        return parse_number(fields[4])
    return None


def _parse_row(
    fields: List[str],
    notional_header: bool,
    notional_column: Optional[int]
) -> Position:
    flags = []

    qty = parse_number(fields[1])
    if qty is None:
        qty = 0.0
        flags.append(BAD_QTY)

    price = parse_number(fields[2]) if len(fields) > 2 else None
    if price is None:
        price = 0.0
        flags.append(MISSING_PRICE)

    return Position(
        instrument=fields[0],
        qty=qty,
        price=price,
        multiplier=_multiplier(fields),
        notional=_notional(fields, notional_header, notional_column),
        flags=flags,
    )


def _merge(current: Position, row: Position) -> None:
    current.qty += row.qty
    # Most recent non-zero price wins
    if row.price:
        current.price = row.price
    if row.notional is not None:
        current.notional = (current.notional or 0.0) + row.notional
    current.count += 1
    current.flags.append(DUPLICATE_AGGREGATED)


def parse_positions(raw: str) -> Tuple[Dict[str, Position], List[str]]:
    """
        Parse delimited position text into positions keyed by instrument.

        Accepts comma or whitespace delimited lines with an optional
        ``instrument,qty,...`` header. Columns are read positionally as
        instrument, qty, price, multiplier, notional; a ``notional`` header
        column overrides the positional notional. Rows repeating an
        instrument are aggregated into the first one.

        Returns the positions in first-seen order and the top-level parse
        flags. Malformed values degrade to zero with a flag on the position.
    """
    lines = [line.strip() for line in _LINE_BREAK.split(raw or "")]
    lines = [line for line in lines if line]
    if not lines:
        return {}, [EMPTY_INPUT]

    comma = "," in lines[0]
    notional_header = False
    notional_column = None
    if _is_header(lines[0]):
        notional_header = "notional" in lines[0].lower()
        if notional_header:
            notional_column = _notional_column(lines[0], comma)
        lines = lines[1:]

    positions: Dict[str, Position] = {}
    for line in lines:
        fields = _split(line, comma)
        if len(fields) < 2:
            logger.debug(f"Skipping short row: {line!r}")
            continue

        row = _parse_row(fields, notional_header, notional_column)
        current = positions.get(row.instrument)
        if current is None:
            positions[row.instrument] = row
        else:
            _merge(current, row)

    return positions, []
