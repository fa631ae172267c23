from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

Number = float | int | Decimal

ZERO = Decimal("0")


def to_decimal(value: Number) -> Decimal:
    """
    Exact decimal for a tunable or reading.

    Goes through str() so 0.1 stays 0.1 and 1.0 + 1.1 + 1.2 sums to 3.3.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number) -> int:
    """
    Arcade rounding: 0.5 goes up, unlike Python's banker's round().
    """
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
