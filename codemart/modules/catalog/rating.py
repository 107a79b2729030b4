"""Review rating aggregation."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_ONE_DECIMAL = Decimal("0.1")


def average_rating(total: int | None, count: int | None) -> float:
    """Mean rating rounded half-up to one decimal; ``0.0`` without reviews."""
    if not count:
        return 0.0
    mean = Decimal(total or 0) / Decimal(count)
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))
