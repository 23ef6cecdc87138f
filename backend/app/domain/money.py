# backend/app/domain/money.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable

_CENT = Decimal("0.01")


def to_decimal(x: Any) -> Decimal:
    """
    Aggregates come back from the driver as float, Decimal or None.
    Going through str() keeps 2.675 as 2.675 instead of its binary expansion.
    """
    if x is None:
        return Decimal("0")
    if isinstance(x, Decimal):
        return x
    try:
        return Decimal(str(x))
    except Exception:
        return Decimal("0")


def round_money(x: Any) -> float:
    """Half-up to cents, only at the output boundary."""
    return float(to_decimal(x).quantize(_CENT, rounding=ROUND_HALF_UP))


def sum_money(values: Iterable[Any]) -> Decimal:
    total = Decimal("0")
    for v in values:
        total += to_decimal(v)
    return total


def growth_pct(current: Any, previous: Any) -> float:
    c = to_decimal(current)
    p = to_decimal(previous)
    if p > 0:
        return round_money((c - p) / p * 100)
    return 100.0 if c > 0 else 0.0
