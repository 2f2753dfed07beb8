from __future__ import annotations

from decimal import Decimal

MoneyLike = str | Decimal

_MONEY_Q = Decimal("0.01")
_PCT_Q = Decimal("0.01")


def quantize_money(value: Decimal, places: MoneyLike = _MONEY_Q) -> Decimal:
    """Quantize monetary values consistently for display."""
    quant = Decimal(places)
    return value.quantize(quant)


def quantize_pct(value: Decimal) -> Decimal:
    return value.quantize(_PCT_Q)
