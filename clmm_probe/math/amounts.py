"""Conversions between human token amounts and raw integer units."""

from __future__ import annotations

import decimal
from decimal import ROUND_DOWN, Decimal

from clmm_probe.math.price import PRICE_CONTEXT


def to_raw_amount(amount: float | Decimal, decimals: int) -> int:
    """Scale a human amount to raw token units, truncating dust.

    Args:
        amount: Amount in human units (e.g. 1.5 USDC)
        decimals: Token decimals

    Returns:
        Raw integer amount (e.g. 1_500_000)
    """
    with decimal.localcontext(PRICE_CONTEXT):
        scaled = Decimal(str(amount)) * (Decimal(10) ** decimals)
        return int(scaled.quantize(Decimal(1), rounding=ROUND_DOWN))


def from_raw_amount(raw: int, decimals: int) -> float:
    """Scale raw token units to a human float amount."""
    with decimal.localcontext(PRICE_CONTEXT):
        return float(Decimal(raw) / (Decimal(10) ** decimals))


__all__ = ["to_raw_amount", "from_raw_amount"]
