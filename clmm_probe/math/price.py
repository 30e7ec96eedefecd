"""Price conversions from Q64.64 square-root prices to display prices.

All intermediate arithmetic runs in a high-precision Decimal context; values
only become floats at the very end, so squaring a u128 sqrt price never
loses precision.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from clmm_probe.constants import BPS_SCALE, Q64

# u128 squared is ~77 digits; 80 keeps the square exact before scaling
PRICE_CONTEXT = decimal.Context(prec=80)


def price_b_per_a_decimal(sqrt_price_q64: int, decimals_a: int, decimals_b: int) -> Decimal:
    """Price of token A in token B, decimal-adjusted, as a Decimal.

    Args:
        sqrt_price_q64: sqrt(raw B / raw A) as Q64.64
        decimals_a: Token A decimals
        decimals_b: Token B decimals

    Returns:
        B per A in human units
    """
    with decimal.localcontext(PRICE_CONTEXT):
        ratio = Decimal(sqrt_price_q64) / Decimal(Q64)
        return ratio * ratio * Decimal(10) ** (decimals_a - decimals_b)


def price_b_per_a(sqrt_price_q64: int, decimals_a: int, decimals_b: int) -> float:
    """Price of token A in token B, decimal-adjusted.

    Strictly increasing in sqrt_price_q64 for fixed decimals.

    Example:
        >>> price_b_per_a(2**64, 6, 6)
        1.0
    """
    return float(price_b_per_a_decimal(sqrt_price_q64, decimals_a, decimals_b))


def quote_per_base(
    sqrt_price_q64: int,
    mint_a: str,
    decimals_a: int,
    decimals_b: int,
    quote_mint: str,
) -> float:
    """Mid price in quote per base for a pool.

    If quote is token A the B-per-A ratio is inverted.
    """
    px = price_b_per_a_decimal(sqrt_price_q64, decimals_a, decimals_b)
    if quote_mint == mint_a:
        if px == 0:
            return 0.0
        with decimal.localcontext(PRICE_CONTEXT):
            return float(Decimal(1) / px)
    return float(px)


def mid_stable_per_a(
    sqrt_price_q64: int,
    mint_a: str,
    decimals_a: int,
    mint_b: str,
    decimals_b: int,
    stable_mint: str,
) -> tuple[float, bool]:
    """Stable-currency mid price of the non-stable side.

    - B is stable: stable per A = B per A
    - A is stable: stable per B = 1 / (B per A)
    - neither: the raw B per A ratio, which is quote per base, not stable

    Returns:
        Tuple of (price, is_stable_denominated)
    """
    px = price_b_per_a_decimal(sqrt_price_q64, decimals_a, decimals_b)
    if mint_b == stable_mint:
        return float(px), True
    if mint_a == stable_mint:
        if px == 0:
            return 0.0, True
        with decimal.localcontext(PRICE_CONTEXT):
            return float(Decimal(1) / px), True
    return float(px), False


def to_bps(fraction: float) -> float:
    """Convert a fraction to basis points."""
    return fraction * BPS_SCALE


__all__ = [
    "PRICE_CONTEXT",
    "price_b_per_a_decimal",
    "price_b_per_a",
    "quote_per_base",
    "mid_stable_per_a",
    "to_bps",
]
