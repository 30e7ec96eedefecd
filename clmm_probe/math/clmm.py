"""Concentrated-liquidity swap math in Q64.64.

Integer implementation of the tick/sqrt-price relations and the single
swap step shared by Whirlpool and Raydium CLMM (both follow the Uniswap V3
design with 64 fractional bits instead of 96). Python ints are unbounded,
so there are no u128/u256 overflow checks; rounding directions match the
on-chain programs.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal

from clmm_probe.constants import (
    MAX_SQRT_PRICE_X64,
    MAX_TICK,
    MIN_SQRT_PRICE_X64,
    MIN_TICK,
    PPM_SCALE,
    Q64,
)

TICK_BASE = Decimal("1.0001")

_TICK_CONTEXT = decimal.Context(prec=60)


class ClmmMathError(ArithmeticError):
    """Base error for CLMM math operations."""

    pass


def _div_rounding_up(a: int, b: int) -> int:
    if b == 0:
        raise ClmmMathError("Division by zero")
    return -(-a // b)


def tick_to_sqrt_price_x64(tick: int) -> int:
    """Convert a tick index to sqrt(1.0001^tick) as Q64.64.

    Args:
        tick: Tick index within [MIN_TICK, MAX_TICK]

    Returns:
        sqrt price as Q64.64, floored

    Raises:
        ClmmMathError: If tick is out of bounds
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise ClmmMathError(f"Tick {tick} out of bounds [{MIN_TICK}, {MAX_TICK}]")
    with decimal.localcontext(_TICK_CONTEXT):
        sqrt_price = (TICK_BASE**tick).sqrt()
        return int(sqrt_price * Q64)


def sqrt_price_x64_to_tick(sqrt_price_x64: int) -> int:
    """Greatest tick whose sqrt price is <= sqrt_price_x64 (binary search)."""
    if sqrt_price_x64 < MIN_SQRT_PRICE_X64 or sqrt_price_x64 > MAX_SQRT_PRICE_X64:
        raise ClmmMathError(f"sqrt_price_x64 {sqrt_price_x64} out of bounds")

    lo, hi = MIN_TICK, MAX_TICK
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if tick_to_sqrt_price_x64(mid) <= sqrt_price_x64:
            lo = mid
        else:
            hi = mid - 1
    return lo


def get_amount_a_delta(sqrt_a: int, sqrt_b: int, liquidity: int, round_up: bool) -> int:
    """Token A amount between two sqrt prices: L * (sb - sa) / (sa * sb)."""
    if sqrt_a > sqrt_b:
        sqrt_a, sqrt_b = sqrt_b, sqrt_a
    if liquidity == 0 or sqrt_a == sqrt_b:
        return 0
    if sqrt_a == 0:
        raise ClmmMathError("sqrt price must be positive")

    numerator = (liquidity << 64) * (sqrt_b - sqrt_a)
    denominator = sqrt_b * sqrt_a
    if round_up:
        return _div_rounding_up(numerator, denominator)
    return numerator // denominator


def get_amount_b_delta(sqrt_a: int, sqrt_b: int, liquidity: int, round_up: bool) -> int:
    """Token B amount between two sqrt prices: L * (sb - sa)."""
    if sqrt_a > sqrt_b:
        sqrt_a, sqrt_b = sqrt_b, sqrt_a
    if liquidity == 0 or sqrt_a == sqrt_b:
        return 0

    product = liquidity * (sqrt_b - sqrt_a)
    if round_up:
        return _div_rounding_up(product, Q64)
    return product // Q64


def next_sqrt_price_from_amount_a(sqrt_price: int, liquidity: int, amount: int, add: bool) -> int:
    """Next sqrt price after adding (or removing) token A, rounding up."""
    if amount == 0:
        return sqrt_price
    if liquidity == 0:
        raise ClmmMathError("Liquidity cannot be zero")

    numerator = liquidity << 64
    product = amount * sqrt_price
    if add:
        denominator = numerator + product
    else:
        denominator = numerator - product
        if denominator <= 0:
            raise ClmmMathError("Amount A exceeds available liquidity")
    return _div_rounding_up(numerator * sqrt_price, denominator)


def next_sqrt_price_from_amount_b(sqrt_price: int, liquidity: int, amount: int, add: bool) -> int:
    """Next sqrt price after adding (or removing) token B, rounding down."""
    if amount == 0:
        return sqrt_price
    if liquidity == 0:
        raise ClmmMathError("Liquidity cannot be zero")

    if add:
        return sqrt_price + (amount << 64) // liquidity
    quotient = _div_rounding_up(amount << 64, liquidity)
    if sqrt_price <= quotient:
        raise ClmmMathError("Amount B exceeds available liquidity")
    return sqrt_price - quotient


@dataclass(frozen=True)
class SwapStep:
    """Result of one swap step within a single liquidity range."""

    sqrt_price_next: int
    amount_in: int
    amount_out: int
    fee_amount: int


def compute_swap_step(
    sqrt_price_current: int,
    sqrt_price_target: int,
    liquidity: int,
    amount_remaining: int,
    fee_rate_ppm: int,
    exact_input: bool,
) -> SwapStep:
    """Swap within one range, stopping at the target price or when the amount runs out.

    Direction is implied by the prices: a target below the current price
    means token A in, token B out.

    Args:
        sqrt_price_current: Current sqrt price (Q64.64)
        sqrt_price_target: Price the step may not cross (Q64.64)
        liquidity: Active liquidity in the range
        amount_remaining: Input left (exact in) or output left (exact out)
        fee_rate_ppm: Fee in parts-per-million of input
        exact_input: True for exact in, False for exact out

    Returns:
        SwapStep with the new price, amounts and fee (fee is in input token)
    """
    a_to_b = sqrt_price_current >= sqrt_price_target
    fee_complement = PPM_SCALE - fee_rate_ppm

    if exact_input:
        amount_less_fee = amount_remaining * fee_complement // PPM_SCALE
        if a_to_b:
            max_in = get_amount_a_delta(sqrt_price_target, sqrt_price_current, liquidity, True)
        else:
            max_in = get_amount_b_delta(sqrt_price_current, sqrt_price_target, liquidity, True)
        if amount_less_fee >= max_in:
            sqrt_next = sqrt_price_target
        elif a_to_b:
            sqrt_next = next_sqrt_price_from_amount_a(
                sqrt_price_current, liquidity, amount_less_fee, add=True
            )
        else:
            sqrt_next = next_sqrt_price_from_amount_b(
                sqrt_price_current, liquidity, amount_less_fee, add=True
            )
    else:
        if a_to_b:
            max_out = get_amount_b_delta(sqrt_price_target, sqrt_price_current, liquidity, False)
        else:
            max_out = get_amount_a_delta(sqrt_price_current, sqrt_price_target, liquidity, False)
        if amount_remaining >= max_out:
            sqrt_next = sqrt_price_target
        elif a_to_b:
            sqrt_next = next_sqrt_price_from_amount_b(
                sqrt_price_current, liquidity, amount_remaining, add=False
            )
        else:
            sqrt_next = next_sqrt_price_from_amount_a(
                sqrt_price_current, liquidity, amount_remaining, add=False
            )

    if a_to_b:
        amount_in = get_amount_a_delta(sqrt_next, sqrt_price_current, liquidity, True)
        amount_out = get_amount_b_delta(sqrt_next, sqrt_price_current, liquidity, False)
    else:
        amount_in = get_amount_b_delta(sqrt_price_current, sqrt_next, liquidity, True)
        amount_out = get_amount_a_delta(sqrt_price_current, sqrt_next, liquidity, False)

    if not exact_input and amount_out > amount_remaining:
        amount_out = amount_remaining

    if exact_input and sqrt_next != sqrt_price_target:
        # Range not exhausted: whatever input is left over is the fee
        fee_amount = amount_remaining - amount_in
    else:
        fee_amount = _div_rounding_up(amount_in * fee_rate_ppm, fee_complement)

    return SwapStep(
        sqrt_price_next=sqrt_next,
        amount_in=amount_in,
        amount_out=amount_out,
        fee_amount=fee_amount,
    )


__all__ = [
    "ClmmMathError",
    "SwapStep",
    "tick_to_sqrt_price_x64",
    "sqrt_price_x64_to_tick",
    "get_amount_a_delta",
    "get_amount_b_delta",
    "next_sqrt_price_from_amount_a",
    "next_sqrt_price_from_amount_b",
    "compute_swap_step",
]
