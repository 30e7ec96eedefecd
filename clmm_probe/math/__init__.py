"""Price, amount and CLMM swap math."""

from clmm_probe.math.amounts import from_raw_amount, to_raw_amount
from clmm_probe.math.clmm import (
    ClmmMathError,
    SwapStep,
    compute_swap_step,
    sqrt_price_x64_to_tick,
    tick_to_sqrt_price_x64,
)
from clmm_probe.math.price import (
    mid_stable_per_a,
    price_b_per_a,
    price_b_per_a_decimal,
    quote_per_base,
    to_bps,
)

__all__ = [
    "ClmmMathError",
    "SwapStep",
    "compute_swap_step",
    "from_raw_amount",
    "mid_stable_per_a",
    "price_b_per_a",
    "price_b_per_a_decimal",
    "quote_per_base",
    "sqrt_price_x64_to_tick",
    "tick_to_sqrt_price_x64",
    "to_bps",
    "to_raw_amount",
]
