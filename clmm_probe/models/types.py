"""Core value types shared by the engine, venues and reporters.

All types here are immutable snapshots: a PoolState and UnitConfig are built
once per run and read by every size iteration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SizeUnit(str, Enum):
    """Denomination for trade sizes and reported prices."""

    STABLE = "stable"
    QUOTE = "quote"


@dataclass(frozen=True)
class PoolState:
    """Snapshot of a CLMM pool's on-chain state.

    Venue adapters normalize their raw encodings into these canonical fields;
    in particular fees are always parts-per-million.

    Attributes:
        address: Pool account (base58)
        program_id: Owning program (base58)
        mint_a: Token A mint
        mint_b: Token B mint
        decimals_a: Token A decimals
        decimals_b: Token B decimals
        tick_spacing: Tick spacing of the pool
        fee_rate_ppm: LP fee per leg, parts-per-million of input
        protocol_fee_rate_ppm: Protocol share of the fee as reported by the venue
        liquidity: Active liquidity (u128)
        sqrt_price_q64: sqrt(B/A) in raw units as Q64.64 (u128)
        current_tick: Current tick index
    """

    address: str
    program_id: str
    mint_a: str
    mint_b: str
    decimals_a: int
    decimals_b: int
    tick_spacing: int
    fee_rate_ppm: int
    protocol_fee_rate_ppm: int
    liquidity: int
    sqrt_price_q64: int
    current_tick: int

    @property
    def fee_bps(self) -> float:
        """Fee per leg in basis points (e.g. 4.0 for 400 ppm)."""
        return self.fee_rate_ppm / 100

    def has_mint(self, mint: str) -> bool:
        """Check if a mint is one side of this pool."""
        return mint in (self.mint_a, self.mint_b)

    def other_mint(self, mint: str) -> str:
        """Get the complement of a mint in this pool."""
        if mint == self.mint_a:
            return self.mint_b
        if mint == self.mint_b:
            return self.mint_a
        raise ValueError(f"Mint {mint} not in pool {self.address}")

    def decimals_of(self, mint: str) -> int:
        """Get decimals for one side of the pool."""
        if mint == self.mint_a:
            return self.decimals_a
        if mint == self.mint_b:
            return self.decimals_b
        raise ValueError(f"Mint {mint} not in pool {self.address}")


@dataclass(frozen=True)
class UnitConfig:
    """Resolved quote/base assignment and unit denomination for one run.

    Attributes:
        quote_mint: Mint treated as quote (the side trades are sized in)
        base_mint: Complement of quote_mint
        quote_decimals: Decimals of the quote mint
        base_decimals: Decimals of the base mint
        size_unit: Denomination of requested sizes
        price_unit: Denomination of reported prices
        quote_per_base: Mid price in quote per base
        stable_per_quote: Stable per quote (1.0 when quote is the stable token,
            NaN when no stable conversion was needed)
    """

    quote_mint: str
    base_mint: str
    quote_decimals: int
    base_decimals: int
    size_unit: SizeUnit
    price_unit: SizeUnit
    quote_per_base: float
    stable_per_quote: float = math.nan

    @property
    def has_stable_rate(self) -> bool:
        """True if a stable conversion rate is available."""
        return math.isfinite(self.stable_per_quote) and self.stable_per_quote > 0

    @property
    def stable_per_base(self) -> float:
        """Mid price in stable per base (NaN without a stable rate)."""
        if not self.has_stable_rate:
            return math.nan
        return self.quote_per_base * self.stable_per_quote

    @property
    def mid_price(self) -> float:
        """Mid price in the configured price unit."""
        if self.price_unit == SizeUnit.STABLE:
            return self.stable_per_base
        return self.quote_per_base

    def quote_amount_for(self, size: float) -> float:
        """Convert a requested size to quote-token units."""
        if self.size_unit == SizeUnit.STABLE:
            return size / self.stable_per_quote
        return size

    def notional_in_price_unit(self, size: float, quote_amount: float) -> float:
        """Express a leg's quote-side notional in the configured price unit."""
        if self.price_unit == SizeUnit.QUOTE:
            return quote_amount
        if self.size_unit == SizeUnit.STABLE:
            return size
        return quote_amount * self.stable_per_quote


@dataclass(frozen=True)
class CurveQuote:
    """Raw result from a curve quote provider (integer token units).

    Attributes:
        amount_in: Input amount including fee
        amount_out: Output amount
        fee_amount: Fee charged, in input token units
        metadata: Opaque curve-crossing details (ticks crossed, price after)
    """

    amount_in: int
    amount_out: int
    fee_amount: int
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class QuoteLegResult:
    """One quote leg with decimal-scaled amounts.

    Attributes:
        mint_in: Input mint
        mint_out: Output mint
        amount_in: Input amount (human units)
        amount_out: Output amount (human units)
        fee_amount: Fee in input token units (human units)
        metadata: Opaque curve-crossing details
    """

    mint_in: str
    mint_out: str
    amount_in: float
    amount_out: float
    fee_amount: float
    metadata: dict[str, Any] = field(default_factory=dict)


__all__ = [
    "SizeUnit",
    "PoolState",
    "UnitConfig",
    "CurveQuote",
    "QuoteLegResult",
]
