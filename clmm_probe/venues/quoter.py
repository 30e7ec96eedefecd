"""Curve quote providers for CLMM pools.

A quote provider answers exact-in / exact-out questions for one pool at zero
slippage tolerance. The engine never talks to a provider directly; venue
adapters own one per pool and convert between human and raw units.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Protocol

import structlog

from clmm_probe.constants import MAX_TICK, MIN_TICK
from clmm_probe.errors import InsufficientLiquidityError, QuoteUnavailableError
from clmm_probe.math.clmm import compute_swap_step, tick_to_sqrt_price_x64
from clmm_probe.models.types import CurveQuote, PoolState

logger = structlog.get_logger()


class CurveQuoteProvider(Protocol):
    """Protocol for curve quote implementations.

    This allows swapping between the local tick-walking quoter and a mock
    quoter for testing. Amounts are raw integer token units.
    """

    def quote_exact_in(self, pool: PoolState, mint_in: str, amount_in: int) -> CurveQuote:
        """Get output for an exact input.

        Args:
            pool: Pool snapshot being quoted
            mint_in: Input mint
            amount_in: Raw input amount, fee included

        Returns:
            CurveQuote with amount_out and fee (in mint_in units)
        """
        ...

    def quote_exact_out(self, pool: PoolState, mint_out: str, amount_out: int) -> CurveQuote:
        """Get required input for an exact output.

        Args:
            pool: Pool snapshot being quoted
            mint_out: Output mint
            amount_out: Raw output amount wanted

        Returns:
            CurveQuote with amount_in (fee included) and fee
        """
        ...


@dataclass(frozen=True)
class QuoteKey:
    """Key for looking up quotes in MockCurveQuoter."""

    mint: str
    amount: int
    is_exact_input: bool


class MockCurveQuoter:
    """Mock quoter for testing without RPC calls.

    Configure with expected quotes, and track calls for assertions.
    """

    def __init__(
        self,
        quotes: dict[QuoteKey, CurveQuote] | None = None,
        default_rate: tuple[int, int] | None = None,
    ):
        """Initialize mock quoter.

        Args:
            quotes: Mapping of QuoteKey -> CurveQuote for specific quotes
            default_rate: If set, (numerator, denominator) ratio for any unconfigured quote.
                         For exact_in: amount_out = amount_in * num // denom
                         For exact_out: amount_in = ceil(amount_out * denom / num)
                         The pool's fee_rate_ppm is reported as fee on the input.
        """
        self.quotes = quotes or {}
        self.default_rate = default_rate
        self.calls: list[tuple[str, str, int]] = []  # (method, mint, amount)

    def quote_exact_in(self, pool: PoolState, mint_in: str, amount_in: int) -> CurveQuote:
        """Get output amount for exact input."""
        self.calls.append(("exact_in", mint_in, amount_in))

        key = QuoteKey(mint_in, amount_in, is_exact_input=True)
        if key in self.quotes:
            return self.quotes[key]

        if self.default_rate is not None:
            num, denom = self.default_rate
            fee = -(-amount_in * pool.fee_rate_ppm // 1_000_000)
            return CurveQuote(
                amount_in=amount_in, amount_out=amount_in * num // denom, fee_amount=fee
            )

        raise QuoteUnavailableError(f"No mock quote for exact_in {mint_in} {amount_in}")

    def quote_exact_out(self, pool: PoolState, mint_out: str, amount_out: int) -> CurveQuote:
        """Get input amount for exact output."""
        self.calls.append(("exact_out", mint_out, amount_out))

        key = QuoteKey(mint_out, amount_out, is_exact_input=False)
        if key in self.quotes:
            return self.quotes[key]

        if self.default_rate is not None:
            num, denom = self.default_rate
            if num > 0:
                amount_in = (amount_out * denom + num - 1) // num
                fee = -(-amount_in * pool.fee_rate_ppm // 1_000_000)
                return CurveQuote(amount_in=amount_in, amount_out=amount_out, fee_amount=fee)

        raise QuoteUnavailableError(f"No mock quote for exact_out {mint_out} {amount_out}")


@dataclass(frozen=True)
class DepthLevel:
    """One initialized tick in a liquidity depth profile."""

    tick: int
    liquidity_net: int
    cumulative: int


@dataclass(frozen=True)
class TickCurve:
    """Initialized ticks loaded for one pool.

    Attributes:
        ticks: Sorted (tick_index, liquidity_net) pairs for initialized ticks
        lower_tick: Lowest tick covered by the loaded tick arrays
        upper_tick: Tick just past the highest loaded tick array
    """

    ticks: tuple[tuple[int, int], ...]
    lower_tick: int
    upper_tick: int

    @classmethod
    def from_mapping(cls, ticks: dict[int, int], lower_tick: int, upper_tick: int) -> TickCurve:
        """Build a curve from a tick -> liquidity_net mapping, dropping zero entries."""
        items = tuple(sorted((t, net) for t, net in ticks.items() if net != 0))
        return cls(ticks=items, lower_tick=lower_tick, upper_tick=upper_tick)

    def _indices(self) -> list[int]:
        return [t for t, _ in self.ticks]

    def next_at_or_below(self, tick: int) -> int | None:
        """Largest initialized tick <= tick, if any is loaded."""
        indices = self._indices()
        pos = bisect.bisect_right(indices, tick)
        if pos == 0:
            return None
        return indices[pos - 1]

    def next_above(self, tick: int) -> int | None:
        """Smallest initialized tick > tick, if any is loaded."""
        indices = self._indices()
        pos = bisect.bisect_right(indices, tick)
        if pos >= len(indices):
            return None
        return indices[pos]

    def liquidity_net(self, tick: int) -> int:
        """Net liquidity change when crossing a tick upward."""
        for t, net in self.ticks:
            if t == tick:
                return net
        return 0

    def depth_profile(self) -> list[DepthLevel]:
        """Initialized ticks with running cumulative liquidity_net, low to high."""
        levels = []
        cumulative = 0
        for tick, net in self.ticks:
            cumulative += net
            levels.append(DepthLevel(tick=tick, liquidity_net=net, cumulative=cumulative))
        return levels


class TickCurveQuoter:
    """Local CLMM quoter that walks the loaded initialized ticks.

    Swap simulation follows the on-chain step loop: swap within the active
    range until the next initialized tick, cross it (adjusting liquidity by
    its net amount), and repeat until the amount is filled. There is no
    price limit beyond the loaded tick window, i.e. zero slippage tolerance.
    """

    def __init__(self, curve: TickCurve):
        self.curve = curve

    def quote_exact_in(self, pool: PoolState, mint_in: str, amount_in: int) -> CurveQuote:
        """Get output amount for exact input."""
        a_to_b = mint_in == pool.mint_a
        return self._swap(pool, amount_in, a_to_b=a_to_b, exact_input=True)

    def quote_exact_out(self, pool: PoolState, mint_out: str, amount_out: int) -> CurveQuote:
        """Get input amount for exact output."""
        a_to_b = mint_out == pool.mint_b
        return self._swap(pool, amount_out, a_to_b=a_to_b, exact_input=False)

    def _swap(self, pool: PoolState, amount: int, a_to_b: bool, exact_input: bool) -> CurveQuote:
        if amount <= 0:
            return CurveQuote(amount_in=0, amount_out=0, fee_amount=0)

        sqrt_price = pool.sqrt_price_q64
        tick = pool.current_tick
        liquidity = pool.liquidity
        remaining = amount
        total_in = 0
        total_out = 0
        total_fee = 0
        ticks_crossed = 0

        while remaining > 0:
            if a_to_b:
                next_tick = self.curve.next_at_or_below(tick)
                boundary = self.curve.lower_tick
            else:
                next_tick = self.curve.next_above(tick)
                boundary = self.curve.upper_tick

            initialized = next_tick is not None
            target_tick = next_tick if next_tick is not None else boundary
            target_tick = max(MIN_TICK, min(MAX_TICK, target_tick))
            sqrt_target = tick_to_sqrt_price_x64(target_tick)

            if not initialized and (
                (a_to_b and sqrt_price <= sqrt_target) or (not a_to_b and sqrt_price >= sqrt_target)
            ):
                logger.debug(
                    "curve_exhausted",
                    pool=pool.address,
                    a_to_b=a_to_b,
                    exact_input=exact_input,
                    remaining=remaining,
                    ticks_crossed=ticks_crossed,
                )
                raise InsufficientLiquidityError(
                    f"Loaded curve exhausted after {ticks_crossed} ticks with {remaining} "
                    f"of {amount} unfilled"
                )

            step = compute_swap_step(
                sqrt_price,
                sqrt_target,
                liquidity,
                remaining,
                pool.fee_rate_ppm,
                exact_input,
            )

            if exact_input:
                remaining -= step.amount_in + step.fee_amount
            else:
                remaining -= step.amount_out
            total_in += step.amount_in + step.fee_amount
            total_out += step.amount_out
            total_fee += step.fee_amount
            sqrt_price = step.sqrt_price_next

            if sqrt_price == sqrt_target:
                if initialized:
                    net = self.curve.liquidity_net(target_tick)
                    liquidity = liquidity - net if a_to_b else liquidity + net
                    if liquidity < 0:
                        raise QuoteUnavailableError(
                            f"Negative liquidity after crossing tick {target_tick}"
                        )
                    ticks_crossed += 1
                tick = target_tick - 1 if a_to_b else target_tick

        return CurveQuote(
            amount_in=total_in,
            amount_out=total_out,
            fee_amount=total_fee,
            metadata={
                "ticks_crossed": ticks_crossed,
                "sqrt_price_after": sqrt_price,
                "a_to_b": a_to_b,
            },
        )


__all__ = [
    "CurveQuoteProvider",
    "QuoteKey",
    "MockCurveQuoter",
    "DepthLevel",
    "TickCurve",
    "TickCurveQuoter",
]
