"""Human-readable console output for a probe run."""

from __future__ import annotations

import sys
from typing import TextIO

from clmm_probe.constants import symbol_for_mint
from clmm_probe.engine.runner import ProbeContext, ProbeRun, SizeFailed, SizeOutcome
from clmm_probe.models.types import SizeUnit
from clmm_probe.venues.quoter import DepthLevel


def format_size(size: float) -> str:
    """Thousands-separated size with at most 6 decimals (1000000 -> "1,000,000")."""
    text = f"{size:,.6f}".rstrip("0").rstrip(".")
    return text or "0"


def price_label(context: ProbeContext) -> str:
    """Label for the price unit, e.g. "USD/SOL" or "BTC/SOL"."""
    units = context.units
    base = symbol_for_mint(units.base_mint) or "BASE"
    if units.price_unit == SizeUnit.STABLE:
        return f"USD/{base}"
    quote = symbol_for_mint(units.quote_mint) or "QUOTE"
    return f"{quote}/{base}"


class ConsoleReporter:
    """Prints the pool summary, depth dump and one line per size."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def start(self, context: ProbeContext, depth: list[DepthLevel]) -> None:
        pool = context.pool
        units = context.units
        symbol_a = symbol_for_mint(pool.mint_a) or "A"
        symbol_b = symbol_for_mint(pool.mint_b) or "B"
        quote_symbol = symbol_for_mint(units.quote_mint) or "QUOTE"
        base_symbol = symbol_for_mint(units.base_mint) or "BASE"

        if depth:
            self.print_depth(context, depth)

        self._print("Pool Summary")
        self._print("------------")
        self._print(f"Pool:                 {pool.address}  ({symbol_a}/{symbol_b})")
        self._print(f"Dex:                  {context.dex}")
        self._print(f"Program:              {pool.program_id}")
        self._print(f"tickSpacing:          {pool.tick_spacing}")
        self._print(
            f"feeRate (ppm):        {pool.fee_rate_ppm}   (~{pool.fee_bps:.4f} bps each leg)"
        )
        self._print(f"protocolFeeRate:      {pool.protocol_fee_rate_ppm}")
        self._print(f"liquidity (u128):     {pool.liquidity}")
        self._print(f"sqrtPrice_x64 (u128): {pool.sqrt_price_q64}")
        self._print(f"tickCurrentIndex:     {pool.current_tick}")
        self._print(
            f"quoteMint:            {units.quote_mint} ({quote_symbol}) dec={units.quote_decimals}"
        )
        self._print(
            f"baseMint:             {units.base_mint} ({base_symbol}) dec={units.base_decimals}"
        )
        self._print(f"Size Unit:            {units.size_unit.value}")
        self._print(f"Price Unit:           {units.price_unit.value}")
        self._print(
            f"Mid QUOTE/BASE:       {units.quote_per_base:.12f} {quote_symbol}/{base_symbol}"
        )
        if units.has_stable_rate:
            self._print(f"Stable per QUOTE:     {units.stable_per_quote:.8f}")
            self._print(f"Mid (USD per BASE):   {units.stable_per_base:.8f}")
        self._print()
        self._print(f"Roundtrip results (prices in {price_label(context)}):")

    def print_depth(self, context: ProbeContext, depth: list[DepthLevel]) -> None:
        pool = context.pool
        self._print(f"Liquidity depth (tickSpacing={pool.tick_spacing}):")
        for level in depth:
            self._print(
                f"tick={level.tick:>8}  liqNet={level.liquidity_net:>20}  cum={level.cumulative}"
            )
        self._print(f"(Displayed liquidity range around tick {pool.current_tick})")
        self._print()

    def record(self, context: ProbeContext, outcome: SizeOutcome) -> None:
        self._print(self.format_outcome(context, outcome))

    def format_outcome(self, context: ProbeContext, outcome: SizeOutcome) -> str:
        """One console line for a size outcome."""
        unit = context.units.size_unit.value
        if isinstance(outcome, SizeFailed):
            return f"RT (size={format_size(outcome.size)} {unit}) error: {outcome.error}"

        m = outcome.metrics
        digits = 8 if context.units.price_unit == SizeUnit.STABLE else 12
        return (
            f"RT {format_size(outcome.size):>10}  {unit:<6}  "
            f"mid={m.mid_price:.{digits}f}  buy={m.buy_price:.{digits}f}  "
            f"sell={m.sell_price:.{digits}f}  "
            f"rt={m.roundtrip_bps:.4f}bps  fee={m.fee_bps_total:.4f}bps  "
            f"impact={m.impact_bps:.4f}bps"
        )

    def finish(self, run: ProbeRun) -> None:
        if run.failed:
            self._print(f"{len(run.failed)} of {len(run.outcomes)} sizes failed")

    def close(self) -> None:
        self.stream.flush()


__all__ = ["ConsoleReporter", "format_size", "price_label"]
