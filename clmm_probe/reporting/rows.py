"""Flat per-size result rows.

Every row has the same columns in the same order. Failure rows keep the
pool and unit identification and carry NaN for the measured values.
"""

from __future__ import annotations

import math
from dataclasses import astuple, dataclass
from datetime import UTC, datetime

from clmm_probe.constants import symbol_for_mint
from clmm_probe.engine.runner import ProbeContext, SizeFailed, SizeOutcome, SizeSucceeded

CSV_HEADER = [
    "ts_utc",
    "dex",
    "pool",
    "program_id",
    "tick_spacing",
    "fee_ppm",
    "fee_bps",
    "protocol_fee_ppm",
    "liquidity_u128",
    "sqrt_price_x64",
    "tick_current",
    "mintA",
    "decA",
    "symbolA",
    "mintB",
    "decB",
    "symbolB",
    "base_mint",
    "base_decimals",
    "base_symbol",
    "quote_mint",
    "quote_decimals",
    "quote_symbol",
    "usd_per_quote",
    "mid_usd_per_base",
    "usd_notional",
    "buy_px_usd_per_base",
    "sell_px_usd_per_base",
    "roundtrip_bps",
    "fee_bps_total",
    "impact_bps_total",
    "buy_out_base",
    "sell_in_base",
    "buy_fee_quote",
    "sell_fee_base",
]

NAN = math.nan


@dataclass(frozen=True)
class ProbeRow:
    """One CSV row; field order matches CSV_HEADER.

    The *_usd_* fields hold values in the run's price unit and usd_notional
    is the requested size in the run's size unit.
    """

    ts_utc: str
    dex: str
    pool: str
    program_id: str
    tick_spacing: int
    fee_ppm: int
    fee_bps: str
    protocol_fee_ppm: int
    liquidity_u128: int
    sqrt_price_x64: int
    tick_current: int
    mint_a: str
    dec_a: int
    symbol_a: str
    mint_b: str
    dec_b: int
    symbol_b: str
    base_mint: str
    base_decimals: int
    base_symbol: str
    quote_mint: str
    quote_decimals: int
    quote_symbol: str
    usd_per_quote: float
    mid_usd_per_base: float = NAN
    usd_notional: float = NAN
    buy_px_usd_per_base: float = NAN
    sell_px_usd_per_base: float = NAN
    roundtrip_bps: float = NAN
    fee_bps_total: float = NAN
    impact_bps_total: float = NAN
    buy_out_base: float = NAN
    sell_in_base: float = NAN
    buy_fee_quote: float = NAN
    sell_fee_base: float = NAN

    def values(self) -> list[str]:
        """Cell strings in CSV_HEADER order."""
        return [format_cell(v) for v in astuple(self)]


def format_cell(value: object) -> str:
    """Render one cell; NaN floats become "NaN"."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        return repr(value)
    return str(value)


def utc_timestamp() -> str:
    """Current time as ISO 8601 UTC with milliseconds (2024-01-01T00:00:00.000Z)."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_row(context: ProbeContext, outcome: SizeOutcome, ts_utc: str | None = None) -> ProbeRow:
    """Build the row for one size outcome.

    Args:
        context: Run context (dex, pool, units)
        outcome: SizeSucceeded or SizeFailed
        ts_utc: Timestamp override, defaults to now

    Returns:
        ProbeRow with measured fields filled on success, NaN on failure
    """
    pool = context.pool
    units = context.units
    identity = {
        "ts_utc": ts_utc if ts_utc is not None else utc_timestamp(),
        "dex": context.dex,
        "pool": pool.address,
        "program_id": pool.program_id,
        "tick_spacing": pool.tick_spacing,
        "fee_ppm": pool.fee_rate_ppm,
        "fee_bps": f"{pool.fee_bps:.4f}",
        "protocol_fee_ppm": pool.protocol_fee_rate_ppm,
        "liquidity_u128": pool.liquidity,
        "sqrt_price_x64": pool.sqrt_price_q64,
        "tick_current": pool.current_tick,
        "mint_a": pool.mint_a,
        "dec_a": pool.decimals_a,
        "symbol_a": symbol_for_mint(pool.mint_a),
        "mint_b": pool.mint_b,
        "dec_b": pool.decimals_b,
        "symbol_b": symbol_for_mint(pool.mint_b),
        "base_mint": units.base_mint,
        "base_decimals": units.base_decimals,
        "base_symbol": symbol_for_mint(units.base_mint),
        "quote_mint": units.quote_mint,
        "quote_decimals": units.quote_decimals,
        "quote_symbol": symbol_for_mint(units.quote_mint),
        "usd_per_quote": units.stable_per_quote,
    }

    if isinstance(outcome, SizeFailed):
        return ProbeRow(**identity)

    if not isinstance(outcome, SizeSucceeded):
        raise TypeError(f"Unknown size outcome: {type(outcome).__name__}")

    metrics = outcome.metrics
    legs = outcome.legs
    return ProbeRow(
        **identity,
        mid_usd_per_base=metrics.mid_price,
        usd_notional=outcome.size,
        buy_px_usd_per_base=metrics.buy_price,
        sell_px_usd_per_base=metrics.sell_price,
        roundtrip_bps=metrics.roundtrip_bps,
        fee_bps_total=metrics.fee_bps_total,
        impact_bps_total=metrics.impact_bps,
        buy_out_base=legs.buy_out_base,
        sell_in_base=legs.sell_in_base,
        buy_fee_quote=legs.buy_fee_quote,
        sell_fee_base=legs.sell_fee_base,
    )


__all__ = ["CSV_HEADER", "ProbeRow", "build_row", "format_cell", "utc_timestamp"]
