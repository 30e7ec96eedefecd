"""Stable-currency conversion through an oracle pool.

The oracle pool pairs the stable token with either the quote or the base
token of the probed pool:

- stable / quote: stable_per_quote is read directly (one hop)
- stable / base: stable_per_quote = stable_per_base / quote_per_base (two hops)

Any other pairing yields an OracleResult without a rate; deciding whether
that is fatal is the caller's job.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import structlog

from clmm_probe.math.price import mid_stable_per_a
from clmm_probe.models.types import PoolState

logger = structlog.get_logger()


@dataclass(frozen=True)
class OracleResult:
    """Outcome of an oracle lookup.

    Attributes:
        stable_per_quote: Stable per quote token, NaN if no rate
        stable_per_base: Stable per base token, NaN if no rate
        source: Which pairing produced the rate ("quote", "base" or "none")
        reason: Why no rate was found, if so
    """

    stable_per_quote: float = math.nan
    stable_per_base: float = math.nan
    source: str = "none"
    reason: str = ""

    @property
    def has_rate(self) -> bool:
        """True if a usable stable_per_quote was found."""
        return math.isfinite(self.stable_per_quote) and self.stable_per_quote > 0

    @classmethod
    def no_rate(cls, reason: str) -> OracleResult:
        return cls(reason=reason)


class OracleConverter:
    """Derives stable_per_quote for a (quote, base) pair from an oracle pool."""

    def __init__(self, stable_mint: str):
        self.stable_mint = stable_mint

    def convert(
        self,
        oracle: PoolState,
        quote_mint: str,
        base_mint: str,
        quote_per_base: float,
    ) -> OracleResult:
        """Compute the stable conversion rate.

        Args:
            oracle: Oracle pool snapshot
            quote_mint: Quote mint of the probed pool
            base_mint: Base mint of the probed pool
            quote_per_base: Mid price of the probed pool

        Returns:
            OracleResult, with has_rate False if the oracle cannot be used
        """
        if not oracle.has_mint(self.stable_mint):
            return OracleResult.no_rate(
                f"oracle pool {oracle.address} does not contain stable mint {self.stable_mint}"
            )

        other = oracle.other_mint(self.stable_mint)
        stable_per_other, _ = mid_stable_per_a(
            oracle.sqrt_price_q64,
            oracle.mint_a,
            oracle.decimals_a,
            oracle.mint_b,
            oracle.decimals_b,
            self.stable_mint,
        )
        if not (math.isfinite(stable_per_other) and stable_per_other > 0):
            return OracleResult.no_rate(f"oracle pool {oracle.address} has no usable price")

        if other == quote_mint:
            result = OracleResult(
                stable_per_quote=stable_per_other,
                stable_per_base=stable_per_other * quote_per_base,
                source="quote",
            )
        elif other == base_mint:
            if not (math.isfinite(quote_per_base) and quote_per_base > 0):
                return OracleResult.no_rate("probed pool mid price is not positive")
            result = OracleResult(
                stable_per_quote=stable_per_other / quote_per_base,
                stable_per_base=stable_per_other,
                source="base",
            )
        else:
            return OracleResult.no_rate(
                f"oracle pool {oracle.address} pairs the stable mint with neither "
                f"quote {quote_mint} nor base {base_mint}"
            )

        logger.info(
            "oracle_rate_resolved",
            oracle=oracle.address,
            source=result.source,
            stable_per_quote=result.stable_per_quote,
            stable_per_base=result.stable_per_base,
        )
        return result


__all__ = ["OracleResult", "OracleConverter"]
