"""Base classes for CLMM venue adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog

from clmm_probe.constants import PPM_SCALE
from clmm_probe.errors import QuoteLegError, QuoteUnavailableError
from clmm_probe.math.amounts import from_raw_amount, to_raw_amount
from clmm_probe.models.types import CurveQuote, PoolState, QuoteLegResult
from clmm_probe.venues.quoter import CurveQuoteProvider, DepthLevel

logger = structlog.get_logger()


def normalize_fee_ppm(raw: float | int) -> int:
    """Normalize a venue fee to parts-per-million.

    Venues report fees either as a ppm integer (400) or as a fraction
    (0.0004); both normalize to 400.

    Args:
        raw: Fee as reported by the venue

    Returns:
        Fee in ppm
    """
    if raw < 0:
        raise ValueError(f"Fee cannot be negative: {raw}")
    if isinstance(raw, float) and raw < 1:
        return round(raw * PPM_SCALE)
    return round(raw)


class VenueAdapter(ABC):
    """Abstract base class for CLMM venue adapters.

    An adapter fetches a pool snapshot once and answers quote legs against
    it. Amounts crossing this boundary are human (decimal-scaled) floats;
    the curve quote provider underneath works in raw integer units.
    """

    dex: str = ""
    program_id: str = ""

    @abstractmethod
    def fetch_pool_state(self, pool_id: str) -> PoolState:
        """Fetch and decode a pool snapshot.

        Args:
            pool_id: Pool account address (base58)

        Returns:
            PoolState with fees normalized to ppm

        Raises:
            PoolNotFoundError: If the account is missing or unreachable
            UnsupportedPoolTypeError: If the account is not a pool of this venue
        """
        ...

    @abstractmethod
    def curve_quoter(self, pool: PoolState) -> CurveQuoteProvider:
        """Quote provider for a previously fetched pool."""
        ...

    def depth_profile(
        self, pool: PoolState, arrays_each_side: int | None = None
    ) -> list[DepthLevel]:
        """Initialized ticks around the active tick, if the venue loads them."""
        return []

    def quote_exact_in(self, pool: PoolState, mint_in: str, amount: float) -> QuoteLegResult:
        """Quote spending exactly `amount` of mint_in.

        Args:
            pool: Pool snapshot
            mint_in: Input mint (one side of the pool)
            amount: Input amount in human units

        Returns:
            QuoteLegResult with amount_out in the other token

        Raises:
            QuoteLegError: If the leg cannot be quoted
        """
        mint_out = pool.other_mint(mint_in)
        quote = self._call_provider(pool, "exact_in", mint_in, amount)
        return self._to_leg(pool, mint_in, mint_out, quote)

    def quote_exact_out(self, pool: PoolState, mint_out: str, amount: float) -> QuoteLegResult:
        """Quote receiving exactly `amount` of mint_out.

        Args:
            pool: Pool snapshot
            mint_out: Output mint (one side of the pool)
            amount: Output amount in human units

        Returns:
            QuoteLegResult with the required amount_in (fee included)

        Raises:
            QuoteLegError: If the leg cannot be quoted
        """
        mint_in = pool.other_mint(mint_out)
        quote = self._call_provider(pool, "exact_out", mint_out, amount)
        return self._to_leg(pool, mint_in, mint_out, quote)

    def _call_provider(self, pool: PoolState, kind: str, mint: str, amount: float) -> CurveQuote:
        try:
            raw_amount = to_raw_amount(amount, pool.decimals_of(mint))
            provider = self.curve_quoter(pool)
            if kind == "exact_in":
                return provider.quote_exact_in(pool, mint, raw_amount)
            return provider.quote_exact_out(pool, mint, raw_amount)
        except QuoteLegError:
            raise
        except Exception as e:
            logger.warning(
                "curve_quote_failed",
                dex=self.dex,
                pool=pool.address,
                kind=kind,
                mint=mint,
                amount=amount,
                error=str(e),
            )
            raise QuoteUnavailableError(f"{kind} quote failed: {e}") from e

    @staticmethod
    def _to_leg(pool: PoolState, mint_in: str, mint_out: str, quote: CurveQuote) -> QuoteLegResult:
        dec_in = pool.decimals_of(mint_in)
        dec_out = pool.decimals_of(mint_out)
        return QuoteLegResult(
            mint_in=mint_in,
            mint_out=mint_out,
            amount_in=from_raw_amount(quote.amount_in, dec_in),
            amount_out=from_raw_amount(quote.amount_out, dec_out),
            fee_amount=from_raw_amount(quote.fee_amount, dec_in),
            metadata=dict(quote.metadata),
        )


__all__ = ["VenueAdapter", "normalize_fee_ppm"]
