"""Round-trip quoting for one size."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from clmm_probe.errors import ZeroOutputError
from clmm_probe.models.types import PoolState, QuoteLegResult, UnitConfig
from clmm_probe.venues.base import VenueAdapter

logger = structlog.get_logger()


@dataclass(frozen=True)
class RoundTripLegs:
    """Buy and sell legs quoted for the same nominal quote amount.

    Attributes:
        size: Requested size in the run's size unit
        quote_amount: Size converted to quote-token units
        buy: Exact-in leg, quote -> base
        sell: Exact-out leg, base -> quote
    """

    size: float
    quote_amount: float
    buy: QuoteLegResult
    sell: QuoteLegResult

    @property
    def buy_out_base(self) -> float:
        return self.buy.amount_out

    @property
    def sell_in_base(self) -> float:
        return self.sell.amount_in

    @property
    def buy_fee_quote(self) -> float:
        return self.buy.fee_amount

    @property
    def sell_fee_base(self) -> float:
        return self.sell.fee_amount


class QuoteEngine:
    """Quotes both legs of a round trip against one pool snapshot.

    Both legs use zero slippage tolerance and the same quote amount:
    BUY spends exactly quote_amount of quote (exact in), SELL receives
    exactly quote_amount of quote (exact out).
    """

    def __init__(self, adapter: VenueAdapter):
        self.adapter = adapter

    def quote_round_trip(self, pool: PoolState, units: UnitConfig, size: float) -> RoundTripLegs:
        """Quote BUY then SELL for one size.

        Args:
            pool: Pool snapshot shared by the run
            units: Resolved units for the run
            size: Size in units.size_unit

        Returns:
            RoundTripLegs with both legs

        Raises:
            ZeroOutputError: If either leg yields no base amount
            QuoteLegError: If either leg cannot be quoted
        """
        quote_amount = units.quote_amount_for(size)

        buy = self.adapter.quote_exact_in(pool, units.quote_mint, quote_amount)
        if not buy.amount_out > 0:
            raise ZeroOutputError(f"BUY returned zero out amount for {quote_amount} quote")

        sell = self.adapter.quote_exact_out(pool, units.quote_mint, quote_amount)
        if not sell.amount_in > 0:
            raise ZeroOutputError(f"SELL returned zero in amount for {quote_amount} quote")

        logger.debug(
            "round_trip_quoted",
            size=size,
            quote_amount=quote_amount,
            buy_out_base=buy.amount_out,
            sell_in_base=sell.amount_in,
            buy_ticks_crossed=buy.metadata.get("ticks_crossed"),
            sell_ticks_crossed=sell.metadata.get("ticks_crossed"),
        )
        return RoundTripLegs(size=size, quote_amount=quote_amount, buy=buy, sell=sell)


__all__ = ["QuoteEngine", "RoundTripLegs"]
