"""Round-trip execution metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass

from clmm_probe.engine.quote_engine import RoundTripLegs
from clmm_probe.errors import MalformedPoolStateError
from clmm_probe.math.price import to_bps
from clmm_probe.models.types import UnitConfig


@dataclass(frozen=True)
class RoundTripMetrics:
    """Prices (in the run's price unit) and bps metrics for one size."""

    mid_price: float
    buy_price: float
    sell_price: float
    roundtrip_bps: float
    fee_bps_total: float
    impact_bps: float


def require_valid_mid(mid: float) -> float:
    """Check that a mid price can be used as a denominator.

    Raises:
        MalformedPoolStateError: If mid is zero, negative or not finite
    """
    if not (math.isfinite(mid) and mid > 0):
        raise MalformedPoolStateError(f"Mid price {mid} is not a positive finite number")
    return mid


class MetricsCalculator:
    """Splits a round trip into fee and residual impact components.

    roundtrip_bps = (buy - sell) / mid * 10_000
    impact_bps    = max(roundtrip_bps - 2 * fee_bps_one_leg, 0)

    A realized spread below twice the nominal fee reports zero impact.
    """

    def __init__(self, fee_rate_ppm: int):
        self.fee_rate_ppm = fee_rate_ppm

    @property
    def fee_bps_one_leg(self) -> float:
        return self.fee_rate_ppm / 100

    @property
    def fee_bps_total(self) -> float:
        return 2 * self.fee_bps_one_leg

    def impact_bps(self, roundtrip_bps: float) -> float:
        """Residual impact, clamped at zero."""
        return max(roundtrip_bps - self.fee_bps_total, 0.0)

    def compute(self, units: UnitConfig, legs: RoundTripLegs) -> RoundTripMetrics:
        """Compute metrics for one size.

        Buy and sell prices are the leg notional in the price unit divided by
        the base amount received (buy) or spent (sell).
        """
        mid = require_valid_mid(units.mid_price)
        notional = units.notional_in_price_unit(legs.size, legs.quote_amount)
        buy_price = notional / legs.buy_out_base
        sell_price = notional / legs.sell_in_base
        roundtrip_bps = to_bps((buy_price - sell_price) / mid)
        return RoundTripMetrics(
            mid_price=mid,
            buy_price=buy_price,
            sell_price=sell_price,
            roundtrip_bps=roundtrip_bps,
            fee_bps_total=self.fee_bps_total,
            impact_bps=self.impact_bps(roundtrip_bps),
        )


__all__ = ["MetricsCalculator", "RoundTripMetrics", "require_valid_mid"]
