"""CLMM venue adapters and curve quoters."""

from clmm_probe.venues.base import VenueAdapter, normalize_fee_ppm
from clmm_probe.venues.orca import OrcaWhirlpoolAdapter
from clmm_probe.venues.quoter import (
    CurveQuoteProvider,
    DepthLevel,
    MockCurveQuoter,
    QuoteKey,
    TickCurve,
    TickCurveQuoter,
)
from clmm_probe.venues.raydium import RaydiumClmmAdapter
from clmm_probe.venues.registry import get_adapter
from clmm_probe.venues.rpc import AccountData, SolanaAccountReader
from clmm_probe.venues.tick_arrays import TickArrayVenueAdapter

__all__ = [
    # Base classes
    "VenueAdapter",
    "TickArrayVenueAdapter",
    "normalize_fee_ppm",
    # Quoters
    "CurveQuoteProvider",
    "MockCurveQuoter",
    "QuoteKey",
    "TickCurve",
    "TickCurveQuoter",
    "DepthLevel",
    # Venues
    "OrcaWhirlpoolAdapter",
    "RaydiumClmmAdapter",
    "get_adapter",
    # RPC
    "AccountData",
    "SolanaAccountReader",
]
