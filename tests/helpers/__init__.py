"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Mints, pool addresses and scenario numbers
- factories: Pool/config factories and venue/RPC test doubles
- accounts: Raw account byte builders for layout tests
"""

from tests.helpers.constants import (
    BTC_WRAPPED,
    MINT_DECIMALS,
    SOBTC,
    SOL_BTC_POOL,
    SOL_USDC_POOL,
    UNKNOWN_MINT,
    USDC,
    USDT,
    WSOL,
    make_pubkey,
)
from tests.helpers.factories import (
    StaticVenueAdapter,
    StubRpcClient,
    make_config,
    make_pool_state,
    round_trip_quotes,
    sqrt_price_for_price,
)

__all__ = [
    # Constants
    "USDC",
    "USDT",
    "WSOL",
    "SOBTC",
    "BTC_WRAPPED",
    "UNKNOWN_MINT",
    "MINT_DECIMALS",
    "SOL_USDC_POOL",
    "SOL_BTC_POOL",
    "make_pubkey",
    # Factories
    "make_pool_state",
    "make_config",
    "round_trip_quotes",
    "sqrt_price_for_price",
    "StaticVenueAdapter",
    "StubRpcClient",
]
