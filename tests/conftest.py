"""Pytest configuration and fixtures."""

import pytest
import structlog

from clmm_probe.engine.runner import ProbeRun, ProbeRunner
from clmm_probe.models.types import PoolState, SizeUnit, UnitConfig
from clmm_probe.venues.quoter import MockCurveQuoter
from tests.helpers.constants import (
    SCENARIO_BUY_PX,
    SCENARIO_FEE_PPM,
    SCENARIO_MID,
    SCENARIO_SELL_PX,
    USDC,
    WSOL,
)
from tests.helpers.factories import (
    StaticVenueAdapter,
    make_config,
    make_pool_state,
    round_trip_quotes,
)


@pytest.fixture
def sol_usdc_pool() -> PoolState:
    """SOL (9) / USDC (6) pool at 208.9 with a 400 ppm fee."""
    return make_pool_state(price=SCENARIO_MID, fee_rate_ppm=SCENARIO_FEE_PPM)


@pytest.fixture
def sol_usdc_units(sol_usdc_pool: PoolState) -> UnitConfig:
    """Stable units for the SOL/USDC pool (quote is the stable token)."""
    return UnitConfig(
        quote_mint=USDC,
        base_mint=WSOL,
        quote_decimals=6,
        base_decimals=9,
        size_unit=SizeUnit.STABLE,
        price_unit=SizeUnit.STABLE,
        quote_per_base=SCENARIO_MID,
        stable_per_quote=1.0,
    )


@pytest.fixture
def scenario_quoter(sol_usdc_pool: PoolState) -> MockCurveQuoter:
    """Mock quoter realizing buy 209.0106 / sell 208.8431 at sizes 100, 1000, 10000."""
    quotes = round_trip_quotes(
        sol_usdc_pool,
        USDC,
        [100.0, 1000.0, 10000.0],
        buy_px=SCENARIO_BUY_PX,
        sell_px=SCENARIO_SELL_PX,
    )
    return MockCurveQuoter(quotes=quotes)


@pytest.fixture
def scenario_adapter(
    sol_usdc_pool: PoolState, scenario_quoter: MockCurveQuoter
) -> StaticVenueAdapter:
    """Static adapter serving the SOL/USDC pool with scenario quotes."""
    return StaticVenueAdapter([sol_usdc_pool], scenario_quoter)


@pytest.fixture
def scenario_run(scenario_adapter: StaticVenueAdapter) -> ProbeRun:
    """Completed run over sizes 100, 1000 and 10000 of the scenario adapter."""
    config = make_config(sizes=[100.0, 1000.0, 10000.0])
    return ProbeRunner(scenario_adapter).run(config)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo CLI logging configuration so later tests do not write to a stale stream."""
    yield
    structlog.reset_defaults()
