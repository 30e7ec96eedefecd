"""Tests for round-trip leg quoting."""

import pytest

from clmm_probe.engine.quote_engine import QuoteEngine
from clmm_probe.errors import QuoteUnavailableError, ZeroOutputError
from clmm_probe.models.types import CurveQuote, SizeUnit, UnitConfig
from clmm_probe.venues.quoter import MockCurveQuoter, QuoteKey
from tests.helpers.constants import SCENARIO_BUY_PX, SCENARIO_SELL_PX, USDC, WSOL
from tests.helpers.factories import StaticVenueAdapter

RAW_10K_USDC = 10_000_000_000


class TestQuoteRoundTrip:
    """Tests for QuoteEngine.quote_round_trip."""

    def test_scenario_legs(self, sol_usdc_pool, sol_usdc_units, scenario_adapter, scenario_quoter):
        engine = QuoteEngine(scenario_adapter)
        legs = engine.quote_round_trip(sol_usdc_pool, sol_usdc_units, 10000.0)

        assert legs.size == 10000.0
        assert legs.quote_amount == 10000.0
        assert legs.buy.mint_in == USDC and legs.buy.mint_out == WSOL
        assert legs.sell.mint_in == WSOL and legs.sell.mint_out == USDC
        assert legs.buy.amount_in == 10000.0
        assert legs.sell.amount_out == 10000.0
        assert legs.buy_out_base == pytest.approx(10000.0 / SCENARIO_BUY_PX, rel=1e-9)
        assert legs.sell_in_base == pytest.approx(10000.0 / SCENARIO_SELL_PX, rel=1e-9)
        assert legs.buy_fee_quote == pytest.approx(4.0)
        assert legs.sell_fee_base > 0

    def test_buy_is_exact_in_sell_is_exact_out_of_quote(
        self, sol_usdc_pool, sol_usdc_units, scenario_adapter, scenario_quoter
    ):
        QuoteEngine(scenario_adapter).quote_round_trip(sol_usdc_pool, sol_usdc_units, 10000.0)

        assert scenario_quoter.calls == [
            ("exact_in", USDC, RAW_10K_USDC),
            ("exact_out", USDC, RAW_10K_USDC),
        ]

    def test_stable_size_converted_to_quote(self, sol_usdc_pool):
        """A stable-denominated size is divided by stable_per_quote."""
        units = UnitConfig(
            quote_mint=USDC,
            base_mint=WSOL,
            quote_decimals=6,
            base_decimals=9,
            size_unit=SizeUnit.STABLE,
            price_unit=SizeUnit.STABLE,
            quote_per_base=208.9,
            stable_per_quote=2.0,
        )
        quoter = MockCurveQuoter(default_rate=(1, 200))
        adapter = StaticVenueAdapter([sol_usdc_pool], quoter)

        legs = QuoteEngine(adapter).quote_round_trip(sol_usdc_pool, units, 100.0)

        assert legs.quote_amount == 50.0
        assert quoter.calls[0] == ("exact_in", USDC, 50_000_000)

    def test_zero_buy_output(self, sol_usdc_pool, sol_usdc_units):
        quoter = MockCurveQuoter(
            quotes={QuoteKey(USDC, RAW_10K_USDC, True): CurveQuote(RAW_10K_USDC, 0, 0)}
        )
        adapter = StaticVenueAdapter([sol_usdc_pool], quoter)

        with pytest.raises(ZeroOutputError, match="BUY returned zero out amount"):
            QuoteEngine(adapter).quote_round_trip(sol_usdc_pool, sol_usdc_units, 10000.0)
        assert len(quoter.calls) == 1

    def test_zero_sell_input(self, sol_usdc_pool, sol_usdc_units):
        quoter = MockCurveQuoter(
            quotes={
                QuoteKey(USDC, RAW_10K_USDC, True): CurveQuote(RAW_10K_USDC, 47 * 10**9, 0),
                QuoteKey(USDC, RAW_10K_USDC, False): CurveQuote(0, RAW_10K_USDC, 0),
            }
        )
        adapter = StaticVenueAdapter([sol_usdc_pool], quoter)

        with pytest.raises(ZeroOutputError, match="SELL returned zero in amount"):
            QuoteEngine(adapter).quote_round_trip(sol_usdc_pool, sol_usdc_units, 10000.0)

    def test_provider_error_propagates_as_leg_error(self, sol_usdc_pool, sol_usdc_units):
        adapter = StaticVenueAdapter([sol_usdc_pool], MockCurveQuoter())
        with pytest.raises(QuoteUnavailableError):
            QuoteEngine(adapter).quote_round_trip(sol_usdc_pool, sol_usdc_units, 5.0)

    def test_unexpected_provider_error_wrapped(self, sol_usdc_pool, sol_usdc_units):
        """Provider failures outside the leg hierarchy become QuoteUnavailableError."""

        class BrokenQuoter(MockCurveQuoter):
            def quote_exact_in(self, pool, mint_in, amount_in):
                raise ArithmeticError("overflow")

        adapter = StaticVenueAdapter([sol_usdc_pool], BrokenQuoter())
        with pytest.raises(QuoteUnavailableError, match="overflow"):
            QuoteEngine(adapter).quote_round_trip(sol_usdc_pool, sol_usdc_units, 5.0)
