"""Tests for stable-currency conversion through oracle pools."""

import math

import pytest

from clmm_probe.oracle import OracleConverter, OracleResult
from tests.helpers.constants import (
    BTC_USDC_POOL,
    BTC_WRAPPED,
    ORCA_SOL_USDC_POOL,
    SOL_BTC_POOL,
    UNKNOWN_MINT,
    USDC,
    USDT,
    WSOL,
)
from tests.helpers.factories import make_pool_state

SOL_USD = 208.9
BTC_PER_SOL = 0.0021
BTC_USD = SOL_USD / BTC_PER_SOL


@pytest.fixture
def converter() -> OracleConverter:
    return OracleConverter(USDC)


class TestOracleConverter:
    """Tests for one-hop and two-hop conversion."""

    def test_oracle_pairs_stable_with_quote(self, converter):
        """BTC/USDC oracle for a SOL/BTC pool reads stable-per-quote directly."""
        oracle = make_pool_state(
            address=BTC_USDC_POOL, mint_a=BTC_WRAPPED, mint_b=USDC, decimals_a=8, price=BTC_USD
        )

        result = converter.convert(oracle, BTC_WRAPPED, WSOL, BTC_PER_SOL)

        assert result.has_rate
        assert result.source == "quote"
        assert result.stable_per_quote == pytest.approx(BTC_USD)
        assert result.stable_per_base == pytest.approx(SOL_USD)

    def test_oracle_pairs_stable_with_base(self, converter):
        """SOL/USDC oracle for a SOL/BTC pool divides through the probed mid."""
        oracle = make_pool_state(address=ORCA_SOL_USDC_POOL, price=SOL_USD)

        result = converter.convert(oracle, BTC_WRAPPED, WSOL, BTC_PER_SOL)

        assert result.source == "base"
        assert result.stable_per_base == pytest.approx(SOL_USD)
        assert result.stable_per_quote == pytest.approx(BTC_USD)

    def test_one_hop_and_two_hop_agree(self, converter):
        """Consistent oracles give the same rate whichever side they price."""
        btc_oracle = make_pool_state(
            address=BTC_USDC_POOL, mint_a=BTC_WRAPPED, mint_b=USDC, decimals_a=8, price=BTC_USD
        )
        sol_oracle = make_pool_state(address=ORCA_SOL_USDC_POOL, price=SOL_USD)

        one_hop = converter.convert(btc_oracle, BTC_WRAPPED, WSOL, BTC_PER_SOL)
        two_hop = converter.convert(sol_oracle, BTC_WRAPPED, WSOL, BTC_PER_SOL)

        assert one_hop.stable_per_quote == pytest.approx(two_hop.stable_per_quote, rel=1e-9)

    def test_stable_as_token_a(self, converter):
        oracle = make_pool_state(
            address=ORCA_SOL_USDC_POOL,
            mint_a=USDC,
            mint_b=WSOL,
            decimals_a=6,
            decimals_b=9,
            price=1 / SOL_USD,
        )

        result = converter.convert(oracle, WSOL, UNKNOWN_MINT, 3.5)

        assert result.source == "quote"
        assert result.stable_per_quote == pytest.approx(SOL_USD)

    def test_oracle_without_stable(self, converter):
        oracle = make_pool_state(
            address=SOL_BTC_POOL, mint_b=BTC_WRAPPED, decimals_b=8, price=BTC_PER_SOL
        )

        result = converter.convert(oracle, BTC_WRAPPED, WSOL, BTC_PER_SOL)

        assert not result.has_rate
        assert "does not contain stable mint" in result.reason

    def test_oracle_pairs_unrelated_token(self, converter):
        oracle = make_pool_state(mint_a=USDT, mint_b=USDC, decimals_a=6, price=1.0)

        result = converter.convert(oracle, BTC_WRAPPED, WSOL, BTC_PER_SOL)

        assert not result.has_rate
        assert "neither" in result.reason

    def test_zero_price_oracle(self, converter):
        oracle = make_pool_state(address=ORCA_SOL_USDC_POOL, sqrt_price_q64=0)

        result = converter.convert(oracle, WSOL, UNKNOWN_MINT, 2.0)

        assert not result.has_rate
        assert "no usable price" in result.reason


def test_no_rate_defaults():
    result = OracleResult.no_rate("missing")
    assert math.isnan(result.stable_per_quote)
    assert result.source == "none"
    assert result.has_rate is False
