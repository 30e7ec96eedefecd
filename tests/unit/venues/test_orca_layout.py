"""Tests for Orca Whirlpool account decoding."""

import pytest

from clmm_probe.errors import UnsupportedPoolTypeError
from clmm_probe.venues.orca.layout import (
    TICK_ARRAY_ACCOUNT_SIZE,
    WHIRLPOOL_SIZE,
    decode_tick_array,
    decode_whirlpool,
    tick_array_address,
)
from tests.helpers.accounts import orca_tick_array_bytes, raydium_pool_bytes, whirlpool_bytes
from tests.helpers.constants import (
    ORCA_WHIRLPOOL_PROGRAM_ID,
    RAYDIUM_AMM_CONFIG,
    SOL_USDC_POOL,
    USDC,
    WSOL,
)
from tests.helpers.factories import sqrt_price_for_price


class TestDecodeWhirlpool:
    def test_decodes_fields(self):
        sqrt_price = sqrt_price_for_price(208.9, 9, 6)
        data = whirlpool_bytes(
            WSOL,
            USDC,
            sqrt_price=sqrt_price,
            tick_current=-15_660,
            liquidity=123 * 10**12,
            tick_spacing=4,
            fee_rate=400,
            protocol_fee_rate=1300,
        )
        assert len(data) == WHIRLPOOL_SIZE

        pool = decode_whirlpool(data)

        assert pool.token_mint_a == WSOL
        assert pool.token_mint_b == USDC
        assert pool.sqrt_price == sqrt_price
        assert pool.tick_current_index == -15_660
        assert pool.liquidity == 123 * 10**12
        assert pool.tick_spacing == 4
        assert pool.fee_rate == 400
        assert pool.protocol_fee_rate == 1300

    def test_rejects_raydium_account(self):
        data = raydium_pool_bytes(RAYDIUM_AMM_CONFIG, WSOL, USDC, 9, 6, 2**64, 0)
        with pytest.raises(UnsupportedPoolTypeError):
            decode_whirlpool(data)


class TestDecodeTickArray:
    def test_initialized_ticks_only(self):
        data = orca_tick_array_bytes(-5632, {0: 7, 10: -(10**20), 87: 3})
        assert len(data) == TICK_ARRAY_ACCOUNT_SIZE

        start, ticks = decode_tick_array(data, tick_spacing=64)

        assert start == -5632
        assert ticks == {-5632: 7, -5632 + 640: -(10**20), -5632 + 87 * 64: 3}

    def test_rejects_whirlpool_bytes(self):
        data = whirlpool_bytes(WSOL, USDC, sqrt_price=2**64, tick_current=0)
        with pytest.raises(UnsupportedPoolTypeError):
            decode_tick_array(data, tick_spacing=64)


class TestTickArrayAddress:
    def test_deterministic_and_start_dependent(self):
        first = tick_array_address(ORCA_WHIRLPOOL_PROGRAM_ID, SOL_USDC_POOL, 0)
        again = tick_array_address(ORCA_WHIRLPOOL_PROGRAM_ID, SOL_USDC_POOL, 0)
        other = tick_array_address(ORCA_WHIRLPOOL_PROGRAM_ID, SOL_USDC_POOL, -5632)

        assert first == again
        assert first != other
