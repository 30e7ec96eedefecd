"""Builders for raw Orca / Raydium account bytes.

Only the fields the decoders read are populated; everything else is zero.
"""

import struct

from solders.pubkey import Pubkey

from clmm_probe.venues.orca import layout as orca_layout
from clmm_probe.venues.raydium import layout as raydium_layout


def _put_pubkey(buf: bytearray, offset: int, key: str) -> None:
    buf[offset : offset + 32] = bytes(Pubkey.from_string(key))


def _put_u128(buf: bytearray, offset: int, value: int, signed: bool = False) -> None:
    buf[offset : offset + 16] = value.to_bytes(16, "little", signed=signed)


def mint_bytes(decimals: int) -> bytes:
    """SPL Token mint account (82 bytes) with the given decimals."""
    buf = bytearray(82)
    buf[44] = decimals
    return bytes(buf)


def whirlpool_bytes(
    mint_a: str,
    mint_b: str,
    sqrt_price: int,
    tick_current: int,
    liquidity: int = 10**13,
    tick_spacing: int = 4,
    fee_rate: int = 400,
    protocol_fee_rate: int = 1300,
) -> bytes:
    buf = bytearray(orca_layout.WHIRLPOOL_SIZE)
    buf[0:8] = orca_layout.WHIRLPOOL_DISCRIMINATOR
    struct.pack_into("<H", buf, 41, tick_spacing)
    struct.pack_into("<H", buf, 45, fee_rate)
    struct.pack_into("<H", buf, 47, protocol_fee_rate)
    _put_u128(buf, 49, liquidity)
    _put_u128(buf, 65, sqrt_price)
    struct.pack_into("<i", buf, 81, tick_current)
    _put_pubkey(buf, 101, mint_a)
    _put_pubkey(buf, 181, mint_b)
    return bytes(buf)


def orca_tick_array_bytes(start_tick_index: int, ticks: dict[int, int]) -> bytes:
    """Whirlpool TickArray; ticks maps array slot (0..87) to liquidity_net."""
    buf = bytearray(orca_layout.TICK_ARRAY_ACCOUNT_SIZE)
    buf[0:8] = orca_layout.TICK_ARRAY_DISCRIMINATOR
    struct.pack_into("<i", buf, 8, start_tick_index)
    for slot, net in ticks.items():
        offset = 12 + slot * orca_layout.TICK_SIZE
        buf[offset] = 1
        _put_u128(buf, offset + 1, net, signed=True)
        _put_u128(buf, offset + 17, abs(net))
    return bytes(buf)


def raydium_pool_bytes(
    amm_config: str,
    mint_0: str,
    mint_1: str,
    decimals_0: int,
    decimals_1: int,
    sqrt_price: int,
    tick_current: int,
    liquidity: int = 10**13,
    tick_spacing: int = 1,
) -> bytes:
    buf = bytearray(1544)
    buf[0:8] = raydium_layout.POOL_STATE_DISCRIMINATOR
    _put_pubkey(buf, 9, amm_config)
    _put_pubkey(buf, 73, mint_0)
    _put_pubkey(buf, 105, mint_1)
    buf[233] = decimals_0
    buf[234] = decimals_1
    struct.pack_into("<H", buf, 235, tick_spacing)
    _put_u128(buf, 237, liquidity)
    _put_u128(buf, 253, sqrt_price)
    struct.pack_into("<i", buf, 269, tick_current)
    return bytes(buf)


def amm_config_bytes(
    trade_fee_rate: int = 400, protocol_fee_rate: int = 120000, tick_spacing: int = 1
) -> bytes:
    buf = bytearray(117)
    buf[0:8] = raydium_layout.AMM_CONFIG_DISCRIMINATOR
    struct.pack_into("<I", buf, 43, protocol_fee_rate)
    struct.pack_into("<I", buf, 47, trade_fee_rate)
    struct.pack_into("<H", buf, 51, tick_spacing)
    return bytes(buf)


def raydium_tick_array_bytes(pool: str, start_tick_index: int, ticks: dict[int, int]) -> bytes:
    """Raydium TickArrayState; ticks maps absolute tick index to liquidity_net."""
    buf = bytearray(10240)
    buf[0:8] = raydium_layout.TICK_ARRAY_DISCRIMINATOR
    _put_pubkey(buf, 8, pool)
    struct.pack_into("<i", buf, 40, start_tick_index)
    for slot, (tick, net) in enumerate(sorted(ticks.items())):
        offset = 44 + slot * raydium_layout.TICK_STATE_SIZE
        struct.pack_into("<i", buf, offset, tick)
        _put_u128(buf, offset + 4, net, signed=True)
    return bytes(buf)
