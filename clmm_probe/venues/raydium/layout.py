"""Raydium CLMM account layouts."""

from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey

from clmm_probe.venues.layout import (
    anchor_discriminator,
    check_account,
    read_i32,
    read_i128,
    read_pubkey,
    read_u8,
    read_u16,
    read_u32,
    read_u128,
)

POOL_STATE_DISCRIMINATOR = anchor_discriminator("PoolState")
AMM_CONFIG_DISCRIMINATOR = anchor_discriminator("AmmConfig")
TICK_ARRAY_DISCRIMINATOR = anchor_discriminator("TickArrayState")

TICK_ARRAY_SIZE = 60
TICK_STATE_SIZE = 168

# PoolState field offsets
_AMM_CONFIG = 9
_MINT_0 = 73
_MINT_1 = 105
_DECIMALS_0 = 233
_DECIMALS_1 = 234
_TICK_SPACING = 235
_LIQUIDITY = 237
_SQRT_PRICE = 253
_TICK_CURRENT = 269

# AmmConfig field offsets
_PROTOCOL_FEE_RATE = 43
_TRADE_FEE_RATE = 47
_CONFIG_TICK_SPACING = 51

# TickArrayState field offsets
_START_TICK_INDEX = 40
_TICKS = 44


@dataclass(frozen=True)
class RaydiumPoolData:
    """Decoded subset of a Raydium CLMM PoolState account."""

    amm_config: str
    token_mint_0: str
    token_mint_1: str
    mint_decimals_0: int
    mint_decimals_1: int
    tick_spacing: int
    liquidity: int
    sqrt_price_x64: int
    tick_current: int


@dataclass(frozen=True)
class AmmConfigData:
    """Decoded fee fields of a Raydium AmmConfig account (ppm units)."""

    protocol_fee_rate: int
    trade_fee_rate: int
    tick_spacing: int


def decode_pool_state(data: bytes) -> RaydiumPoolData:
    """Decode a Raydium CLMM PoolState account.

    Raises:
        UnsupportedPoolTypeError: If data is not a CLMM PoolState
    """
    check_account(data, POOL_STATE_DISCRIMINATOR, _TICK_CURRENT + 4, "PoolState")
    return RaydiumPoolData(
        amm_config=read_pubkey(data, _AMM_CONFIG),
        token_mint_0=read_pubkey(data, _MINT_0),
        token_mint_1=read_pubkey(data, _MINT_1),
        mint_decimals_0=read_u8(data, _DECIMALS_0),
        mint_decimals_1=read_u8(data, _DECIMALS_1),
        tick_spacing=read_u16(data, _TICK_SPACING),
        liquidity=read_u128(data, _LIQUIDITY),
        sqrt_price_x64=read_u128(data, _SQRT_PRICE),
        tick_current=read_i32(data, _TICK_CURRENT),
    )


def decode_amm_config(data: bytes) -> AmmConfigData:
    """Decode a Raydium AmmConfig account."""
    check_account(data, AMM_CONFIG_DISCRIMINATOR, _CONFIG_TICK_SPACING + 2, "AmmConfig")
    return AmmConfigData(
        protocol_fee_rate=read_u32(data, _PROTOCOL_FEE_RATE),
        trade_fee_rate=read_u32(data, _TRADE_FEE_RATE),
        tick_spacing=read_u16(data, _CONFIG_TICK_SPACING),
    )


def decode_tick_array(data: bytes) -> tuple[int, dict[int, int]]:
    """Decode a TickArrayState into its start index and initialized ticks.

    Each TickState carries its own tick index; entries with zero
    liquidity_net are skipped.

    Returns:
        Tuple of (start_tick_index, {tick_index: liquidity_net})
    """
    check_account(
        data,
        TICK_ARRAY_DISCRIMINATOR,
        _TICKS + TICK_ARRAY_SIZE * TICK_STATE_SIZE,
        "TickArrayState",
    )
    start = read_i32(data, _START_TICK_INDEX)
    ticks = {}
    for i in range(TICK_ARRAY_SIZE):
        offset = _TICKS + i * TICK_STATE_SIZE
        net = read_i128(data, offset + 4)
        if net != 0:
            ticks[read_i32(data, offset)] = net
    return start, ticks


def tick_array_address(program_id: str, pool: str, start_tick_index: int) -> str:
    """Tick array PDA: seeds ["tick_array", pool, be_i32(start_tick_index)]."""
    address, _bump = Pubkey.find_program_address(
        [
            b"tick_array",
            bytes(Pubkey.from_string(pool)),
            start_tick_index.to_bytes(4, "big", signed=True),
        ],
        Pubkey.from_string(program_id),
    )
    return str(address)


__all__ = [
    "POOL_STATE_DISCRIMINATOR",
    "AMM_CONFIG_DISCRIMINATOR",
    "TICK_ARRAY_DISCRIMINATOR",
    "TICK_ARRAY_SIZE",
    "TICK_STATE_SIZE",
    "RaydiumPoolData",
    "AmmConfigData",
    "decode_pool_state",
    "decode_amm_config",
    "decode_tick_array",
    "tick_array_address",
]
