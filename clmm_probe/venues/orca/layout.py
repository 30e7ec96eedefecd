"""Orca Whirlpool account layouts."""

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
    read_u128,
)

WHIRLPOOL_DISCRIMINATOR = anchor_discriminator("Whirlpool")
TICK_ARRAY_DISCRIMINATOR = anchor_discriminator("TickArray")

WHIRLPOOL_SIZE = 653
TICK_ARRAY_SIZE = 88
TICK_SIZE = 113
TICK_ARRAY_ACCOUNT_SIZE = 9988

# Whirlpool field offsets
_TICK_SPACING = 41
_FEE_RATE = 45
_PROTOCOL_FEE_RATE = 47
_LIQUIDITY = 49
_SQRT_PRICE = 65
_TICK_CURRENT = 81
_MINT_A = 101
_MINT_B = 181

# TickArray field offsets
_START_TICK_INDEX = 8
_TICKS = 12


@dataclass(frozen=True)
class WhirlpoolData:
    """Decoded subset of a Whirlpool account."""

    tick_spacing: int
    fee_rate: int
    protocol_fee_rate: int
    liquidity: int
    sqrt_price: int
    tick_current_index: int
    token_mint_a: str
    token_mint_b: str


def decode_whirlpool(data: bytes) -> WhirlpoolData:
    """Decode a Whirlpool account.

    Raises:
        UnsupportedPoolTypeError: If data is not a Whirlpool
    """
    check_account(data, WHIRLPOOL_DISCRIMINATOR, _MINT_B + 32, "Whirlpool")
    return WhirlpoolData(
        tick_spacing=read_u16(data, _TICK_SPACING),
        fee_rate=read_u16(data, _FEE_RATE),
        protocol_fee_rate=read_u16(data, _PROTOCOL_FEE_RATE),
        liquidity=read_u128(data, _LIQUIDITY),
        sqrt_price=read_u128(data, _SQRT_PRICE),
        tick_current_index=read_i32(data, _TICK_CURRENT),
        token_mint_a=read_pubkey(data, _MINT_A),
        token_mint_b=read_pubkey(data, _MINT_B),
    )


def decode_tick_array(data: bytes, tick_spacing: int) -> tuple[int, dict[int, int]]:
    """Decode a TickArray into its start index and initialized ticks.

    Tick i of the array sits at start_tick_index + i * tick_spacing.

    Returns:
        Tuple of (start_tick_index, {tick_index: liquidity_net})
    """
    check_account(data, TICK_ARRAY_DISCRIMINATOR, _TICKS + TICK_ARRAY_SIZE * TICK_SIZE, "TickArray")
    start = read_i32(data, _START_TICK_INDEX)
    ticks = {}
    for i in range(TICK_ARRAY_SIZE):
        offset = _TICKS + i * TICK_SIZE
        if not read_u8(data, offset):
            continue
        ticks[start + i * tick_spacing] = read_i128(data, offset + 1)
    return start, ticks


def tick_array_address(program_id: str, whirlpool: str, start_tick_index: int) -> str:
    """Tick array PDA: seeds ["tick_array", whirlpool, str(start_tick_index)]."""
    address, _bump = Pubkey.find_program_address(
        [b"tick_array", bytes(Pubkey.from_string(whirlpool)), str(start_tick_index).encode()],
        Pubkey.from_string(program_id),
    )
    return str(address)


__all__ = [
    "WHIRLPOOL_DISCRIMINATOR",
    "TICK_ARRAY_DISCRIMINATOR",
    "WHIRLPOOL_SIZE",
    "TICK_ARRAY_SIZE",
    "TICK_SIZE",
    "TICK_ARRAY_ACCOUNT_SIZE",
    "WhirlpoolData",
    "decode_whirlpool",
    "decode_tick_array",
    "tick_array_address",
]
