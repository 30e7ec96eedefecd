"""Helpers for decoding Anchor account layouts.

All Anchor accounts start with an 8-byte discriminator (the first 8 bytes
of sha256("account:<Name>")) followed by little-endian packed fields.
"""

from __future__ import annotations

import hashlib
import struct

from solders.pubkey import Pubkey

from clmm_probe.errors import UnsupportedPoolTypeError

DISCRIMINATOR_SIZE = 8

U8 = struct.Struct("<B")
U16 = struct.Struct("<H")
U32 = struct.Struct("<I")
I32 = struct.Struct("<i")


def anchor_discriminator(account_name: str) -> bytes:
    """Anchor account discriminator for a struct name."""
    return hashlib.sha256(f"account:{account_name}".encode()).digest()[:DISCRIMINATOR_SIZE]


def check_account(data: bytes, discriminator: bytes, min_size: int, kind: str) -> None:
    """Verify an account's discriminator and minimum length.

    Raises:
        UnsupportedPoolTypeError: If the account is not of the expected kind
    """
    if len(data) < min_size:
        raise UnsupportedPoolTypeError(
            f"Account too short for {kind}: {len(data)} < {min_size} bytes"
        )
    if data[:DISCRIMINATOR_SIZE] != discriminator:
        raise UnsupportedPoolTypeError(f"Account discriminator does not match {kind}")


def read_u8(data: bytes, offset: int) -> int:
    return U8.unpack_from(data, offset)[0]


def read_u16(data: bytes, offset: int) -> int:
    return U16.unpack_from(data, offset)[0]


def read_u32(data: bytes, offset: int) -> int:
    return U32.unpack_from(data, offset)[0]


def read_i32(data: bytes, offset: int) -> int:
    return I32.unpack_from(data, offset)[0]


def read_u128(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 16], "little", signed=False)


def read_i128(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 16], "little", signed=True)


def read_pubkey(data: bytes, offset: int) -> str:
    """Base58 public key stored at offset."""
    return str(Pubkey.from_bytes(data[offset : offset + 32]))


def tick_array_start(tick: int, tick_spacing: int, ticks_per_array: int) -> int:
    """Start index of the tick array containing a tick (floors toward -inf)."""
    span = tick_spacing * ticks_per_array
    return (tick // span) * span


__all__ = [
    "DISCRIMINATOR_SIZE",
    "anchor_discriminator",
    "check_account",
    "read_u8",
    "read_u16",
    "read_u32",
    "read_i32",
    "read_u128",
    "read_i128",
    "read_pubkey",
    "tick_array_start",
]
