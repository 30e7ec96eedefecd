"""Well-known mints, program IDs and protocol constants.

Centralizes Solana identifiers and the fixed-point parameters shared by the
Orca and Raydium CLMM venues.
"""

# Q64.64 fixed-point scale used by both Whirlpool and Raydium CLMM prices
Q64 = 2**64

# Basis points / parts-per-million scales
BPS_SCALE = 10_000
PPM_SCALE = 1_000_000

# Well-known mints (base58)
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDT = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"
WSOL = "So11111111111111111111111111111111111111112"
SOBTC = "9n4nbM75f5Ui33ZbPYXn59EwSgE8CGsHtAeTH5YFeJ9E"
# BTC wrapper used as quote in the SOL/BTC whirlpool
BTC_WRAPPED = "3NZ9JMVBmGAqocybic2c7LQCJScmgsAZ6vQqTDzcqmJh"

# Secondary quote preference when the stable token is absent from the pool
BTC_MINTS = frozenset({SOBTC, BTC_WRAPPED})

MINT_SYMBOLS = {
    WSOL: "SOL",
    USDC: "USDC",
    USDT: "USDT",
    SOBTC: "BTC",
    BTC_WRAPPED: "BTC",
}

# Mint decimals that never need an RPC round-trip
KNOWN_DECIMALS = {
    USDC: 6,
    USDT: 6,
    WSOL: 9,
}

# Program IDs (mainnet-beta)
ORCA_WHIRLPOOL_PROGRAM_ID = "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc"
RAYDIUM_CLMM_PROGRAM_ID = "CAMMCzo5YL8w4VFF8KVHrK22GGUsp5VTaW7grrKgrWqK"

# Orca SOL/USDC whirlpool, used as the default SOL oracle in stable mode
ORCA_SOL_USDC_POOL = "Czfq3xZZDmsdGdUyrNLtRhGc47cXcZtLG4crryfu44zE"
DEFAULT_ORACLE_POOLS = {WSOL: ORCA_SOL_USDC_POOL}

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_SIZES = "100,1000,5000,10000,100000,1000000"

# Tick bounds shared by Whirlpool and Raydium CLMM
MIN_TICK = -443636
MAX_TICK = 443636
MIN_SQRT_PRICE_X64 = 4295048016
MAX_SQRT_PRICE_X64 = 79226673515401279992447579055


def symbol_for_mint(mint: str) -> str:
    """Short symbol for a well-known mint, or empty string if unknown."""
    return MINT_SYMBOLS.get(mint, "")


__all__ = [
    "Q64",
    "BPS_SCALE",
    "PPM_SCALE",
    "USDC",
    "USDT",
    "WSOL",
    "SOBTC",
    "BTC_WRAPPED",
    "BTC_MINTS",
    "MINT_SYMBOLS",
    "KNOWN_DECIMALS",
    "ORCA_WHIRLPOOL_PROGRAM_ID",
    "RAYDIUM_CLMM_PROGRAM_ID",
    "ORCA_SOL_USDC_POOL",
    "DEFAULT_ORACLE_POOLS",
    "DEFAULT_RPC_URL",
    "DEFAULT_SIZES",
    "MIN_TICK",
    "MAX_TICK",
    "MIN_SQRT_PRICE_X64",
    "MAX_SQRT_PRICE_X64",
    "symbol_for_mint",
]
