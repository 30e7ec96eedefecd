"""Round-trip depth probe for Solana concentrated-liquidity pools."""

__version__ = "0.1.0"
