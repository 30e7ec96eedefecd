"""Run configuration for a probe.

ProbeConfig is built once (by the CLI or by a caller) and threaded through
every component; nothing in the engine reads ambient state.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, ValidationError, field_validator
from solders.pubkey import Pubkey

from clmm_probe.constants import BTC_MINTS, DEFAULT_RPC_URL, USDC
from clmm_probe.errors import ConfigError
from clmm_probe.models.types import SizeUnit


def validate_pubkey(value: Any) -> str:
    """Validate that a value is a base58-encoded 32-byte public key.

    Args:
        value: Value to validate

    Returns:
        The key as a base58 string

    Raises:
        ValueError: If value is not a valid public key
    """
    if isinstance(value, Pubkey):
        return str(value)
    if not isinstance(value, str):
        raise ValueError(f"Public key must be a string, got {type(value).__name__}")
    try:
        return str(Pubkey.from_string(value.strip()))
    except Exception as err:  # solders raises its own parse error types
        raise ValueError(f"Invalid base58 public key: '{value}'") from err


# Base58 public key (pool, mint or program)
PubkeyStr = Annotated[str, BeforeValidator(validate_pubkey)]

Dex = Literal["orca", "raydium"]


def parse_sizes(sizes: str, range_spec: str | None = None) -> list[float]:
    """Build the size list from a comma list or an ``A:B:S`` range.

    A well-formed range takes precedence over the comma list. Non-positive
    and non-numeric entries in the comma list are dropped; an empty result
    is left for ProbeConfig validation to reject.

    Args:
        sizes: Comma-separated sizes (e.g. "100,1000,5000")
        range_spec: Optional inclusive range "start:stop:step"

    Returns:
        List of sizes in request order
    """
    if range_spec and ":" in range_spec:
        parts = range_spec.split(":")
        if len(parts) == 3:
            try:
                start, stop, step = (float(p.strip()) for p in parts)
            except ValueError:
                start = stop = step = math.nan
            if all(math.isfinite(v) for v in (start, stop, step)) and step > 0:
                out: list[float] = []
                value = start
                while value <= stop:
                    out.append(value)
                    value += step
                return out

    result = []
    for raw in sizes.split(","):
        raw = raw.strip()
        if not raw:
            continue
        try:
            value = float(raw)
        except ValueError:
            continue
        if math.isfinite(value) and value > 0:
            result.append(value)
    return result


class ProbeConfig(BaseModel):
    """Validated configuration for one probe run."""

    dex: Dex = "orca"
    pool: PubkeyStr
    rpc_url: str = DEFAULT_RPC_URL
    sizes: list[float] = Field(description="Trade sizes in size_unit, probed in order.")
    size_unit: SizeUnit | None = Field(
        default=None, description="Size denomination; defaults from pool composition."
    )
    price_unit: SizeUnit | None = Field(
        default=None, description="Price denomination; defaults from pool composition."
    )
    stable_mode: bool = Field(
        default=False, description="Force stable units for anything not set explicitly."
    )
    quote_mint: PubkeyStr | None = None
    oracle_pool: PubkeyStr | None = None
    oracle_dex: Dex = Field(default="orca", description="Venue that owns the oracle pool.")
    stable_mint: PubkeyStr = USDC
    preferred_quote_mints: frozenset[str] = BTC_MINTS
    delay_ms: float = Field(default=0.0, ge=0)
    tick_arrays: int = Field(default=3, ge=1, le=16)
    depth_dump: int | None = Field(default=None, ge=1)
    csv_path: Path | None = None
    quiet: bool = False

    model_config = {"frozen": True}

    @field_validator("sizes")
    @classmethod
    def _sizes_positive(cls, value: list[float]) -> list[float]:
        if not value:
            raise ValueError("size list is empty")
        bad = [v for v in value if not (math.isfinite(v) and v > 0)]
        if bad:
            raise ValueError(f"sizes must be positive numbers, got {bad}")
        return value

    @classmethod
    def build(cls, **kwargs: Any) -> ProbeConfig:
        """Construct a config, converting validation failures to ConfigError."""
        try:
            return cls(**kwargs)
        except ValidationError as err:
            raise ConfigError(str(err)) from err


__all__ = ["ProbeConfig", "PubkeyStr", "Dex", "parse_sizes", "validate_pubkey"]
