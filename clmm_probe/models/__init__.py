"""Data models for the probe: pool snapshots, unit config and run config."""

from clmm_probe.models.config import ProbeConfig, parse_sizes, validate_pubkey
from clmm_probe.models.types import (
    CurveQuote,
    PoolState,
    QuoteLegResult,
    SizeUnit,
    UnitConfig,
)

__all__ = [
    "CurveQuote",
    "PoolState",
    "ProbeConfig",
    "QuoteLegResult",
    "SizeUnit",
    "UnitConfig",
    "parse_sizes",
    "validate_pubkey",
]
