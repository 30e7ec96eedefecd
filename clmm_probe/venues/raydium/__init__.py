"""Raydium CLMM venue."""

from clmm_probe.venues.raydium.adapter import RaydiumClmmAdapter

__all__ = ["RaydiumClmmAdapter"]
