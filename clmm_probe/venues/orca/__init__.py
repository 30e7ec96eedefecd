"""Orca Whirlpool venue."""

from clmm_probe.venues.orca.adapter import OrcaWhirlpoolAdapter

__all__ = ["OrcaWhirlpoolAdapter"]
