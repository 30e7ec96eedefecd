"""Venue adapter lookup by dex name."""

from __future__ import annotations

from clmm_probe.errors import ConfigError
from clmm_probe.venues.orca.adapter import OrcaWhirlpoolAdapter
from clmm_probe.venues.raydium.adapter import RaydiumClmmAdapter
from clmm_probe.venues.rpc import SolanaAccountReader
from clmm_probe.venues.tick_arrays import TickArrayVenueAdapter

ADAPTERS: dict[str, type[TickArrayVenueAdapter]] = {
    OrcaWhirlpoolAdapter.dex: OrcaWhirlpoolAdapter,
    RaydiumClmmAdapter.dex: RaydiumClmmAdapter,
}


def get_adapter(
    dex: str, reader: SolanaAccountReader, tick_arrays: int = 3
) -> TickArrayVenueAdapter:
    """Build the adapter for a dex name.

    Raises:
        ConfigError: If the dex is not supported
    """
    adapter_cls = ADAPTERS.get(dex)
    if adapter_cls is None:
        raise ConfigError(f"Unsupported dex '{dex}', expected one of {sorted(ADAPTERS)}")
    return adapter_cls(reader, tick_arrays=tick_arrays)


__all__ = ["ADAPTERS", "get_adapter"]
