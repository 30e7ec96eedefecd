"""Shared RPC plumbing for tick-array based CLMM venues.

Orca and Raydium store initialized ticks in fixed-size tick array accounts
addressed by PDA. Pool fetching and curve loading are identical apart from
the account layouts, which subclasses provide.
"""

from __future__ import annotations

from abc import abstractmethod

import structlog

from clmm_probe.errors import (
    PoolNotFoundError,
    ProbeError,
    QuoteUnavailableError,
    UnsupportedPoolTypeError,
)
from clmm_probe.models.types import PoolState
from clmm_probe.venues.base import VenueAdapter
from clmm_probe.venues.layout import tick_array_start
from clmm_probe.venues.quoter import CurveQuoteProvider, DepthLevel, TickCurve, TickCurveQuoter
from clmm_probe.venues.rpc import AccountData, SolanaAccountReader

logger = structlog.get_logger()


class TickArrayVenueAdapter(VenueAdapter):
    """Venue adapter for pools whose ticks live in tick array accounts.

    The tick curve for a pool is loaded on first quote and cached, so every
    size in a run is quoted against the same snapshot.
    """

    ticks_per_array: int = 0

    def __init__(self, reader: SolanaAccountReader, tick_arrays: int = 3):
        """Initialize adapter.

        Args:
            reader: Account reader bound to an RPC endpoint
            tick_arrays: Tick arrays to load on each side of the current one
        """
        self.reader = reader
        self.tick_arrays = tick_arrays
        self._curves: dict[str, TickCurve] = {}

    @abstractmethod
    def decode_pool(self, account: AccountData) -> PoolState:
        """Decode a pool account into a PoolState (may read mints/config)."""
        ...

    @abstractmethod
    def tick_array_address(self, pool: PoolState, start_tick_index: int) -> str:
        """PDA of the tick array starting at start_tick_index."""
        ...

    @abstractmethod
    def decode_tick_array(self, pool: PoolState, data: bytes) -> tuple[int, dict[int, int]]:
        """Decode a tick array into (start_tick_index, {tick: liquidity_net})."""
        ...

    def fetch_pool_state(self, pool_id: str) -> PoolState:
        try:
            account = self.reader.get_account(pool_id)
        except Exception as e:
            raise PoolNotFoundError(f"Could not fetch pool {pool_id}: {e}") from e

        if account is None:
            raise PoolNotFoundError(f"Pool account {pool_id} does not exist")
        if account.owner != self.program_id:
            raise UnsupportedPoolTypeError(
                f"Pool {pool_id} is owned by {account.owner}, expected {self.program_id}"
            )

        try:
            pool = self.decode_pool(account)
        except ProbeError:
            raise
        except Exception as e:
            raise PoolNotFoundError(f"Could not read pool {pool_id}: {e}") from e

        logger.info(
            "pool_state_fetched",
            dex=self.dex,
            pool=pool.address,
            mint_a=pool.mint_a,
            mint_b=pool.mint_b,
            fee_ppm=pool.fee_rate_ppm,
            tick=pool.current_tick,
            liquidity=pool.liquidity,
        )
        return pool

    def load_curve(self, pool: PoolState, arrays_each_side: int) -> TickCurve:
        """Fetch the tick arrays around the current tick and build a curve.

        Missing tick array accounts hold no initialized ticks; the loaded
        window still spans them.
        """
        span = pool.tick_spacing * self.ticks_per_array
        current_start = tick_array_start(pool.current_tick, pool.tick_spacing, self.ticks_per_array)
        starts = [current_start + i * span for i in range(-arrays_each_side, arrays_each_side + 1)]
        addresses = [self.tick_array_address(pool, start) for start in starts]

        accounts = self.reader.get_accounts(addresses)

        ticks: dict[int, int] = {}
        loaded = 0
        for start, account in zip(starts, accounts):
            if account is None:
                continue
            try:
                decoded_start, array_ticks = self.decode_tick_array(pool, account.data)
            except UnsupportedPoolTypeError as e:
                logger.warning(
                    "tick_array_skipped",
                    pool=pool.address,
                    start=start,
                    address=account.address,
                    error=str(e),
                )
                continue
            if decoded_start != start:
                logger.warning(
                    "tick_array_start_mismatch",
                    pool=pool.address,
                    expected=start,
                    actual=decoded_start,
                )
            loaded += 1
            ticks.update(array_ticks)

        curve = TickCurve.from_mapping(ticks, lower_tick=starts[0], upper_tick=starts[-1] + span)
        logger.debug(
            "tick_arrays_loaded",
            pool=pool.address,
            requested=len(starts),
            loaded=loaded,
            initialized_ticks=len(curve.ticks),
            lower_tick=curve.lower_tick,
            upper_tick=curve.upper_tick,
        )
        return curve

    def curve_quoter(self, pool: PoolState) -> CurveQuoteProvider:
        curve = self._curves.get(pool.address)
        if curve is None:
            try:
                curve = self.load_curve(pool, self.tick_arrays)
            except ProbeError:
                raise
            except Exception as e:
                raise QuoteUnavailableError(f"Could not load tick arrays: {e}") from e
            self._curves[pool.address] = curve
        return TickCurveQuoter(curve)

    def depth_profile(
        self, pool: PoolState, arrays_each_side: int | None = None
    ) -> list[DepthLevel]:
        """Initialized ticks in ±arrays_each_side tick arrays with cumulative liquidity."""
        if arrays_each_side is None:
            arrays_each_side = self.tick_arrays
        return self.load_curve(pool, arrays_each_side).depth_profile()


__all__ = ["TickArrayVenueAdapter"]
