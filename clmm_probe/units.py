"""Quote/base assignment and size/price unit resolution.

Everything here runs before the first quote call, so an unresolvable
configuration aborts the run without producing any rows.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import structlog

from clmm_probe.constants import DEFAULT_ORACLE_POOLS
from clmm_probe.errors import ConfigError, MalformedPoolStateError, UnitResolutionError
from clmm_probe.math.price import quote_per_base
from clmm_probe.models.config import ProbeConfig
from clmm_probe.models.types import PoolState, SizeUnit, UnitConfig
from clmm_probe.oracle import OracleConverter
from clmm_probe.venues.base import VenueAdapter

logger = structlog.get_logger()


def pick_quote_mint(
    pool: PoolState,
    stable_mint: str,
    preferred_mints: Iterable[str] = (),
    override: str | None = None,
) -> str:
    """Pick the quote side of a pool.

    Precedence: explicit override, then the stable mint, then a preferred
    secondary mint (BTC-like by default), then mint B.

    Raises:
        ConfigError: If the override is not one of the pool's mints
    """
    if override is not None:
        if not pool.has_mint(override):
            raise ConfigError(
                f"Quote mint {override} is not in pool {pool.address} "
                f"({pool.mint_a} / {pool.mint_b})"
            )
        return override
    if pool.has_mint(stable_mint):
        return stable_mint
    preferred = set(preferred_mints)
    if pool.mint_a in preferred:
        return pool.mint_a
    if pool.mint_b in preferred:
        return pool.mint_b
    return pool.mint_b


def default_unit(pool: PoolState, stable_mint: str) -> SizeUnit:
    """Stable if the pool holds the stable token, else quote."""
    return SizeUnit.STABLE if pool.has_mint(stable_mint) else SizeUnit.QUOTE


class UnitResolver:
    """Builds the UnitConfig for a run.

    An oracle pool is fetched only when a stable unit is needed and the
    quote token is not itself the stable token.
    """

    def __init__(self, oracle_adapter: VenueAdapter | None = None):
        """Initialize resolver.

        Args:
            oracle_adapter: Adapter used to fetch oracle pools. If None, any
                           run that needs an oracle fails to resolve.
        """
        self.oracle_adapter = oracle_adapter

    def resolve(self, pool: PoolState, config: ProbeConfig) -> UnitConfig:
        """Resolve quote/base and units for a pool.

        Args:
            pool: Probed pool snapshot
            config: Run configuration

        Returns:
            UnitConfig shared by every size in the run

        Raises:
            ConfigError: If the quote override is not in the pool
            UnitResolutionError: If a stable unit is needed but unavailable
            MalformedPoolStateError: If the pool's mid price is not positive
        """
        quote = pick_quote_mint(
            pool,
            config.stable_mint,
            config.preferred_quote_mints,
            override=config.quote_mint,
        )
        base = pool.other_mint(quote)
        mid_quote = quote_per_base(
            pool.sqrt_price_q64, pool.mint_a, pool.decimals_a, pool.decimals_b, quote
        )
        if not (math.isfinite(mid_quote) and mid_quote > 0):
            raise MalformedPoolStateError(
                f"Pool {pool.address} mid price is {mid_quote} (sqrt_price={pool.sqrt_price_q64})"
            )

        fallback = SizeUnit.STABLE if config.stable_mode else default_unit(pool, config.stable_mint)
        size_unit = config.size_unit or fallback
        price_unit = config.price_unit or fallback

        stable_per_quote = math.nan
        if SizeUnit.STABLE in (size_unit, price_unit):
            stable_per_quote = self._stable_per_quote(
                pool, config, quote, base, mid_quote, size_unit, price_unit
            )

        units = UnitConfig(
            quote_mint=quote,
            base_mint=base,
            quote_decimals=pool.decimals_of(quote),
            base_decimals=pool.decimals_of(base),
            size_unit=size_unit,
            price_unit=price_unit,
            quote_per_base=mid_quote,
            stable_per_quote=stable_per_quote,
        )
        logger.info(
            "units_resolved",
            quote_mint=quote,
            base_mint=base,
            size_unit=size_unit.value,
            price_unit=price_unit.value,
            quote_per_base=mid_quote,
            stable_per_quote=stable_per_quote,
        )
        return units

    def _stable_per_quote(
        self,
        pool: PoolState,
        config: ProbeConfig,
        quote: str,
        base: str,
        mid_quote: float,
        size_unit: SizeUnit,
        price_unit: SizeUnit,
    ) -> float:
        if quote == config.stable_mint:
            return 1.0

        oracle_pool = config.oracle_pool
        if oracle_pool is None and config.stable_mode:
            oracle_pool = DEFAULT_ORACLE_POOLS.get(quote)
            if oracle_pool is not None:
                logger.info("default_oracle_selected", quote_mint=quote, oracle=oracle_pool)

        if oracle_pool is None:
            raise UnitResolutionError(
                f"Stable conversion needed (size_unit={size_unit.value}, "
                f"price_unit={price_unit.value}) but quote {quote} is not the stable "
                f"mint {config.stable_mint}; provide an oracle pool pairing the stable "
                f"mint with the quote or base token"
            )
        if self.oracle_adapter is None:
            raise UnitResolutionError(f"No adapter available to read oracle pool {oracle_pool}")

        oracle_state = self.oracle_adapter.fetch_pool_state(oracle_pool)
        result = OracleConverter(config.stable_mint).convert(oracle_state, quote, base, mid_quote)
        if not result.has_rate:
            raise UnitResolutionError(f"Oracle unusable: {result.reason}")
        return result.stable_per_quote


__all__ = ["UnitResolver", "pick_quote_mint", "default_unit"]
