"""Raydium CLMM venue adapter."""

from __future__ import annotations

import structlog

from clmm_probe.constants import RAYDIUM_CLMM_PROGRAM_ID
from clmm_probe.errors import PoolNotFoundError, UnsupportedPoolTypeError
from clmm_probe.models.types import PoolState
from clmm_probe.venues.base import normalize_fee_ppm
from clmm_probe.venues.raydium import layout
from clmm_probe.venues.rpc import AccountData
from clmm_probe.venues.tick_arrays import TickArrayVenueAdapter

logger = structlog.get_logger()


class RaydiumClmmAdapter(TickArrayVenueAdapter):
    """Quotes Raydium CLMM pools from on-chain account data.

    Decimals are stored on the pool. Fees live on the pool's AmmConfig
    account, as ppm of input.
    """

    dex = "raydium"
    program_id = RAYDIUM_CLMM_PROGRAM_ID
    ticks_per_array = layout.TICK_ARRAY_SIZE

    def decode_pool(self, account: AccountData) -> PoolState:
        data = layout.decode_pool_state(account.data)

        config_account = self.reader.get_account(data.amm_config)
        if config_account is None:
            raise PoolNotFoundError(
                f"AmmConfig {data.amm_config} for pool {account.address} not found"
            )
        if config_account.owner != self.program_id:
            raise UnsupportedPoolTypeError(f"AmmConfig {data.amm_config} has unexpected owner")
        config = layout.decode_amm_config(config_account.data)

        if config.tick_spacing != data.tick_spacing:
            logger.warning(
                "raydium_tick_spacing_mismatch",
                pool=account.address,
                pool_tick_spacing=data.tick_spacing,
                config_tick_spacing=config.tick_spacing,
            )

        return PoolState(
            address=account.address,
            program_id=self.program_id,
            mint_a=data.token_mint_0,
            mint_b=data.token_mint_1,
            decimals_a=data.mint_decimals_0,
            decimals_b=data.mint_decimals_1,
            tick_spacing=data.tick_spacing,
            fee_rate_ppm=normalize_fee_ppm(config.trade_fee_rate),
            protocol_fee_rate_ppm=config.protocol_fee_rate,
            liquidity=data.liquidity,
            sqrt_price_q64=data.sqrt_price_x64,
            current_tick=data.tick_current,
        )

    def tick_array_address(self, pool: PoolState, start_tick_index: int) -> str:
        return layout.tick_array_address(self.program_id, pool.address, start_tick_index)

    def decode_tick_array(self, pool: PoolState, data: bytes) -> tuple[int, dict[int, int]]:
        return layout.decode_tick_array(data)


__all__ = ["RaydiumClmmAdapter"]
