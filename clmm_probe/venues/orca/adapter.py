"""Orca Whirlpool venue adapter."""

from __future__ import annotations

from clmm_probe.constants import ORCA_WHIRLPOOL_PROGRAM_ID
from clmm_probe.models.types import PoolState
from clmm_probe.venues.base import normalize_fee_ppm
from clmm_probe.venues.orca import layout
from clmm_probe.venues.rpc import AccountData
from clmm_probe.venues.tick_arrays import TickArrayVenueAdapter


class OrcaWhirlpoolAdapter(TickArrayVenueAdapter):
    """Quotes Orca Whirlpools from on-chain account data.

    Whirlpool fee_rate is already in hundredths of a basis point (ppm).
    Mint decimals are not stored on the pool and are read from the mints.
    """

    dex = "orca"
    program_id = ORCA_WHIRLPOOL_PROGRAM_ID
    ticks_per_array = layout.TICK_ARRAY_SIZE

    def decode_pool(self, account: AccountData) -> PoolState:
        data = layout.decode_whirlpool(account.data)
        return PoolState(
            address=account.address,
            program_id=self.program_id,
            mint_a=data.token_mint_a,
            mint_b=data.token_mint_b,
            decimals_a=self.reader.get_mint_decimals(data.token_mint_a),
            decimals_b=self.reader.get_mint_decimals(data.token_mint_b),
            tick_spacing=data.tick_spacing,
            fee_rate_ppm=normalize_fee_ppm(data.fee_rate),
            protocol_fee_rate_ppm=data.protocol_fee_rate,
            liquidity=data.liquidity,
            sqrt_price_q64=data.sqrt_price,
            current_tick=data.tick_current_index,
        )

    def tick_array_address(self, pool: PoolState, start_tick_index: int) -> str:
        return layout.tick_array_address(self.program_id, pool.address, start_tick_index)

    def decode_tick_array(self, pool: PoolState, data: bytes) -> tuple[int, dict[int, int]]:
        return layout.decode_tick_array(data, pool.tick_spacing)


__all__ = ["OrcaWhirlpoolAdapter"]
