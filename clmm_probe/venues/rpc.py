"""Read-only Solana account access.

Wraps the synchronous solana-py client; the probe never signs or submits
transactions, so no wallet is involved.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from solana.rpc.api import Client
from solana.rpc.commitment import Commitment, Confirmed
from solders.pubkey import Pubkey

from clmm_probe.constants import KNOWN_DECIMALS

logger = structlog.get_logger()

# getMultipleAccounts accepts at most 100 keys per request
MAX_ACCOUNTS_PER_REQUEST = 100

# SPL Token mint layout: decimals is a u8 at byte 44
MINT_DECIMALS_OFFSET = 44
DEFAULT_MINT_DECIMALS = 9


@dataclass(frozen=True)
class AccountData:
    """Raw account contents."""

    address: str
    owner: str
    data: bytes


class SolanaAccountReader:
    """Fetches raw account data over JSON-RPC."""

    def __init__(
        self,
        rpc_url: str,
        commitment: Commitment = Confirmed,
        client: Client | None = None,
    ):
        """Initialize the reader.

        Args:
            rpc_url: HTTP RPC URL (e.g., "https://api.mainnet-beta.solana.com")
            commitment: Commitment level for reads
            client: Pre-built client (tests inject a stub here)
        """
        self.rpc_url = rpc_url
        self.client = client if client is not None else Client(rpc_url, commitment=commitment)

    def get_account(self, address: str) -> AccountData | None:
        """Fetch one account, or None if it does not exist."""
        resp = self.client.get_account_info(Pubkey.from_string(address))
        account = resp.value
        if account is None:
            logger.debug("account_missing", address=address)
            return None
        return AccountData(address=address, owner=str(account.owner), data=bytes(account.data))

    def get_accounts(self, addresses: list[str]) -> list[AccountData | None]:
        """Fetch several accounts, preserving order; missing accounts are None."""
        results: list[AccountData | None] = []
        for start in range(0, len(addresses), MAX_ACCOUNTS_PER_REQUEST):
            chunk = addresses[start : start + MAX_ACCOUNTS_PER_REQUEST]
            resp = self.client.get_multiple_accounts([Pubkey.from_string(a) for a in chunk])
            for address, account in zip(chunk, resp.value):
                if account is None:
                    results.append(None)
                else:
                    results.append(
                        AccountData(
                            address=address,
                            owner=str(account.owner),
                            data=bytes(account.data),
                        )
                    )
        return results

    def get_mint_decimals(self, mint: str) -> int:
        """Decimals of an SPL mint.

        Well-known mints skip the RPC call. An unreadable mint falls back to
        9 decimals with a warning, which matches the most common SPL setup.
        """
        if mint in KNOWN_DECIMALS:
            return KNOWN_DECIMALS[mint]

        account = self.get_account(mint)
        if account is None or len(account.data) <= MINT_DECIMALS_OFFSET:
            logger.warning(
                "mint_decimals_fallback",
                mint=mint,
                decimals=DEFAULT_MINT_DECIMALS,
            )
            return DEFAULT_MINT_DECIMALS
        return account.data[MINT_DECIMALS_OFFSET]


__all__ = [
    "AccountData",
    "SolanaAccountReader",
    "MAX_ACCOUNTS_PER_REQUEST",
    "MINT_DECIMALS_OFFSET",
]
