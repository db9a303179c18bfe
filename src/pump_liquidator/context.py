"""
Run context shared by every pipeline step.

The caller builds one ``LiquidatorContext`` and owns its lifecycle::

    async with LiquidatorContext.from_config() as ctx:
        report = await scan_and_sell(ctx)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .constants import TOKEN_PROGRAM
from .data_sources.solana_rpc import SolanaRpcClient
from .keypair import load_wallet

logger = logging.getLogger(__name__)


@dataclass
class LiquidatorContext:
    rpc: SolanaRpcClient
    keypair: Keypair
    token_program: Pubkey = field(default=TOKEN_PROGRAM)
    confirm_timeout: float = 60.0
    confirm_poll_interval: float = 0.8

    @property
    def owner(self) -> Pubkey:
        return self.keypair.pubkey()

    @classmethod
    def from_config(cls) -> "LiquidatorContext":
        """Build a context from ``config`` (environment) settings."""
        from config import (
            COMMITMENT,
            CONFIRM_POLL_INTERVAL,
            CONFIRM_TIMEOUT_SECONDS,
            KEYPAIR_PATH,
            PRIVATE_KEY,
            REQUEST_TIMEOUT,
            RPC_MAX_RETRIES,
            SOLANA_RPC_ENDPOINT,
        )

        keypair = load_wallet(keypair_path=KEYPAIR_PATH, private_key=PRIVATE_KEY)
        rpc = SolanaRpcClient(
            endpoint=SOLANA_RPC_ENDPOINT,
            timeout=REQUEST_TIMEOUT,
            commitment=COMMITMENT,
            max_retries=RPC_MAX_RETRIES,
        )
        return cls(
            rpc=rpc,
            keypair=keypair,
            confirm_timeout=float(CONFIRM_TIMEOUT_SECONDS),
            confirm_poll_interval=CONFIRM_POLL_INTERVAL,
        )

    async def close(self) -> None:
        await self.rpc.close()

    async def __aenter__(self) -> "LiquidatorContext":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
