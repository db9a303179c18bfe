"""
Sell submitter: one atomic ``[sell, closeAccount]`` transaction per token.

The close instruction shares the transaction with the sell, so if the Pump
program rejects the sell the token account is left untouched.  Each
submission is a single attempt with preflight simulation disabled.
"""

from __future__ import annotations

import logging

from solders.hash import Hash
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from .constants import SOLSCAN_TX_URL
from .context import LiquidatorContext
from .instructions import build_close_account_instruction, build_sell_instruction
from .models import DerivedAddresses, TokenHolding

logger = logging.getLogger(__name__)


def build_sell_transaction(
    ctx: LiquidatorContext,
    holding: TokenHolding,
    addresses: DerivedAddresses,
    blockhash: Hash,
) -> Transaction:
    """Build and sign the transaction selling the full *holding* balance."""
    owner = ctx.owner
    sell_ix = build_sell_instruction(owner, addresses, holding.amount, ctx.token_program)
    close_ix = build_close_account_instruction(
        Pubkey.from_string(addresses.user_ata),
        destination=owner,
        authority=owner,
        token_program=ctx.token_program,
    )
    msg = Message.new_with_blockhash([sell_ix, close_ix], owner, blockhash)
    tx = Transaction.new_unsigned(msg)
    tx.sign([ctx.keypair], blockhash)
    return tx


async def submit_sell(
    ctx: LiquidatorContext,
    holding: TokenHolding,
    addresses: DerivedAddresses,
) -> str:
    """Sign, submit and confirm the sell; return the transaction signature.

    Raises ``RpcError`` or ``TransactionFailedError`` on failure.
    """
    logger.info("Selling token %s (%s raw units)", holding.mint, holding.amount)

    blockhash = await ctx.rpc.get_latest_blockhash()
    tx = build_sell_transaction(ctx, holding, addresses, blockhash)
    try:
        signature = await ctx.rpc.send_transaction(tx, skip_preflight=True)
        await ctx.rpc.confirm_transaction(
            signature,
            timeout=ctx.confirm_timeout,
            poll_interval=ctx.confirm_poll_interval,
        )
    except Exception as exc:
        logger.error("Transaction failed for %s: %s", holding.mint, exc)
        raise

    logger.info(
        "Transaction successful: %s",
        SOLSCAN_TX_URL.format(signature=signature),
        extra={"signature": signature},
    )
    return signature
