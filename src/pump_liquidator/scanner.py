"""
Account scanner: list the wallet's non-empty SPL token accounts.
"""

from __future__ import annotations

import logging

from .context import LiquidatorContext
from .models import TokenHolding

logger = logging.getLogger(__name__)


def parse_token_account(account: dict) -> TokenHolding:
    """Build a ``TokenHolding`` from one ``jsonParsed`` keyed account."""
    info = account["account"]["data"]["parsed"]["info"]
    token_amount = info["tokenAmount"]
    return TokenHolding(
        mint=info["mint"],
        token_account=account["pubkey"],
        amount=int(token_amount["amount"]),
        decimals=int(token_amount.get("decimals", 0)),
    )


async def get_token_holdings(ctx: LiquidatorContext) -> list[TokenHolding]:
    """Return every token account owned by the wallet with a non-zero balance.

    RPC errors propagate to the caller.
    """
    owner = str(ctx.owner)
    logger.info("Scanning wallet %s for SPL tokens...", owner)

    accounts = await ctx.rpc.get_token_accounts_by_owner(owner, str(ctx.token_program))
    logger.info("Found %d token accounts", len(accounts))

    holdings: list[TokenHolding] = []
    for account in accounts:
        try:
            holding = parse_token_account(account)
        except (KeyError, TypeError, ValueError) as exc:
            logger.debug("Skipping unparseable token account: %s", exc)
            continue
        if holding.amount > 0:
            holdings.append(holding)

    logger.info("Found %d tokens with balance", len(holdings))
    return holdings
