"""
Protocol classifier: does a holding belong to the Pump bonding-curve program?

A holding matches when the bonding-curve PDA for its mint exists and is
owned by ``PUMP_PROGRAM``.  Lookup failures are reported as
``LOOKUP_FAILED`` and never raised.
"""

from __future__ import annotations

import asyncio
import logging

from solders.pubkey import Pubkey

from .constants import PUMP_PROGRAM
from .context import LiquidatorContext
from .logging_config import mint_scope
from .models import Classification, ClassificationStatus, TokenHolding
from .pda import derive_bonding_curve

logger = logging.getLogger(__name__)


async def classify_holding(ctx: LiquidatorContext, holding: TokenHolding) -> Classification:
    with mint_scope(holding.mint):
        bonding_curve = ""
        try:
            bonding_curve = str(derive_bonding_curve(Pubkey.from_string(holding.mint)))
            account = await ctx.rpc.get_account_info(bonding_curve)
        except Exception as exc:
            logger.warning("Bonding curve lookup failed: %s", exc)
            return Classification(
                holding=holding,
                status=ClassificationStatus.LOOKUP_FAILED,
                bonding_curve=bonding_curve,
                error=str(exc),
            )

        if account is not None and account.owner == PUMP_PROGRAM:
            status = ClassificationStatus.MATCH
        else:
            status = ClassificationStatus.NO_MATCH
        logger.debug("Classified as %s", status.value)
        return Classification(holding=holding, status=status, bonding_curve=bonding_curve)


async def classify_holdings(
    ctx: LiquidatorContext, holdings: list[TokenHolding]
) -> list[Classification]:
    """Classify all *holdings* concurrently; output order matches input."""
    return list(await asyncio.gather(*(classify_holding(ctx, h) for h in holdings)))
