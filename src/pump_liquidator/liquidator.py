"""
Scan-and-sell orchestration.

Pipeline: scan holdings → classify concurrently → for each Pump token,
derive addresses and submit a sell, strictly one token at a time.  A
failure on one token is logged and recorded; the remaining queue still runs.
"""

from __future__ import annotations

import logging

from solders.pubkey import Pubkey

from .classifier import classify_holdings
from .context import LiquidatorContext
from .logging_config import mint_scope
from .models import ClassificationStatus, LiquidationReport, SellOutcome, TokenHolding
from .pda import derive_sell_addresses
from .scanner import get_token_holdings
from .seller import submit_sell

logger = logging.getLogger(__name__)


async def sell_holding(
    ctx: LiquidatorContext, holding: TokenHolding, *, dry_run: bool = False
) -> SellOutcome:
    """Derive addresses for *holding* and sell its full balance.

    Errors are caught and returned in the outcome.
    """
    outcome = SellOutcome(
        mint=holding.mint,
        amount=holding.amount,
        display_amount=holding.display_amount,
    )
    with mint_scope(holding.mint):
        try:
            logger.info("Processing %s, balance %s", holding.mint, holding.display_amount)
            addresses = await derive_sell_addresses(ctx, Pubkey.from_string(holding.mint))
            if dry_run:
                logger.info(
                    "Dry run: would sell %s via bonding curve %s",
                    holding.amount,
                    addresses.bonding_curve,
                )
                outcome.skipped = True
                return outcome

            outcome.signature = await submit_sell(ctx, holding, addresses)
            logger.info("Successfully sold %s of %s", holding.display_amount, holding.mint)
        except Exception as exc:
            logger.error("Error selling token %s: %s", holding.mint, exc)
            outcome.error = str(exc)
    return outcome


async def scan_and_sell(ctx: LiquidatorContext, *, dry_run: bool = False) -> LiquidationReport:
    """Run one scan-and-sell pass over the wallet.

    Scanning errors propagate; per-token errors do not.
    """
    report = LiquidationReport(wallet=str(ctx.owner), dry_run=dry_run)

    holdings = await get_token_holdings(ctx)
    report.holdings_scanned = len(holdings)

    classifications = await classify_holdings(ctx, holdings)
    pump_holdings = [c.holding for c in classifications if c.is_pump_token]
    report.pump_tokens = len(pump_holdings)
    report.lookup_failures = [
        c.holding.mint
        for c in classifications
        if c.status == ClassificationStatus.LOOKUP_FAILED
    ]
    if report.lookup_failures:
        logger.warning(
            "Could not classify %d token(s): %s",
            len(report.lookup_failures),
            ", ".join(report.lookup_failures),
        )

    logger.info("Found %d Pump.fun tokens with balance", len(pump_holdings))
    if not pump_holdings:
        logger.info("No Pump.fun tokens found with balance to sell")
        return report

    for holding in pump_holdings:
        report.outcomes.append(await sell_holding(ctx, holding, dry_run=dry_run))

    logger.info(
        "Completed scan and sell operation: %d sold, %d failed",
        report.sold,
        report.failed,
    )
    return report
