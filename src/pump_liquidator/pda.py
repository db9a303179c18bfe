"""
Program-derived addresses for Pump sells.

All derivations are pure functions of the mint (and, for the creator vault,
of the creator stored in the bonding-curve account).  ``derive_sell_addresses``
is the only step that touches the network.

Bonding-curve account layout (little-endian, Anchor)::

    offset  size  field
    0       8     account discriminator
    8       8     virtual_token_reserves  (u64)
    16      8     virtual_sol_reserves    (u64)
    24      8     real_token_reserves     (u64)
    32      8     real_sol_reserves       (u64)
    40      8     token_total_supply      (u64)
    48      1     complete                (bool)
    49      32    creator                 (pubkey)

Fields beyond offset 81 are ignored.  If the Pump program changes this
layout the decoded creator is wrong and the resulting sell is rejected
on-chain.
"""

from __future__ import annotations

import logging

from construct import Bytes, ConstructError, Flag, Int64ul, Padding, Struct
from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from .constants import (
    BONDING_CURVE_SEED,
    CREATOR_VAULT_SEED,
    PUMP_PROGRAM,
    TOKEN_PROGRAM,
)
from .context import LiquidatorContext
from .models import BondingCurveState, DerivedAddresses

logger = logging.getLogger(__name__)

BONDING_CURVE_LAYOUT = Struct(
    Padding(8),
    "virtual_token_reserves" / Int64ul,
    "virtual_sol_reserves" / Int64ul,
    "real_token_reserves" / Int64ul,
    "real_sol_reserves" / Int64ul,
    "token_total_supply" / Int64ul,
    "complete" / Flag,
    "creator" / Bytes(32),
)
CREATOR_OFFSET = 49
BONDING_CURVE_MIN_SIZE = BONDING_CURVE_LAYOUT.sizeof()  # 81


class BondingCurveNotFoundError(Exception):
    """Raised when the bonding-curve account for a mint does not exist."""

    def __init__(self, mint: str, bonding_curve: str) -> None:
        super().__init__(f"Bonding curve account {bonding_curve} not found for mint {mint}")
        self.mint = mint
        self.bonding_curve = bonding_curve


class BondingCurveLayoutError(Exception):
    """Raised when bonding-curve account data cannot be decoded."""


def derive_bonding_curve(mint: Pubkey) -> Pubkey:
    return Pubkey.find_program_address([BONDING_CURVE_SEED, bytes(mint)], PUMP_PROGRAM)[0]


def derive_creator_vault(creator: Pubkey) -> Pubkey:
    return Pubkey.find_program_address([CREATOR_VAULT_SEED, bytes(creator)], PUMP_PROGRAM)[0]


def derive_associated_token_address(
    owner: Pubkey, mint: Pubkey, token_program: Pubkey = TOKEN_PROGRAM
) -> Pubkey:
    """Associated token account of *owner* for *mint*."""
    return get_associated_token_address(owner, mint, token_program)


def derive_associated_bonding_curve(bonding_curve: Pubkey, mint: Pubkey) -> Pubkey:
    """Token account that holds the bonding curve's supply of *mint*."""
    return derive_associated_token_address(bonding_curve, mint)


def parse_bonding_curve(data: bytes) -> BondingCurveState:
    if len(data) < BONDING_CURVE_MIN_SIZE:
        raise BondingCurveLayoutError(
            f"Bonding curve data is {len(data)} bytes, expected at least {BONDING_CURVE_MIN_SIZE}"
        )
    try:
        decoded = BONDING_CURVE_LAYOUT.parse(data)
    except ConstructError as exc:
        raise BondingCurveLayoutError(f"Cannot decode bonding curve: {exc}") from exc
    return BondingCurveState(
        virtual_token_reserves=decoded.virtual_token_reserves,
        virtual_sol_reserves=decoded.virtual_sol_reserves,
        real_token_reserves=decoded.real_token_reserves,
        real_sol_reserves=decoded.real_sol_reserves,
        token_total_supply=decoded.token_total_supply,
        complete=bool(decoded.complete),
        creator=str(Pubkey.from_bytes(decoded.creator)),
    )


async def derive_sell_addresses(ctx: LiquidatorContext, mint: Pubkey) -> DerivedAddresses:
    """Compute every address a sell of *mint* needs.

    Raises ``BondingCurveNotFoundError`` when the curve account is absent;
    RPC errors propagate.
    """
    bonding_curve = derive_bonding_curve(mint)
    account = await ctx.rpc.get_account_info(str(bonding_curve))
    if account is None:
        raise BondingCurveNotFoundError(str(mint), str(bonding_curve))

    state = parse_bonding_curve(account.data)
    if state.complete:
        logger.warning("Bonding curve %s is complete; the sell will likely be rejected", bonding_curve)

    creator = Pubkey.from_string(state.creator)
    return DerivedAddresses(
        mint=str(mint),
        bonding_curve=str(bonding_curve),
        associated_bonding_curve=str(derive_associated_bonding_curve(bonding_curve, mint)),
        user_ata=str(derive_associated_token_address(ctx.owner, mint, ctx.token_program)),
        creator_vault=str(derive_creator_vault(creator)),
        creator=state.creator,
    )
