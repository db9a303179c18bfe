"""
Instruction builders for the Pump sell transaction.
"""

from __future__ import annotations

import struct

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from spl.token.instructions import close_account
from spl.token.models import CloseAccountParams

from .constants import (
    PUMP_EVENT_AUTHORITY,
    PUMP_FEE_CONFIG,
    PUMP_FEE_PROGRAM,
    PUMP_FEE_RECIPIENT,
    PUMP_GLOBAL,
    PUMP_PROGRAM,
    PUMP_SELL_DISCRIMINATOR,
    SYSTEM_PROGRAM,
    TOKEN_PROGRAM,
    U64_MAX,
)
from .models import DerivedAddresses


def encode_sell_data(amount: int, min_sol_output: int = 0) -> bytes:
    """``discriminator | amount (u64 LE) | min_sol_output (u64 LE)``."""
    for name, value in (("amount", amount), ("min_sol_output", min_sol_output)):
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"{name}={value} does not fit in a u64")
    data = bytearray(PUMP_SELL_DISCRIMINATOR)
    data.extend(struct.pack("<Q", amount))
    data.extend(struct.pack("<Q", min_sol_output))
    return bytes(data)


def build_sell_instruction(
    owner: Pubkey,
    addresses: DerivedAddresses,
    amount: int,
    token_program: Pubkey = TOKEN_PROGRAM,
) -> Instruction:
    """Sell *amount* raw tokens with no minimum SOL output."""
    return Instruction(
        program_id=PUMP_PROGRAM,
        accounts=[
            AccountMeta(pubkey=PUMP_GLOBAL, is_signer=False, is_writable=False),
            AccountMeta(pubkey=PUMP_FEE_RECIPIENT, is_signer=False, is_writable=True),
            AccountMeta(pubkey=Pubkey.from_string(addresses.mint), is_signer=False, is_writable=False),
            AccountMeta(pubkey=Pubkey.from_string(addresses.bonding_curve), is_signer=False, is_writable=True),
            AccountMeta(
                pubkey=Pubkey.from_string(addresses.associated_bonding_curve),
                is_signer=False,
                is_writable=True,
            ),
            AccountMeta(pubkey=Pubkey.from_string(addresses.user_ata), is_signer=False, is_writable=True),
            AccountMeta(pubkey=owner, is_signer=True, is_writable=True),
            AccountMeta(pubkey=SYSTEM_PROGRAM, is_signer=False, is_writable=False),
            AccountMeta(pubkey=Pubkey.from_string(addresses.creator_vault), is_signer=False, is_writable=True),
            AccountMeta(pubkey=token_program, is_signer=False, is_writable=False),
            AccountMeta(pubkey=PUMP_EVENT_AUTHORITY, is_signer=False, is_writable=False),
            AccountMeta(pubkey=PUMP_PROGRAM, is_signer=False, is_writable=False),
            AccountMeta(pubkey=PUMP_FEE_CONFIG, is_signer=False, is_writable=False),
            AccountMeta(pubkey=PUMP_FEE_PROGRAM, is_signer=False, is_writable=False),
        ],
        data=encode_sell_data(amount, 0),
    )


def build_close_account_instruction(
    token_account: Pubkey,
    destination: Pubkey,
    authority: Pubkey,
    token_program: Pubkey = TOKEN_PROGRAM,
) -> Instruction:
    """SPL Token ``CloseAccount``: return the account's rent to *destination*."""
    return close_account(
        CloseAccountParams(
            program_id=token_program,
            account=token_account,
            dest=destination,
            owner=authority,
            signers=[],
        )
    )
