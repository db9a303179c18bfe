"""
Centralized constants for the Pump liquidator.

This file contains:
- Solana program addresses (immutable protocol constants)
- Pump.fun program accounts, PDA seeds and instruction discriminators

These values mirror what the on-chain Pump program expects.  A transaction
built with any other seed or account is rejected by the remote program, so
import from this module rather than duplicating values across modules.
"""

from __future__ import annotations

from solders.pubkey import Pubkey

# ---------------------------------------------------------------------------
# Solana Program Addresses (immutable — part of the Solana protocol)
# ---------------------------------------------------------------------------

SYSTEM_PROGRAM = Pubkey.from_string("11111111111111111111111111111111")
TOKEN_PROGRAM = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")

# ---------------------------------------------------------------------------
# Pump.fun bonding-curve program
# ---------------------------------------------------------------------------

PUMP_PROGRAM = Pubkey.from_string("6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P")
PUMP_GLOBAL = Pubkey.from_string("4wTV1YmiEkRvAtNtsSGPtUrqRYQMe5SKy2uB4Jjaxnjf")
PUMP_FEE_RECIPIENT = Pubkey.from_string("CebN5WGQ4jvEPvsVU4EoHEpgzq1VV7AbicfhtW4xC9iM")
PUMP_EVENT_AUTHORITY = Pubkey.from_string("Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1")
PUMP_FEE_CONFIG = Pubkey.from_string("8Wf5TiAheLUqBrKXeYg2JtAFFMWtKdG2BSFgqUcPVwTt")
PUMP_FEE_PROGRAM = Pubkey.from_string("pfeeUxB6jkeY1Hxd7CsFCAjcbHA9rWtchMGdZ6VojVZ")

# PDA seeds
BONDING_CURVE_SEED = b"bonding-curve"
CREATOR_VAULT_SEED = b"creator-vault"

# Anchor discriminator for Pump ``sell``
PUMP_SELL_DISCRIMINATOR = bytes([51, 230, 133, 164, 1, 127, 131, 173])

# Label attached to holdings whose bonding curve is owned by PUMP_PROGRAM
PUMP_TOKEN_LABEL = "Pump.fun Token"
UNKNOWN_TOKEN_LABEL = "Unknown"

# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------

U64_MAX: int = 2**64 - 1

SOLSCAN_TX_URL = "https://solscan.io/tx/{signature}"
