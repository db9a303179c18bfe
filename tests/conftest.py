"""Shared test fixtures for the Pump liquidator test suite."""

from __future__ import annotations

import sys
import os

# Ensure src/ is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import struct
from unittest.mock import AsyncMock

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from pump_liquidator.constants import PUMP_PROGRAM
from pump_liquidator.context import LiquidatorContext
from pump_liquidator.data_sources.solana_rpc import AccountInfo, SolanaRpcClient


# ---------------------------------------------------------------------------
# Sample data helpers
# ---------------------------------------------------------------------------

def bonding_curve_bytes(creator: Pubkey, *, complete: bool = False, trailing: int = 70) -> bytes:
    """Serialize a bonding-curve account the way the Pump program stores it."""
    return (
        bytes(8)
        + struct.pack("<QQQQQ", 1_073_000_000_000_000, 30_000_000_000, 793_100_000_000_000, 0, 10**15)
        + struct.pack("<?", complete)
        + bytes(creator)
        + bytes(trailing)
    )


def token_account(mint: str, pubkey: str, amount: int, decimals: int = 6) -> dict:
    """Minimal ``jsonParsed`` keyed token account."""
    return {
        "pubkey": pubkey,
        "account": {
            "data": {
                "parsed": {
                    "info": {
                        "mint": mint,
                        "owner": "Owner111",
                        "tokenAmount": {
                            "amount": str(amount),
                            "decimals": decimals,
                            "uiAmount": amount / 10**decimals,
                        },
                    },
                    "type": "account",
                },
                "program": "spl-token",
            },
            "lamports": 2_039_280,
        },
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def keypair():
    return Keypair()


@pytest.fixture
def creator():
    return Pubkey.new_unique()


@pytest.fixture
def mint():
    return Pubkey.new_unique()


@pytest.fixture
def pump_curve_account(creator):
    return AccountInfo(
        owner=PUMP_PROGRAM,
        lamports=1_500_000,
        data=bonding_curve_bytes(creator),
    )


@pytest.fixture
def rpc():
    return AsyncMock(spec=SolanaRpcClient)


@pytest.fixture
def ctx(rpc, keypair):
    return LiquidatorContext(rpc=rpc, keypair=keypair, confirm_timeout=5.0, confirm_poll_interval=0.0)
