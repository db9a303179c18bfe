"""
Pydantic models used throughout the Pump liquidator.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .constants import PUMP_TOKEN_LABEL, UNKNOWN_TOKEN_LABEL


# ---------------------------------------------------------------------------
# Token holding
# ---------------------------------------------------------------------------
class TokenHolding(BaseModel):
    """A non-empty SPL token account owned by the wallet."""

    mint: str = Field(..., description="Solana mint address")
    token_account: str = Field(..., description="Address of the wallet's token account")
    amount: int = Field(..., ge=0, description="Raw integer balance")
    decimals: int = Field(0, ge=0, description="Mint decimal precision")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_amount(self) -> float:
        return self.amount / (10 ** self.decimals)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------
class ClassificationStatus(str, Enum):
    MATCH = "match"
    NO_MATCH = "no_match"
    LOOKUP_FAILED = "lookup_failed"


class Classification(BaseModel):
    """Result of checking whether a holding was issued by the Pump program.

    ``LOOKUP_FAILED`` is kept distinct from ``NO_MATCH`` so callers can tell
    a true negative apart from a transient RPC fault.
    """

    holding: TokenHolding
    status: ClassificationStatus
    bonding_curve: str = Field("", description="Bonding-curve PDA that was checked")
    error: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def label(self) -> str:
        if self.status == ClassificationStatus.MATCH:
            return PUMP_TOKEN_LABEL
        return UNKNOWN_TOKEN_LABEL

    @property
    def is_pump_token(self) -> bool:
        return self.status == ClassificationStatus.MATCH


# ---------------------------------------------------------------------------
# Bonding curve account
# ---------------------------------------------------------------------------
class BondingCurveState(BaseModel):
    """Decoded Pump bonding-curve account."""

    virtual_token_reserves: int
    virtual_sol_reserves: int
    real_token_reserves: int
    real_sol_reserves: int
    token_total_supply: int
    complete: bool
    creator: str


# ---------------------------------------------------------------------------
# Derived sell addresses
# ---------------------------------------------------------------------------
class DerivedAddresses(BaseModel):
    """Addresses required to build a Pump sell for a single mint."""

    mint: str
    bonding_curve: str
    associated_bonding_curve: str
    user_ata: str
    creator_vault: str
    creator: str = Field("", description="Creator read from the bonding-curve account")


# ---------------------------------------------------------------------------
# Run results
# ---------------------------------------------------------------------------
class SellOutcome(BaseModel):
    """Outcome of one sell attempt."""

    mint: str
    amount: int
    display_amount: float = 0.0
    signature: Optional[str] = None
    error: Optional[str] = None
    skipped: bool = Field(False, description="True when not submitted (dry run)")

    @property
    def succeeded(self) -> bool:
        return self.signature is not None and self.error is None


class LiquidationReport(BaseModel):
    """Summary of one scan-and-sell pass."""

    wallet: str
    dry_run: bool = False
    holdings_scanned: int = 0
    pump_tokens: int = 0
    lookup_failures: list[str] = Field(
        default_factory=list,
        description="Mints whose classification lookup failed",
    )
    outcomes: list[SellOutcome] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def sold(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.error is not None)
