"""
Project configuration file for the Pump liquidator.

This module centralises all user-modifiable settings such as the RPC
endpoint, the wallet secret and confirmation timing.  Values are read from
environment variables; a ``.env`` file found from the working directory
upward is loaded first if present; real environment variables win.
"""

from __future__ import annotations

import logging
import os

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _parse_float(name: str, default: str, *, low: float = 0.0, high: float = 1.0) -> float:
    """Parse an env var as a float and validate it within [low, high]."""
    raw = os.getenv(name, default)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.error("Invalid value for %s: %r – using default %s", name, raw, default)
        value = float(default)
    if not (low <= value <= high):
        logger.warning("%s=%.4f is outside [%.1f, %.1f] – clamped", name, value, low, high)
        value = max(low, min(value, high))
    return value


def _parse_int(name: str, default: str, *, minimum: int = 1) -> int:
    """Parse an env var as an int and enforce a minimum."""
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.error("Invalid value for %s: %r – using default %s", name, raw, default)
        value = int(default)
    if value < minimum:
        logger.warning("%s=%d is below minimum %d – clamped", name, value, minimum)
        value = minimum
    return value


def _parse_commitment(name: str, default: str) -> str:
    """Parse a commitment level; unknown values fall back to *default*."""
    raw = os.getenv(name, default).strip().lower()
    if raw not in _COMMITMENTS:
        logger.error("Invalid value for %s: %r – using default %s", name, raw, default)
        return default
    return raw


_COMMITMENTS = ("processed", "confirmed", "finalized")

# ---------------------------------------------------------------------------
# Solana RPC
# ---------------------------------------------------------------------------
SOLANA_RPC_ENDPOINT: str = (
    os.getenv("SOLANA_RPC_ENDPOINT")
    or os.getenv("RPC_URL")
    or "https://api.mainnet-beta.solana.com"
)
COMMITMENT: str = _parse_commitment("COMMITMENT", "confirmed")
REQUEST_TIMEOUT: int = _parse_int("REQUEST_TIMEOUT", "15", minimum=1)
# 1 = a single attempt per RPC call
RPC_MAX_RETRIES: int = _parse_int("RPC_MAX_RETRIES", "1", minimum=1)

# ---------------------------------------------------------------------------
# Wallet  (set exactly one)
# ---------------------------------------------------------------------------
KEYPAIR_PATH: str = os.getenv("KEYPAIR_PATH", "").strip()
PRIVATE_KEY: str = os.getenv("PRIVATE_KEY", "").strip()

# ---------------------------------------------------------------------------
# Transaction confirmation
# ---------------------------------------------------------------------------
CONFIRM_TIMEOUT_SECONDS: int = _parse_int("CONFIRM_TIMEOUT_SECONDS", "60", minimum=5)
CONFIRM_POLL_INTERVAL: float = _parse_float(
    "CONFIRM_POLL_INTERVAL", "0.8", low=0.1, high=10.0
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = os.getenv("LOG_FORMAT", "text")  # "text" or "json"
