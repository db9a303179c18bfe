"""
Wallet keypair loading.

The secret source is chosen explicitly: a ``solana-keygen`` JSON file
(``KEYPAIR_PATH``) or a base58-encoded secret key (``PRIVATE_KEY``).
Exactly one must be configured.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import base58
from solders.keypair import Keypair

logger = logging.getLogger(__name__)


class KeypairError(Exception):
    """Raised when the wallet secret is missing, ambiguous or malformed."""


def _keypair_from_secret(raw: bytes, *, source: str) -> Keypair:
    if len(raw) != 64:
        raise KeypairError(f"Keypair must be 64 bytes (got {len(raw)}): {source}")
    try:
        return Keypair.from_bytes(raw)
    except ValueError as exc:
        raise KeypairError(f"Invalid keypair bytes from {source}: {exc}") from exc


def load_keypair_file(path: str | Path) -> Keypair:
    """Load a JSON array of 64 ints (Solana CLI default format)."""
    path = Path(path).expanduser()
    logger.info("Loading keypair from file: %s", path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise KeypairError(f"Failed to read keypair file '{path}': {exc}") from exc

    if not isinstance(payload, list):
        raise KeypairError(f"Unsupported keypair format in '{path}': expected a JSON array")
    try:
        raw = bytes(int(x) for x in payload)
    except (TypeError, ValueError) as exc:
        raise KeypairError(f"Keypair file '{path}' is not a byte array: {exc}") from exc
    return _keypair_from_secret(raw, source=str(path))


def load_keypair_base58(secret: str) -> Keypair:
    """Decode a base58 secret key string."""
    secret = secret.strip()
    logger.info("Loading keypair from base58 string (length: %d chars)", len(secret))
    try:
        raw = base58.b58decode(secret)
    except ValueError as exc:
        raise KeypairError(f"Failed to decode base58 private key: {exc}") from exc
    return _keypair_from_secret(raw, source="base58 private key")


def load_wallet(
    *, keypair_path: Optional[str] = None, private_key: Optional[str] = None
) -> Keypair:
    """Load the wallet from exactly one configured source."""
    if keypair_path and private_key:
        raise KeypairError("Set only one of KEYPAIR_PATH or PRIVATE_KEY, not both")
    if keypair_path:
        return load_keypair_file(keypair_path)
    if private_key:
        return load_keypair_base58(private_key)
    raise KeypairError("No wallet configured: set KEYPAIR_PATH or PRIVATE_KEY")
