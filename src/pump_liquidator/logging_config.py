"""
Logging setup for the Pump liquidator.

Two output formats, picked with ``LOG_FORMAT``:
- ``text`` (default): one readable line per record, tagged with the mint
- ``json``: one JSON object per line for log shipping

``LOG_LEVEL`` sets the root level (default INFO).

Classification lookups run concurrently, so each per-token step runs inside
``mint_scope(mint)``; records emitted there carry that mint, everything else
carries ``-``.  Records logged with ``extra={"signature": ...}`` also carry
the transaction signature in JSON output.
"""

from __future__ import annotations

import json as json_mod
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from config import LOG_FORMAT, LOG_LEVEL

mint_ctx: ContextVar[str] = ContextVar("mint", default="-")

# Per-request lines from the HTTP client drown the per-token progress
_NOISY_LOGGERS = ("httpx", "httpcore")


@contextmanager
def mint_scope(mint: str) -> Iterator[None]:
    """Tag every record logged inside the block with *mint*."""
    token = mint_ctx.set(mint)
    try:
        yield
    finally:
        mint_ctx.reset(token)


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "mint": getattr(record, "mint", mint_ctx.get()),
            "msg": record.getMessage(),
        }
        signature = getattr(record, "signature", None)
        if signature:
            entry["signature"] = signature
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json_mod.dumps(entry, default=str)


class _MintFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.mint = mint_ctx.get()  # type: ignore[attr-defined]
        return True


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Replace root handlers with a single stdout handler."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if (fmt or LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-7s [%(mint)s] %(name)s: %(message)s",
                defaults={"mint": "-"},
            )
        )
    handler.addFilter(_MintFilter())
    root.addHandler(handler)

    if root.level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
