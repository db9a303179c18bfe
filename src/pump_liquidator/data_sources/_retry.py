"""
Async JSON POST helper with optional retry + exponential backoff.

Used by the Solana RPC client.  With ``max_retries=1`` (the default) every
request is a single attempt and transport errors surface immediately.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


def _parse_retry_after(resp: httpx.Response, default: float) -> float:
    """Extract wait time from a ``Retry-After`` header, or use *default*.

    The header may be an integer (seconds) or an HTTP-date.  We only handle
    the integer form since that's what most RPC providers emit.
    """
    raw = resp.headers.get("retry-after")
    if raw is not None:
        try:
            return max(float(raw), 0.5)
        except (ValueError, TypeError):
            pass
    return default


async def async_http_post_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    json_payload: Any,
    max_retries: int = 1,
    backoff_base: float = 1.5,
    label: str = "RPC",
) -> Any:
    """POST JSON *payload* and return the parsed JSON body.

    429 and transport errors are retried while attempts remain; the error
    from the final attempt is raised (``httpx.HTTPStatusError`` or
    ``httpx.RequestError``).
    """
    attempts = max(max_retries, 1)
    for attempt in range(attempts):
        last = attempt == attempts - 1
        try:
            resp = await client.post(url, json=json_payload)
            if resp.status_code == 429 and not last:
                wait = _parse_retry_after(resp, backoff_base * (2 ** attempt))
                logger.warning("%s rate-limited, retry in %.1fs", label, wait)
                await asyncio.sleep(wait)
                continue
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("%s HTTP %s", label, exc.response.status_code)
            if last:
                raise
            await asyncio.sleep(backoff_base * (2 ** attempt))
        except httpx.RequestError as exc:
            logger.warning("%s request failed: %s", label, exc)
            if last:
                raise
            await asyncio.sleep(backoff_base * (2 ** attempt))
    raise httpx.RequestError(f"{label}: no attempts made")
