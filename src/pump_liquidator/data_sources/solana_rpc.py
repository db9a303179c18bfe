"""
Solana RPC client for the Pump liquidator.

Uses the standard JSON-RPC interface over ``httpx``.  Unlike a best-effort
enrichment client, every failure here raises: callers decide whether an
error is fatal (scanning, submission) or only marks one token as failed
(classification).
"""

from __future__ import annotations

import asyncio
import base64
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from ._retry import async_http_post_json

logger = logging.getLogger(__name__)

_BACKOFF_BASE = 1.5  # seconds

_COMMITMENT_RANK = {"processed": 0, "confirmed": 1, "finalized": 2}


class RpcError(Exception):
    """Raised when an RPC call fails at the transport or JSON-RPC level."""

    def __init__(self, method: str, message: str, code: Optional[int] = None) -> None:
        super().__init__(f"Solana RPC {method} failed: {message}")
        self.method = method
        self.code = code


class TransactionFailedError(Exception):
    """Raised when a submitted transaction fails on-chain or never confirms."""

    def __init__(self, signature: str, reason: Any) -> None:
        super().__init__(f"Transaction {signature} failed: {reason}")
        self.signature = signature
        self.reason = reason


@dataclass
class AccountInfo:
    owner: Pubkey
    lamports: int
    data: bytes
    executable: bool = False


class SolanaRpcClient:
    """Async Solana JSON-RPC client."""

    def __init__(
        self,
        endpoint: str,
        timeout: int = 15,
        *,
        commitment: str = "confirmed",
        max_retries: int = 1,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._timeout = timeout
        self._commitment = commitment
        self._max_retries = max_retries
        self._client: httpx.AsyncClient | None = None
        self._id_counter = 0

    @property
    def commitment(self) -> str:
        return self._commitment

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_token_accounts_by_owner(
        self, owner: str, program_id: str
    ) -> list[dict[str, Any]]:
        """Return every ``jsonParsed`` token account *owner* holds under *program_id*."""
        result = await self._call(
            "getTokenAccountsByOwner",
            [
                owner,
                {"programId": program_id},
                {"encoding": "jsonParsed", "commitment": self._commitment},
            ],
        )
        if not isinstance(result, dict):
            raise RpcError("getTokenAccountsByOwner", f"unexpected result {result!r}")
        return result.get("value") or []

    async def get_account_info(self, address: str) -> Optional[AccountInfo]:
        """Fetch raw account data, or ``None`` when no account exists."""
        result = await self._call(
            "getAccountInfo",
            [address, {"encoding": "base64", "commitment": self._commitment}],
        )
        value = result.get("value") if isinstance(result, dict) else None
        if value is None:
            return None
        data_field = value.get("data") or ["", "base64"]
        raw = data_field[0] if isinstance(data_field, list) else data_field
        return AccountInfo(
            owner=Pubkey.from_string(value["owner"]),
            lamports=int(value.get("lamports", 0)),
            data=base64.b64decode(raw) if raw else b"",
            executable=bool(value.get("executable", False)),
        )

    async def get_latest_blockhash(self) -> Hash:
        result = await self._call(
            "getLatestBlockhash", [{"commitment": self._commitment}]
        )
        blockhash = (result or {}).get("value", {}).get("blockhash")
        if not blockhash:
            raise RpcError("getLatestBlockhash", f"no blockhash in {result!r}")
        return Hash.from_string(blockhash)

    async def send_transaction(
        self, tx: Transaction, *, skip_preflight: bool = False
    ) -> str:
        """Submit a signed transaction and return its signature."""
        tx_b64 = base64.b64encode(bytes(tx)).decode("utf-8")
        result = await self._call(
            "sendTransaction",
            [
                tx_b64,
                {
                    "encoding": "base64",
                    "skipPreflight": skip_preflight,
                    "preflightCommitment": self._commitment,
                },
            ],
            max_retries=1,
        )
        if not result or not isinstance(result, str):
            raise RpcError("sendTransaction", f"no signature returned: {result!r}")
        return result

    async def get_signature_statuses(
        self, signatures: list[str]
    ) -> list[Optional[dict[str, Any]]]:
        result = await self._call(
            "getSignatureStatuses",
            [signatures, {"searchTransactionHistory": True}],
        )
        return list((result or {}).get("value") or [None] * len(signatures))

    async def confirm_transaction(
        self,
        signature: str,
        *,
        timeout: float = 60.0,
        poll_interval: float = 0.8,
    ) -> None:
        """Poll until *signature* reaches the client commitment.

        Raises ``TransactionFailedError`` if the transaction carries an
        error or does not reach the commitment before *timeout*.
        """
        wanted = _COMMITMENT_RANK[self._commitment]
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            statuses = await self.get_signature_statuses([signature])
            status = statuses[0] if statuses else None
            if status is not None:
                if status.get("err"):
                    raise TransactionFailedError(signature, status["err"])
                reached = (status.get("confirmationStatus") or "").lower()
                if _COMMITMENT_RANK.get(reached, -1) >= wanted:
                    return
            await asyncio.sleep(poll_interval)
        raise TransactionFailedError(signature, f"not confirmed within {timeout:.0f}s")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _call(
        self,
        method: str,
        params: list[Any] | dict,
        *,
        max_retries: Optional[int] = None,
    ) -> Any:
        """JSON-RPC call; raises ``RpcError`` on any failure."""
        self._id_counter += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._id_counter,
            "method": method,
            "params": params,
        }
        client = await self._get_client()
        try:
            body = await async_http_post_json(
                client, self._endpoint, json_payload=payload,
                max_retries=max_retries or self._max_retries,
                backoff_base=_BACKOFF_BASE,
                label=f"Solana RPC ({method})",
            )
        except httpx.HTTPStatusError as exc:
            raise RpcError(method, f"HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise RpcError(method, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise RpcError(method, "malformed response (not JSON)") from exc

        if not isinstance(body, dict):
            raise RpcError(method, f"malformed response {body!r}")
        if "error" in body:
            err = body["error"] or {}
            if isinstance(err, dict):
                raise RpcError(method, err.get("message", str(err)), err.get("code"))
            raise RpcError(method, str(err))
        return body.get("result")
