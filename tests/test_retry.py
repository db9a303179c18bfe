"""Tests for the async JSON POST helper (_retry.py)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from pump_liquidator.data_sources._retry import _parse_retry_after, async_http_post_json


def _mock_response(status_code: int = 200, json_data=None, headers=None):
    """Build a mock httpx.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = json_data
    resp.headers = headers or {}
    if status_code >= 400:
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}",
            request=MagicMock(),
            response=resp,
        )
    else:
        resp.raise_for_status = MagicMock()
    return resp


class TestAsyncHttpPostJson:

    @pytest.mark.asyncio
    async def test_success(self):
        client = AsyncMock()
        client.post = AsyncMock(return_value=_mock_response(200, {"result": 1}))

        result = await async_http_post_json(client, "https://rpc.example.com", json_payload={})
        assert result == {"result": 1}
        client.post.assert_called_once()

    @pytest.mark.asyncio
    async def test_single_attempt_by_default(self):
        client = AsyncMock()
        client.post = AsyncMock(side_effect=httpx.RequestError("Connection refused"))

        with pytest.raises(httpx.RequestError):
            await async_http_post_json(client, "https://rpc.example.com", json_payload={})
        assert client.post.call_count == 1

    @pytest.mark.asyncio
    async def test_429_retries_when_allowed(self):
        client = AsyncMock()
        client.post = AsyncMock(
            side_effect=[_mock_response(429), _mock_response(200, {"result": "ok"})]
        )

        with patch("pump_liquidator.data_sources._retry.asyncio.sleep", new_callable=AsyncMock):
            result = await async_http_post_json(
                client, "https://rpc.example.com", json_payload={}, max_retries=3, backoff_base=0.01
            )
        assert result == {"result": "ok"}
        assert client.post.call_count == 2

    @pytest.mark.asyncio
    async def test_429_on_last_attempt_raises(self):
        client = AsyncMock()
        client.post = AsyncMock(return_value=_mock_response(429))

        with pytest.raises(httpx.HTTPStatusError):
            await async_http_post_json(client, "https://rpc.example.com", json_payload={})

    @pytest.mark.asyncio
    async def test_request_error_exhausts_retries(self):
        client = AsyncMock()
        client.post = AsyncMock(side_effect=httpx.RequestError("timeout"))

        with patch("pump_liquidator.data_sources._retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(httpx.RequestError):
                await async_http_post_json(
                    client, "https://rpc.example.com", json_payload={}, max_retries=3
                )
        assert client.post.call_count == 3
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_500_raises_status_error(self):
        client = AsyncMock()
        client.post = AsyncMock(return_value=_mock_response(500))

        with pytest.raises(httpx.HTTPStatusError):
            await async_http_post_json(client, "https://rpc.example.com", json_payload={})


class TestParseRetryAfter:

    def test_integer_header(self):
        resp = _mock_response(429, headers={"retry-after": "3"})
        assert _parse_retry_after(resp, 1.0) == 3.0

    def test_minimum_half_second(self):
        resp = _mock_response(429, headers={"retry-after": "0"})
        assert _parse_retry_after(resp, 1.0) == 0.5

    def test_missing_header_uses_default(self):
        resp = _mock_response(429)
        assert _parse_retry_after(resp, 2.25) == 2.25

    def test_http_date_uses_default(self):
        resp = _mock_response(429, headers={"retry-after": "Wed, 21 Oct 2015 07:28:00 GMT"})
        assert _parse_retry_after(resp, 1.5) == 1.5
