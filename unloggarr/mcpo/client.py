# FILE: unloggarr/mcpo/client.py
"""
Async client for the MCPO proxy in front of the home server.

Endpoints used:
- get_logs                    -> raw log text for one file
- get_notifications_overview  -> unread/archive counters
- list_notifications          -> recent unread server notifications

Only the reachability probe carries an explicit timeout; everything else uses
httpx defaults.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Optional

import httpx

from unloggarr.errors import ProxyError
from unloggarr.mcpo.decoding import decode_log_payload
from unloggarr.settings import HEALTH_PROBE_TIMEOUT_S, get_mcpo_base_url

logger = logging.getLogger(__name__)

MCPO_HEADERS = {
    "Content-Type": "application/json",
    "accept": "application/json",
}

FALLBACK_OVERVIEW = {"unread": {"total": 0}, "archive": {"total": 0}}


def _is_unexpected_error(payload: Any) -> bool:
    if not isinstance(payload, dict):
        return False
    detail = payload.get("detail")
    return isinstance(detail, dict) and detail.get("message") == "Unexpected error"


def _safe_json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


class ProxyClient:
    """Thin wrapper over the proxy's JSON POST endpoints."""

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or get_mcpo_base_url()).rstrip("/")
        self._transport = transport

    def endpoint(self, name: str) -> str:
        return f"{self.base_url}/{name.lstrip('/')}"

    def _client(self, timeout: Any = httpx.USE_CLIENT_DEFAULT) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {"headers": MCPO_HEADERS}
        if timeout is not httpx.USE_CLIENT_DEFAULT:
            kwargs["timeout"] = timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    async def fetch_log_lines(self, log_file_path: str, tail_lines: int) -> list[str]:
        """
        Fetch the tail of a log file as ordered raw lines.

        Raises:
            ProxyError: transport failure, non-2xx status, or an `error` field
                in the payload.
        """
        logger.info(f"[mcpo] Fetching logs: {log_file_path} ({tail_lines} lines)")
        try:
            async with self._client() as client:
                resp = await client.post(
                    self.endpoint("get_logs"),
                    json={"log_file_path": log_file_path, "tail_lines": tail_lines},
                )
        except httpx.HTTPError as e:
            raise ProxyError(f"Log proxy unreachable: {e}") from e

        if resp.status_code >= 400:
            raise ProxyError(f"Log proxy returned {resp.status_code}: {resp.reason_phrase}")

        data = _safe_json(resp)
        if isinstance(data, dict) and data.get("error"):
            raise ProxyError(f"Log proxy error: {data['error']}")

        decoded = decode_log_payload(data)
        if decoded.shape is None:
            logger.warning(f"[mcpo] Unexpected log payload shape: {type(data).__name__}")
        logger.info(f"[mcpo] Received {len(decoded.lines)} lines (shape={decoded.shape})")
        return decoded.lines

    async def fetch_notifications(self, limit: int = 10) -> dict[str, Any]:
        """
        Fetch the notification overview and recent unread notifications.

        Either call failing degrades to fallback data plus a `warning`.
        """
        async with self._client() as client:
            overview_resp, list_resp = await asyncio.gather(
                client.post(self.endpoint("get_notifications_overview")),
                client.post(
                    self.endpoint("list_notifications"),
                    json={"type": "UNREAD", "offset": 0, "limit": limit},
                ),
            )

        overview = _safe_json(overview_resp)
        notifications = _safe_json(list_resp)

        overview_failed = overview_resp.status_code >= 400 or _is_unexpected_error(overview)
        list_failed = list_resp.status_code >= 400 or _is_unexpected_error(notifications)

        result: dict[str, Any] = {
            "overview": copy.deepcopy(FALLBACK_OVERVIEW) if overview_failed else overview,
            "notifications": [] if list_failed else notifications,
        }
        if overview_failed or list_failed:
            logger.warning("[mcpo] Proxy errors in notification fetch, using fallback data")
            result["warning"] = "MCP server error - using fallback data"
        return result

    async def probe(self, url: str, timeout: float = HEALTH_PROBE_TIMEOUT_S) -> str:
        """Reachability check: 'running', 'degraded' or 'unreachable'."""
        try:
            async with self._client(timeout=httpx.Timeout(timeout)) as client:
                resp = await client.get(url)
        except httpx.HTTPError:
            return "unreachable"
        return "running" if resp.is_success else "degraded"


__all__ = ["ProxyClient", "MCPO_HEADERS", "FALLBACK_OVERVIEW"]
