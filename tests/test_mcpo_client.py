# FILE: tests/test_mcpo_client.py
"""
Tests for unloggarr/mcpo/
Payload decoding and the proxy client against an in-process httpx transport.
"""

import json

import httpx
import pytest

from unloggarr.errors import ProxyError
from unloggarr.mcpo.client import FALLBACK_OVERVIEW, ProxyClient
from unloggarr.mcpo.decoding import decode_log_payload

BASE = "http://mcpo.test/unraid-mcp"


def _client(handler) -> ProxyClient:
    return ProxyClient(base_url=BASE, transport=httpx.MockTransport(handler))


class TestDecodeLogPayload:
    """Every known payload shape, in priority order."""

    @pytest.mark.parametrize("payload,shape", [
        ("a\n\nb\n", "text"),
        ({"content": "a\nb"}, "content"),
        ({"logs": ["a", "", "b"]}, "logs_list"),
        ({"logs": "a\n  \nb"}, "logs_text"),
        ({"result": "a\nb"}, "result"),
        ({"data": ["a", "b"]}, "data_list"),
        ({"data": "a\nb"}, "data_text"),
    ])
    def test_shapes(self, payload, shape):
        decoded = decode_log_payload(payload)
        assert decoded.shape == shape
        assert decoded.lines == ["a", "b"]

    def test_content_wins_over_logs(self):
        decoded = decode_log_payload({"content": "c", "logs": ["l"]})
        assert decoded.shape == "content"
        assert decoded.lines == ["c"]

    def test_non_string_list_items_are_stringified(self):
        assert decode_log_payload({"logs": [1, 2]}).lines == ["1", "2"]

    @pytest.mark.parametrize("payload", [None, 42, {}, {"logs": 3}, {"other": "x"}])
    def test_unknown_shape_decodes_to_nothing(self, payload):
        decoded = decode_log_payload(payload)
        assert decoded.shape is None
        assert decoded.lines == []


class TestFetchLogLines:

    @pytest.mark.asyncio
    async def test_posts_path_and_tail(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"content": "line one\nline two"})

        lines = await _client(handler).fetch_log_lines("/var/log/syslog", 50)

        assert lines == ["line one", "line two"]
        assert seen["url"] == f"{BASE}/get_logs"
        assert seen["body"] == {"log_file_path": "/var/log/syslog", "tail_lines": 50}

    @pytest.mark.asyncio
    async def test_plain_text_body(self):
        handler = lambda request: httpx.Response(200, text="x\ny")
        assert await _client(handler).fetch_log_lines("/f", 10) == ["x", "y"]

    @pytest.mark.asyncio
    async def test_http_error_status_raises(self):
        handler = lambda request: httpx.Response(502)
        with pytest.raises(ProxyError, match="502"):
            await _client(handler).fetch_log_lines("/f", 10)

    @pytest.mark.asyncio
    async def test_error_field_raises(self):
        handler = lambda request: httpx.Response(200, json={"error": "no such file"})
        with pytest.raises(ProxyError, match="no such file"):
            await _client(handler).fetch_log_lines("/f", 10)

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ProxyError, match="unreachable"):
            await _client(handler).fetch_log_lines("/f", 10)

    @pytest.mark.asyncio
    async def test_unknown_shape_returns_empty(self):
        handler = lambda request: httpx.Response(200, json={"unexpected": True})
        assert await _client(handler).fetch_log_lines("/f", 10) == []


class TestFetchNotifications:

    @pytest.mark.asyncio
    async def test_both_calls_succeed(self):
        overview = {"unread": {"total": 2}, "archive": {"total": 5}}
        items = [{"id": "1", "title": "Parity check"}]

        def handler(request: httpx.Request):
            if request.url.path.endswith("get_notifications_overview"):
                return httpx.Response(200, json=overview)
            assert json.loads(request.content) == {"type": "UNREAD", "offset": 0, "limit": 10}
            return httpx.Response(200, json=items)

        result = await _client(handler).fetch_notifications()

        assert result == {"overview": overview, "notifications": items}

    @pytest.mark.asyncio
    async def test_unexpected_error_falls_back(self):
        def handler(request: httpx.Request):
            if request.url.path.endswith("get_notifications_overview"):
                return httpx.Response(200, json={"detail": {"message": "Unexpected error"}})
            return httpx.Response(200, json=[])

        result = await _client(handler).fetch_notifications()

        assert result["overview"] == FALLBACK_OVERVIEW
        assert result["warning"] == "MCP server error - using fallback data"

    @pytest.mark.asyncio
    async def test_fallback_overview_is_a_fresh_copy(self):
        handler = lambda request: httpx.Response(500)
        client = _client(handler)

        first = await client.fetch_notifications()
        first["overview"]["unread"]["total"] = 99
        second = await client.fetch_notifications()

        assert second["overview"] == {"unread": {"total": 0}, "archive": {"total": 0}}
        assert FALLBACK_OVERVIEW["unread"]["total"] == 0

    @pytest.mark.asyncio
    async def test_error_status_falls_back(self):
        def handler(request: httpx.Request):
            if request.url.path.endswith("list_notifications"):
                return httpx.Response(500, text="boom")
            return httpx.Response(200, json={"unread": {"total": 1}})

        result = await _client(handler).fetch_notifications()

        assert result["notifications"] == []
        assert result["overview"] == {"unread": {"total": 1}}
        assert "warning" in result


class TestProbe:

    @pytest.mark.asyncio
    async def test_running(self):
        handler = lambda request: httpx.Response(200)
        assert await _client(handler).probe("http://health.test/mcp") == "running"

    @pytest.mark.asyncio
    async def test_degraded(self):
        handler = lambda request: httpx.Response(503)
        assert await _client(handler).probe("http://health.test/mcp") == "degraded"

    @pytest.mark.asyncio
    async def test_unreachable(self):
        def handler(request):
            raise httpx.ConnectTimeout("timeout", request=request)

        assert await _client(handler).probe("http://health.test/mcp") == "unreachable"


class TestEndpoint:

    def test_trailing_and_leading_slashes(self):
        client = ProxyClient(base_url=BASE + "/")
        assert client.endpoint("/get_logs") == f"{BASE}/get_logs"

    def test_default_base_url_from_env(self, clean_env):
        clean_env.setenv("MCPO_BASE_URL", "http://other:9000/x")
        assert ProxyClient().endpoint("get_logs") == "http://other:9000/x/get_logs"
