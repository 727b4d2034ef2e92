# FILE: tests/test_streaming.py
"""
Tests for unloggarr/llm/streaming.py
Credential gate and provider event streams with mocked SDK clients.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from unloggarr.errors import MissingCredentialError
from unloggarr.llm.streaming import require_credentials, stream_completion
from unloggarr.llm.usage import TokenUsage


async def _drain(gen):
    return [event async for event in gen]


class _FakeAnthropicStream:
    def __init__(self, texts, final_message):
        self._texts = texts
        self._final = final_message

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    @property
    def text_stream(self):
        async def _gen():
            for t in self._texts:
                yield t
        return _gen()

    async def get_final_message(self):
        return self._final


class TestRequireCredentials:

    def test_missing_anthropic_key(self):
        with pytest.raises(MissingCredentialError, match="Anthropic API key not configured"):
            require_credentials("anthropic")

    def test_missing_openai_key(self):
        with pytest.raises(MissingCredentialError, match="OpenAI API key not configured"):
            require_credentials("openai")

    def test_returns_key(self, clean_env):
        clean_env.setenv("OPENAI_API_KEY", "sk-openai")
        assert require_credentials("openai") == "sk-openai"


class TestStreamCompletion:

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_network(self):
        """No API key: error raised and the SDK client is never built."""
        with patch("unloggarr.llm.streaming.anthropic.AsyncAnthropic") as mock_client:
            with pytest.raises(MissingCredentialError):
                await _drain(stream_completion("prompt", provider="anthropic"))

        mock_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_provider(self):
        events = await _drain(stream_completion("prompt", provider="mystery"))
        assert events == [{"type": "error", "message": "Unknown provider 'mystery'"}]

    @pytest.mark.asyncio
    async def test_anthropic_events(self, clean_env):
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-test")
        final = SimpleNamespace(usage=SimpleNamespace(input_tokens=10, output_tokens=3))
        client = MagicMock()
        client.messages.stream.return_value = _FakeAnthropicStream(["Sys", "tem ", "OK"], final)

        with patch("unloggarr.llm.streaming.anthropic.AsyncAnthropic", return_value=client):
            events = await _drain(stream_completion("prompt", provider="anthropic", model="claude-test"))

        assert events[0] == {"type": "metadata", "provider": "anthropic", "model": "claude-test"}
        assert [e["text"] for e in events if e["type"] == "token"] == ["Sys", "tem ", "OK"]
        assert events[-1] == {
            "type": "usage",
            "usage": TokenUsage(prompt_tokens=10, completion_tokens=3, total_tokens=13),
        }
        kwargs = client.messages.stream.call_args.kwargs
        assert kwargs["temperature"] == 0.3
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    @pytest.mark.asyncio
    async def test_anthropic_failure_yields_error(self, clean_env):
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-test")
        client = MagicMock()
        client.messages.stream.side_effect = RuntimeError("overloaded")

        with patch("unloggarr.llm.streaming.anthropic.AsyncAnthropic", return_value=client):
            events = await _drain(stream_completion("prompt", provider="anthropic"))

        assert events[-1] == {"type": "error", "message": "overloaded"}
        assert not any(e["type"] == "usage" for e in events)

    @pytest.mark.asyncio
    async def test_openai_events(self, clean_env):
        clean_env.setenv("OPENAI_API_KEY", "sk-openai")
        chunks = [
            SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content="Hi"))], usage=None),
            SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=" there"))], usage=None),
            SimpleNamespace(choices=[], usage=SimpleNamespace(prompt_tokens=5, completion_tokens=2, total_tokens=7)),
        ]

        async def _chunks():
            for c in chunks:
                yield c

        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=_chunks())

        with patch("unloggarr.llm.streaming.AsyncOpenAI", return_value=client):
            events = await _drain(stream_completion("prompt", provider="openai"))

        assert events[0]["provider"] == "openai"
        assert events[0]["model"] == "gpt-4.1-mini"
        assert [e["text"] for e in events if e["type"] == "token"] == ["Hi", " there"]
        assert events[-1]["usage"].total_tokens == 7
        assert client.chat.completions.create.call_args.kwargs["stream_options"] == {"include_usage": True}

    @pytest.mark.asyncio
    async def test_provider_from_env(self, clean_env):
        clean_env.setenv("UNLOGGARR_LLM_PROVIDER", "openai")
        with pytest.raises(MissingCredentialError, match="OpenAI"):
            await _drain(stream_completion("prompt"))
