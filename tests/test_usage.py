# FILE: tests/test_usage.py
"""
Tests for unloggarr/llm/usage.py
Usage decoding across provider layouts.
"""

from types import SimpleNamespace

import pytest

from unloggarr.llm.usage import TokenUsage, coerce_int, decode_usage


class TestDecodeUsage:

    @pytest.mark.parametrize("payload", [
        {"inputTokens": 10, "outputTokens": 3},
        {"promptTokens": 10, "completionTokens": 3},
        {"input_tokens": 10, "output_tokens": 3},
        {"prompt_tokens": 10, "completion_tokens": 3},
        {"prompt_token_count": 10, "candidates_token_count": 3},
    ])
    def test_flat_layouts_derive_total(self, payload):
        usage = decode_usage(payload)
        assert (usage.prompt_tokens, usage.completion_tokens, usage.total_tokens) == (10, 3, 13)

    def test_reported_total_is_kept(self):
        usage = decode_usage({"promptTokens": 10, "completionTokens": 3, "totalTokens": 20})
        assert usage.total_tokens == 20

    def test_object_attributes(self):
        usage = decode_usage(SimpleNamespace(input_tokens=7, output_tokens=2))
        assert usage.total_tokens == 9

    def test_nested_usage_on_message(self):
        msg = SimpleNamespace(usage=SimpleNamespace(input_tokens=4, output_tokens=1))
        assert decode_usage(msg).prompt_tokens == 4

    def test_nested_provider_metadata(self):
        payload = {"providerMetadata": {"anthropic": {"usage": {"input_tokens": 8, "output_tokens": 8}}}}
        assert decode_usage(payload).total_tokens == 16

    def test_experimental_provider_metadata(self):
        payload = {"experimental_providerMetadata": {"anthropic": {"usage": {"input_tokens": 1, "output_tokens": 2}}}}
        assert decode_usage(payload).total_tokens == 3

    @pytest.mark.parametrize("payload", [None, {}, {"unrelated": 1}, "text"])
    def test_unknown_is_zero(self, payload):
        assert decode_usage(payload) == TokenUsage()

    def test_string_counts_coerced(self):
        assert decode_usage({"input_tokens": "12", "output_tokens": None}).total_tokens == 12


class TestTokenUsageWire:

    def test_wire_names(self):
        usage = TokenUsage(prompt_tokens=10, completion_tokens=3, total_tokens=13)
        assert usage.to_wire() == {"promptTokens": 10, "completionTokens": 3, "totalTokens": 13}

    def test_compact_json(self):
        usage = TokenUsage(prompt_tokens=1, completion_tokens=2, total_tokens=3)
        assert usage.to_json() == '{"promptTokens":1,"completionTokens":2,"totalTokens":3}'


def test_coerce_int():
    assert coerce_int("5") == 5
    assert coerce_int(None) == 0
    assert coerce_int("abc") == 0
