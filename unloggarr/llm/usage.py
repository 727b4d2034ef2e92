# FILE: unloggarr/llm/usage.py
"""
Token usage decoding.

Providers report usage under different key names, on objects or on plain
dicts, sometimes nested inside provider metadata. Each known layout is an
entry in USAGE_SHAPES, probed in priority order. When nothing matches the
result is a zero-valued TokenUsage, never None, so callers can always emit a
trailing usage marker.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenUsage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt_tokens: int = Field(default=0, alias="promptTokens")
    completion_tokens: int = Field(default=0, alias="completionTokens")
    total_tokens: int = Field(default=0, alias="totalTokens")

    def to_wire(self) -> dict[str, int]:
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        return json.dumps(self.to_wire(), separators=(",", ":"))


@dataclass(frozen=True)
class UsageShape:
    name: str
    prompt_key: str
    completion_key: str
    total_key: Optional[str] = None


USAGE_SHAPES: tuple[UsageShape, ...] = (
    UsageShape("camel_io", "inputTokens", "outputTokens", "totalTokens"),
    UsageShape("camel_pc", "promptTokens", "completionTokens", "totalTokens"),
    UsageShape("anthropic", "input_tokens", "output_tokens"),
    UsageShape("openai", "prompt_tokens", "completion_tokens", "total_tokens"),
    UsageShape("gemini", "prompt_token_count", "candidates_token_count", "total_token_count"),
)

# Containers that may hold the usage object one level down
_NESTED_PATHS = (
    ("usage",),
    ("experimental_providerMetadata", "anthropic", "usage"),
    ("providerMetadata", "anthropic", "usage"),
    ("usage_metadata",),
)


def _uget(obj: Any, key: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def coerce_int(v: Any) -> int:
    try:
        if v is None:
            return 0
        return int(v)
    except (TypeError, ValueError):
        return 0


def _decode_flat(obj: Any) -> Optional[TokenUsage]:
    for shape in USAGE_SHAPES:
        pt = _uget(obj, shape.prompt_key)
        ct = _uget(obj, shape.completion_key)
        if pt is None and ct is None:
            continue
        prompt = coerce_int(pt)
        completion = coerce_int(ct)
        total = coerce_int(_uget(obj, shape.total_key)) if shape.total_key else 0
        return TokenUsage(
            prompt_tokens=prompt,
            completion_tokens=completion,
            total_tokens=total or prompt + completion,
        )
    return None


def decode_usage(obj: Any) -> TokenUsage:
    """Decode a usage object (or a result object carrying one) into TokenUsage."""
    if obj is None:
        return TokenUsage()
    if isinstance(obj, TokenUsage):
        return obj

    direct = _decode_flat(obj)
    if direct is not None:
        return direct

    for path in _NESTED_PATHS:
        node = obj
        for key in path:
            node = _uget(node, key)
            if node is None:
                break
        if node is not None:
            nested = _decode_flat(node)
            if nested is not None:
                return nested

    return TokenUsage()


__all__ = ["TokenUsage", "UsageShape", "USAGE_SHAPES", "coerce_int", "decode_usage"]
