# FILE: unloggarr/mcpo/decoding.py
"""
Normalisation of log payloads returned by the proxy.

The proxy has answered in several shapes over time. Each known shape is a
tagged entry in KNOWN_SHAPES, tried in priority order; the first match wins.
A payload matching none of them decodes to zero lines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional


def _split_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip()]


def _string_list(items: list) -> list[str]:
    return [str(item) for item in items if str(item).strip()]


@dataclass(frozen=True)
class PayloadShape:
    name: str
    matches: Callable[[Any], bool]
    extract: Callable[[Any], list[str]]


def _field_is(key: str, kind: type) -> Callable[[Any], bool]:
    return lambda data: isinstance(data, dict) and isinstance(data.get(key), kind)


KNOWN_SHAPES: tuple[PayloadShape, ...] = (
    PayloadShape("text", lambda data: isinstance(data, str), _split_lines),
    PayloadShape("content", _field_is("content", str), lambda d: _split_lines(d["content"])),
    PayloadShape("logs_list", _field_is("logs", list), lambda d: _string_list(d["logs"])),
    PayloadShape("logs_text", _field_is("logs", str), lambda d: _split_lines(d["logs"])),
    PayloadShape("result", _field_is("result", str), lambda d: _split_lines(d["result"])),
    PayloadShape("data_list", _field_is("data", list), lambda d: _string_list(d["data"])),
    PayloadShape("data_text", _field_is("data", str), lambda d: _split_lines(d["data"])),
)


@dataclass(frozen=True)
class DecodedLogPayload:
    shape: Optional[str]
    lines: list[str]


def decode_log_payload(data: Any) -> DecodedLogPayload:
    for shape in KNOWN_SHAPES:
        if shape.matches(data):
            return DecodedLogPayload(shape=shape.name, lines=shape.extract(data))
    return DecodedLogPayload(shape=None, lines=[])


__all__ = [
    "PayloadShape",
    "KNOWN_SHAPES",
    "DecodedLogPayload",
    "decode_log_payload",
]
