# FILE: unloggarr/llm/relay.py
"""
Analysis relay: sampled logs -> prompt -> completion stream -> caller.

Two renderings of the same event stream:
- relay_analysis_text: plain text fragments, then the usage sentinel
  `\\n\\n<!--TOKENS:{...}-->` exactly once as the last bytes
- relay_analysis_events: SSE frames, token events then exactly one `done`
  event carrying usage

Single attempt; an upstream error ends the stream and fragments already
forwarded are not retracted. A client disconnect does not cancel the
upstream request.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import AsyncGenerator, Optional, Sequence

from unloggarr.errors import AnalysisStreamError, CompletionError, EmptyBatchError
from unloggarr.llm.prompts import build_analysis_prompt
from unloggarr.llm.streaming import require_credentials, stream_completion
from unloggarr.llm.usage import TokenUsage, decode_usage
from unloggarr.logs.sampler import sample_logs
from unloggarr.logs.schemas import LogRecord, SampledBatch

logger = logging.getLogger(__name__)

TOKEN_SENTINEL_PREFIX = "\n\n<!--TOKENS:"
TOKEN_SENTINEL_SUFFIX = "-->"
_SENTINEL_RE = re.compile(r"\n\n<!--TOKENS:(.+?)-->")


@dataclass
class AnalysisResult:
    summary_text: str
    usage: Optional[TokenUsage] = None


def format_token_sentinel(usage: Optional[TokenUsage]) -> str:
    return TOKEN_SENTINEL_PREFIX + (usage or TokenUsage()).to_json() + TOKEN_SENTINEL_SUFFIX


def split_token_sentinel(text: str) -> tuple[str, Optional[TokenUsage]]:
    """Strip the usage sentinel from received text and decode it."""
    match = _SENTINEL_RE.search(text)
    if not match:
        return text, None
    try:
        usage = decode_usage(json.loads(match.group(1)))
    except json.JSONDecodeError:
        return text, None
    return text[:match.start()] + text[match.end():], usage


def prepare_analysis(
    records: Sequence[LogRecord],
    log_file: str,
    selected_level: str,
    provider: Optional[str] = None,
) -> tuple[SampledBatch, str]:
    """
    Check preconditions, sample, and build the prompt.

    Raises:
        EmptyBatchError: no records supplied
        MissingCredentialError: provider API key not configured
    """
    if not records:
        raise EmptyBatchError("No logs provided for analysis")
    require_credentials(provider)

    batch = sample_logs(records)
    logger.info(
        f"[relay] Analyzing {batch.sampled_count} out of {batch.total_count} "
        f"entries from {log_file} (level: {selected_level})"
    )
    return batch, build_analysis_prompt(batch, log_file, selected_level)


async def relay_analysis_text(
    prompt: str,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> AsyncGenerator[str, None]:
    usage: Optional[TokenUsage] = None

    async for event in stream_completion(prompt, provider=provider, model=model):
        event_type = event.get("type")
        if event_type == "token":
            yield event.get("text", "")
        elif event_type == "usage":
            usage = event.get("usage")
        elif event_type == "error":
            logger.error(f"[relay] Upstream completion failed: {event.get('message')}")
            raise AnalysisStreamError(event.get("message") or "Completion failed")

    if usage is None:
        logger.warning("[relay] No usage information available, sending zeros")
    yield format_token_sentinel(usage)


def _sse(payload: dict) -> str:
    return "data: " + json.dumps(payload) + "\n\n"


async def relay_analysis_events(
    prompt: str,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> AsyncGenerator[str, None]:
    usage: Optional[TokenUsage] = None
    current_provider = provider
    current_model = model
    total_length = 0

    try:
        async for event in stream_completion(prompt, provider=provider, model=model):
            event_type = event.get("type")
            if event_type == "metadata":
                current_provider = event.get("provider", current_provider)
                current_model = event.get("model", current_model)
            elif event_type == "token":
                text = event.get("text", "")
                total_length += len(text)
                yield _sse({"type": "token", "text": text})
            elif event_type == "usage":
                usage = event.get("usage")
            elif event_type == "error":
                yield _sse({"type": "error", "error": event.get("message")})
                return
    except Exception as e:
        logger.exception("[relay] Event stream failed: %s", e)
        yield _sse({"type": "error", "error": str(e)})
        return

    yield _sse({
        "type": "done",
        "provider": current_provider,
        "model": current_model,
        "total_length": total_length,
        "usage": (usage or TokenUsage()).to_wire(),
    })


async def collect_analysis(
    prompt: str,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> AnalysisResult:
    """Drain a completion stream into one AnalysisResult."""
    parts: list[str] = []
    usage: Optional[TokenUsage] = None

    async for event in stream_completion(prompt, provider=provider, model=model):
        event_type = event.get("type")
        if event_type == "token":
            parts.append(event.get("text", ""))
        elif event_type == "usage":
            usage = event.get("usage")
        elif event_type == "error":
            raise CompletionError(event.get("message") or "Completion failed")

    return AnalysisResult(summary_text="".join(parts), usage=usage)


__all__ = [
    "AnalysisResult",
    "TOKEN_SENTINEL_PREFIX",
    "format_token_sentinel",
    "split_token_sentinel",
    "prepare_analysis",
    "relay_analysis_text",
    "relay_analysis_events",
    "collect_analysis",
]
