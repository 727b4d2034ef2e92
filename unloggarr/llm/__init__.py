"""
LLM analysis of sampled logs.

Streams a health summary from the configured provider and relays it to the
caller, followed by token usage.
"""

from unloggarr.llm.usage import TokenUsage, decode_usage
from unloggarr.llm.streaming import stream_completion, require_credentials
from unloggarr.llm.prompts import build_analysis_prompt, build_scheduled_prompt
from unloggarr.llm.relay import (
    AnalysisResult,
    prepare_analysis,
    relay_analysis_text,
    relay_analysis_events,
    collect_analysis,
    format_token_sentinel,
    split_token_sentinel,
)

__all__ = [
    "TokenUsage",
    "decode_usage",
    "stream_completion",
    "require_credentials",
    "build_analysis_prompt",
    "build_scheduled_prompt",
    "AnalysisResult",
    "prepare_analysis",
    "relay_analysis_text",
    "relay_analysis_events",
    "collect_analysis",
    "format_token_sentinel",
    "split_token_sentinel",
]
