# FILE: unloggarr/llm/streaming.py
"""
Streaming completion calls.

All providers yield dict events following one schema:

{"type": "metadata", "provider": "...", "model": "..."}
    - Sent once at the start

{"type": "token", "text": "<chunk of answer>"}
    - Streaming chunks, in generation order

{"type": "usage", "usage": TokenUsage}
    - Sent exactly once after the last token (zeros when unavailable)

{"type": "error", "message": "..."}
    - Terminal; nothing follows it

Credentials are checked by `require_credentials` before any network call.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncGenerator, Dict, Optional

import anthropic
from openai import AsyncOpenAI

from unloggarr.errors import MissingCredentialError
from unloggarr.llm.usage import TokenUsage, decode_usage
from unloggarr.settings import (
    ANALYSIS_TEMPERATURE,
    get_api_key,
    get_model,
    get_provider,
)

logger = logging.getLogger(__name__)

ANTHROPIC_MAX_TOKENS = 4096


def require_credentials(provider: Optional[str] = None) -> str:
    """Return the API key for provider or raise MissingCredentialError."""
    provider = provider or get_provider()
    api_key = get_api_key(provider)
    if not api_key:
        name = "Anthropic" if provider == "anthropic" else "OpenAI"
        raise MissingCredentialError(f"{name} API key not configured")
    return api_key


async def stream_anthropic(
    prompt: str,
    model: str,
    api_key: str,
    temperature: float = ANALYSIS_TEMPERATURE,
) -> AsyncGenerator[Dict[str, Any], None]:
    client = anthropic.AsyncAnthropic(api_key=api_key)

    yield {"type": "metadata", "provider": "anthropic", "model": model}

    try:
        async with client.messages.stream(
            model=model,
            max_tokens=ANTHROPIC_MAX_TOKENS,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
        ) as stream:
            async for text in stream.text_stream:
                yield {"type": "token", "text": text}

            final_msg = None
            try:
                maybe = stream.get_final_message()
                final_msg = await maybe if asyncio.iscoroutine(maybe) else maybe
            except Exception as e:
                logger.warning(f"[llm] Could not read final anthropic message: {e}")

    except Exception as e:
        yield {"type": "error", "message": str(e)}
        return

    yield {"type": "usage", "usage": decode_usage(final_msg)}


async def stream_openai(
    prompt: str,
    model: str,
    api_key: str,
    temperature: float = ANALYSIS_TEMPERATURE,
) -> AsyncGenerator[Dict[str, Any], None]:
    client = AsyncOpenAI(api_key=api_key)

    yield {"type": "metadata", "provider": "openai", "model": model}

    usage: TokenUsage = TokenUsage()
    try:
        stream = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            stream=True,
            stream_options={"include_usage": True},
        )

        async for chunk in stream:
            # Usage arrives on the final chunk when include_usage is set
            u = getattr(chunk, "usage", None)
            if u:
                usage = decode_usage(u)

            if chunk.choices and chunk.choices[0].delta and chunk.choices[0].delta.content:
                yield {"type": "token", "text": chunk.choices[0].delta.content}

    except Exception as e:
        yield {"type": "error", "message": str(e)}
        return

    yield {"type": "usage", "usage": usage}


PROVIDER_STREAMS = {
    "anthropic": stream_anthropic,
    "openai": stream_openai,
}


async def stream_completion(
    prompt: str,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    temperature: float = ANALYSIS_TEMPERATURE,
) -> AsyncGenerator[Dict[str, Any], None]:
    """
    Stream a single-prompt completion from the configured provider.

    Args:
        prompt: Full prompt text
        provider: "anthropic" or "openai" (defaults to UNLOGGARR_LLM_PROVIDER)
        model: Model id (defaults to the provider's configured model)
        temperature: Sampling temperature

    Raises:
        MissingCredentialError: on first iteration, before any network call
    """
    provider = (provider or get_provider()).lower()
    if provider not in PROVIDER_STREAMS:
        yield {"type": "error", "message": f"Unknown provider '{provider}'"}
        return

    api_key = require_credentials(provider)
    use_model = model or get_model(provider)

    logger.info(f"[llm] Streaming completion via {provider}/{use_model}")

    gen = PROVIDER_STREAMS[provider](prompt, use_model, api_key, temperature)

    async for event in gen:
        yield event


__all__ = [
    "require_credentials",
    "stream_anthropic",
    "stream_openai",
    "stream_completion",
]
