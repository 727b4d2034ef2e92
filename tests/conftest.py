# FILE: tests/conftest.py
"""
Pytest configuration for the unloggarr test suite.

Provides:
- a clean environment (no API keys, no Gotify, no schedule) per test
- record and completion-stream factories
"""
import sys
from datetime import datetime
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from unloggarr.logs.schemas import LogRecord, Severity
from unloggarr.llm.usage import TokenUsage

_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "UNLOGGARR_LLM_PROVIDER",
    "GOTIFY_URL",
    "GOTIFY_TOKEN",
    "UNLOGGARR_SCHEDULE",
    "UNLOGGARR_SCHEDULE_LOG_FILE",
    "UNLOGGARR_SCHEDULE_TAIL_LINES",
    "MCPO_BASE_URL",
    "MCPO_HEALTH_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without credentials or schedule configured."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch


@pytest.fixture
def make_records():
    """Build a batch with the given number of records per severity, in that order."""
    def _make(**counts):
        records = []
        seq = 1
        for level in ("ERROR", "WARN", "INFO", "DEBUG"):
            for _ in range(counts.get(level, 0)):
                records.append(LogRecord(
                    sequence=seq,
                    timestamp=datetime(2024, 1, 15, 10, 30, 0),
                    severity=Severity(level),
                    message=f"{level.lower()} line {seq}",
                ))
                seq += 1
        return records
    return _make


@pytest.fixture
def fake_stream():
    """Factory for stand-ins of stream_completion yielding canned events."""
    def _factory(fragments, usage=None, error=None):
        calls = []

        async def _stream(prompt, provider=None, model=None, **kwargs):
            calls.append({"prompt": prompt, "provider": provider, "model": model})
            yield {"type": "metadata", "provider": "anthropic", "model": "test-model"}
            for text in fragments:
                yield {"type": "token", "text": text}
            if error:
                yield {"type": "error", "message": error}
                return
            yield {"type": "usage", "usage": usage if usage is not None else TokenUsage()}

        _stream.calls = calls
        return _stream
    return _factory
