# FILE: unloggarr/settings.py
"""
Environment-driven configuration.

Values are read on each call so that a `.env` loaded at startup, or an
override in tests, is always honoured.
"""

import os
from typing import List, Optional

# Default models for each provider
DEFAULT_MODELS = {
    "anthropic": "claude-3-5-sonnet-20241022",
    "openai": "gpt-4.1-mini",
}

MODEL_ENV_VARS = {
    "anthropic": "ANTHROPIC_MODEL",
    "openai": "OPENAI_MODEL",
}

API_KEY_ENV_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}

DEFAULT_PROVIDER = "anthropic"
ANALYSIS_TEMPERATURE = 0.3

DEFAULT_MCPO_BASE_URL = "http://unloggarr-mcpo:8000/unraid-mcp"
DEFAULT_MCPO_HEALTH_URL = "http://localhost:6970/mcp"
HEALTH_PROBE_TIMEOUT_S = 2.0

DEFAULT_SCHEDULE = "0 * * * *"
DEFAULT_LOG_FILE = "/var/log/syslog"
DEFAULT_TAIL_LINES = 100
DEFAULT_SCHEDULE_TAIL_LINES = 1000
TICK_INTERVAL_S = 60

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name, "").strip()
    if not v:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def get_provider() -> str:
    provider = os.getenv("UNLOGGARR_LLM_PROVIDER", "").strip().lower()
    return provider if provider in DEFAULT_MODELS else DEFAULT_PROVIDER


def get_model(provider: str) -> str:
    """Configured model for provider, falling back to the built-in default."""
    env_name = MODEL_ENV_VARS.get(provider, "")
    configured = os.getenv(env_name, "").strip() if env_name else ""
    return configured or DEFAULT_MODELS.get(provider, DEFAULT_MODELS[DEFAULT_PROVIDER])


def get_api_key(provider: str) -> Optional[str]:
    env_name = API_KEY_ENV_VARS.get(provider)
    if not env_name:
        return None
    return os.getenv(env_name) or None


def get_mcpo_base_url() -> str:
    return os.getenv("MCPO_BASE_URL") or DEFAULT_MCPO_BASE_URL


def get_mcpo_health_url() -> str:
    return os.getenv("MCPO_HEALTH_URL") or DEFAULT_MCPO_HEALTH_URL


def get_gotify_config() -> tuple[Optional[str], Optional[str]]:
    return os.getenv("GOTIFY_URL") or None, os.getenv("GOTIFY_TOKEN") or None


def is_gotify_configured() -> bool:
    url, token = get_gotify_config()
    return bool(url and token)


def get_env_schedule() -> Optional[str]:
    return os.getenv("UNLOGGARR_SCHEDULE") or None


def get_default_schedule() -> str:
    return get_env_schedule() or DEFAULT_SCHEDULE


def get_schedule_log_file() -> str:
    return os.getenv("UNLOGGARR_SCHEDULE_LOG_FILE") or DEFAULT_LOG_FILE


def get_schedule_tail_lines() -> int:
    return _int_env("UNLOGGARR_SCHEDULE_TAIL_LINES", DEFAULT_SCHEDULE_TAIL_LINES)


def get_cors_origins() -> List[str]:
    raw = os.getenv("UNLOGGARR_CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


__all__ = [
    "DEFAULT_MODELS",
    "DEFAULT_PROVIDER",
    "ANALYSIS_TEMPERATURE",
    "HEALTH_PROBE_TIMEOUT_S",
    "DEFAULT_LOG_FILE",
    "DEFAULT_TAIL_LINES",
    "TICK_INTERVAL_S",
    "get_provider",
    "get_model",
    "get_api_key",
    "get_mcpo_base_url",
    "get_mcpo_health_url",
    "get_gotify_config",
    "is_gotify_configured",
    "get_env_schedule",
    "get_default_schedule",
    "get_schedule_log_file",
    "get_schedule_tail_lines",
    "get_cors_origins",
]
