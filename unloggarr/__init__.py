"""unloggarr - log dashboard backend with LLM health summaries."""

__version__ = "1.0.0"
