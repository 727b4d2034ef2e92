"""
MCPO proxy access.

The proxy fronts the home server's tool API; log text and server
notifications are read through it.
"""

from unloggarr.mcpo.client import ProxyClient, MCPO_HEADERS
from unloggarr.mcpo.decoding import decode_log_payload, DecodedLogPayload

__all__ = [
    "ProxyClient",
    "MCPO_HEADERS",
    "decode_log_payload",
    "DecodedLogPayload",
]
