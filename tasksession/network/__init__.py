"""
LOT 3: Network

Client HTTP asynchrone (httpx) et timeouts.
Aucun retry: un échec réseau est remonté tel quel à l'appelant.
"""

from .interfaces import TimeoutType, TimeoutConfig, ITimeoutManager
from .timeout_manager import TimeoutManager, InvalidTimeoutError
from .http_client import create_http_client, RequestHook

__all__ = [
    "TimeoutType",
    "TimeoutConfig",
    "ITimeoutManager",
    "TimeoutManager",
    "InvalidTimeoutError",
    "create_http_client",
    "RequestHook",
]
