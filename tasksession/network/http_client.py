"""
LOT 3: Network - HTTP Client Factory

Construction du httpx.AsyncClient partagé par la passerelle d'authentification
et le reste de l'application.
"""

from typing import Awaitable, Callable, List, Optional

import httpx

from ..core.interfaces import ClientConfig
from .timeout_manager import TimeoutManager


RequestHook = Callable[[httpx.Request], Awaitable[None]]


def create_http_client(
    config: ClientConfig,
    request_hooks: Optional[List[RequestHook]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout_manager: Optional[TimeoutManager] = None,
) -> httpx.AsyncClient:
    """
    Crée le client HTTP asynchrone.

    Les hooks "request" sont exécutés sur chaque requête sortante avant envoi
    (c'est là que s'installe l'intercepteur d'authentification).

    Args:
        config: Configuration client
        request_hooks: Hooks httpx exécutés avant chaque requête
        transport: Transport alternatif (httpx.MockTransport en tests)
        timeout_manager: Timeouts (défaut: dérivés de config.request_timeout)

    Returns:
        httpx.AsyncClient à fermer via aclose()
    """
    timeouts = timeout_manager or TimeoutManager.from_request_timeout(config.request_timeout)

    return httpx.AsyncClient(
        timeout=timeouts.to_httpx(),
        headers={"Accept": "application/json"},
        event_hooks={"request": list(request_hooks or [])},
        transport=transport,
    )
