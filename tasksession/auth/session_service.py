"""
LOT 4: Session Service

Façade exposée au reste de l'application: état de session, login, logout,
lecture des claims.

Cycle de vie:
    - Créée une seule fois au démarrage (create_session_service) puis passée
      par injection à chaque consommateur
    - Détruite à l'arrêt (aclose / sortie du context manager)
    - Le token n'est effacé que par logout acquitté ou remove_token explicite
"""

import inspect
from collections.abc import MutableMapping
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from ..core.interfaces import ClientConfig
from ..logging import StructuredLogger
from ..network import create_http_client
from .auth_gateway import AuthGateway
from .interfaces import AuthResult, ClaimLookup, IAuthGateway
from .request_interceptor import RequestAuthInterceptor
from .session_store import SessionStorage, SessionStore
from .token_codec import Clock, TokenCodec


Callback = Callable[..., Union[None, Awaitable[None]]]


async def notify_callback(callback: Optional[Callback], *args: Any) -> None:
    if callback is None:
        return
    outcome = callback(*args)
    if inspect.isawaitable(outcome):
        await outcome


class SessionService:
    """
    Façade de session.

    États observables:
        LoggedOut --login ok--> LoggedIn (is_expired False)
        LoggedIn --exp dépassé--> LoggedIn (is_expired True, pas de transition auto)
        LoggedIn --logout acquitté--> LoggedOut

    Example:
        async with create_session_service(config) as session:
            await session.login(email, password, on_success=go_home, on_failure=show_error)
            session.is_authenticated()
            session.get_claim("username")
    """

    def __init__(
        self,
        store: SessionStore,
        gateway: IAuthGateway,
        codec: Optional[TokenCodec] = None,
        logger: Optional[StructuredLogger] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            store: Stockage du token
            gateway: Passerelle d'authentification
            codec: Décodeur de token (défaut: TokenCodec())
            logger: Logger structuré
            client: Client HTTP possédé par le service (fermé par aclose)
        """
        self._store = store
        self._gateway = gateway
        self._codec = codec or TokenCodec()
        self._logger = logger or StructuredLogger("tasksession.auth.session")
        self._client = client

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def gateway(self) -> IAuthGateway:
        return self._gateway

    @property
    def codec(self) -> TokenCodec:
        return self._codec

    @property
    def http_client(self) -> Optional[httpx.AsyncClient]:
        """Client HTTP partagé, intercepteur installé."""
        return self._client

    # ──────────────────────────────────────────────────────────────────────
    # État de session
    # ──────────────────────────────────────────────────────────────────────

    def is_authenticated(self) -> bool:
        """
        Présence d'un token uniquement.

        Un token expiré compte comme authentifié: utiliser is_expired()
        pour tout comportement sensible à l'expiration.
        """
        return self._store.get_token() is not None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self._codec.is_expired(self._store.get_token(), now=now)

    def get_claim(self, field: str) -> Optional[str]:
        """None = pas de session lisible, "" = session sans ce champ."""
        return self._codec.get_claim(self._store.get_token(), field)

    def lookup_claim(self, field: str) -> ClaimLookup:
        return self._codec.lookup(self._store.get_token(), field)

    def get_username(self) -> str:
        return self._codec.get_username(self._store.get_token())

    def get_expiration(self) -> Optional[datetime]:
        return self._codec.get_expiration(self._store.get_token())

    # ──────────────────────────────────────────────────────────────────────
    # Échanges serveur
    # ──────────────────────────────────────────────────────────────────────

    async def login(
        self,
        email: str,
        password: str,
        on_success: Optional[Callback] = None,
        on_failure: Optional[Callback] = None,
    ) -> AuthResult:
        """
        Login via la passerelle.

        Le token n'est écrit qu'après la réponse serveur, puis on_success(result)
        est appelé. En cas d'échec, on_failure(message) est appelé et le token
        précédent (s'il existe) n'est pas touché.

        Args:
            email: Email
            password: Mot de passe
            on_success: Callback succès (sync ou async), reçoit l'AuthResult
            on_failure: Callback échec (sync ou async), reçoit le message

        Returns:
            AuthResult de la passerelle
        """
        result = await self._gateway.login(email, password)

        if result.success and result.tokens is not None:
            self._store.set_token(result.tokens.access_token)
            self._logger.info("Session opened", email=email)
            await notify_callback(on_success, result)
        else:
            await notify_callback(on_failure, result.message)

        return result

    async def logout(self, on_logged_out: Optional[Callback] = None) -> AuthResult:
        """
        Logout via la passerelle.

        Le stockage de session n'est vidé (puis on_logged_out appelé) que si
        le serveur acquitte. Un échec réseau laisse le token en place.
        """
        result = await self._gateway.logout()

        if result.success:
            self._store.clear()
            self._logger.info("Session closed")
            await notify_callback(on_logged_out)
        else:
            self._logger.warn("Session kept after failed logout")

        return result

    def remove_token(self) -> None:
        """Efface le token localement, sans appel serveur."""
        self._store.remove_token()

    # ──────────────────────────────────────────────────────────────────────
    # Cycle de vie
    # ──────────────────────────────────────────────────────────────────────

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "SessionService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def create_session_service(
    config: ClientConfig,
    storage: Optional[MutableMapping] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    logger: Optional[StructuredLogger] = None,
    clock: Optional[Clock] = None,
) -> SessionService:
    """
    Racine de composition: construit store, intercepteur, client HTTP,
    passerelle et façade à partir de la configuration.

    Args:
        config: Configuration résolue au démarrage
        storage: Stockage de session (défaut: SessionStorage vide)
        transport: Transport httpx (MockTransport en tests)
        logger: Logger racine
        clock: Horloge du codec

    Returns:
        SessionService propriétaire du client HTTP
    """
    root_logger = logger or StructuredLogger("tasksession")

    store = SessionStore(
        storage if storage is not None else SessionStorage(),
        token_name=config.token_name,
    )
    interceptor = RequestAuthInterceptor.from_config(store, config)
    client = create_http_client(config, request_hooks=[interceptor], transport=transport)
    gateway = AuthGateway(client, config, logger=root_logger.child("gateway"))

    return SessionService(
        store,
        gateway,
        codec=TokenCodec(clock=clock),
        logger=root_logger.child("session"),
        client=client,
    )
