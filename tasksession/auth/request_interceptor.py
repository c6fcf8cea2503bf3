"""
LOT 4: Request Auth Interceptor

Hook httpx exécuté sur chaque requête sortante: ajoute
`Authorization: Bearer <token>` quand c'est permis.
"""

from typing import Iterable, Optional, Tuple, Union

import httpx

from ..core.interfaces import ClientConfig
from .interfaces import IRequestInterceptor, ISessionStore


class RequestAuthInterceptor(IRequestInterceptor):
    """
    Injection du bearer sur les requêtes sortantes.

    Ordre de décision:
        1. URL commençant par un préfixe exclu → inchangée
        2. Hôte hors allowed_domains → inchangée (URL relative = autorisée)
        3. Token présent → header ajouté, sinon inchangée

    Note:
        Aucune vérification d'expiration: un token expiré mais présent
        est envoyé. C'est à l'appelant de vérifier is_expired().

    Example:
        interceptor = RequestAuthInterceptor.from_config(store, config)
        client = httpx.AsyncClient(event_hooks={"request": [interceptor]})
    """

    HEADER_NAME = "Authorization"
    AUTH_SCHEME = "Bearer"

    def __init__(
        self,
        store: ISessionStore,
        excluded_routes: Iterable[str] = (),
        allowed_domains: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            store: Stockage du token, relu à chaque requête
            excluded_routes: Préfixes d'URL exclus (figés à la construction)
            allowed_domains: host[:port] autorisés, None = tous
        """
        self._store = store
        self._excluded: Tuple[str, ...] = tuple(
            self._normalize_prefix(r) for r in excluded_routes if r
        )
        self._allowed: Optional[Tuple[str, ...]] = (
            tuple(d.lower() for d in allowed_domains) if allowed_domains is not None else None
        )

    @staticmethod
    def _normalize_prefix(prefix: str) -> str:
        # Forme normalisée par httpx (hôte en minuscules), comme l'URL envoyée
        if prefix.startswith("/"):
            return prefix
        return str(httpx.URL(prefix))

    @classmethod
    def from_config(cls, store: ISessionStore, config: ClientConfig) -> "RequestAuthInterceptor":
        return cls(
            store,
            excluded_routes=config.excluded_routes,
            allowed_domains=config.allowed_domains,
        )

    @property
    def excluded_routes(self) -> Tuple[str, ...]:
        return self._excluded

    def is_excluded(self, url: Union[httpx.URL, str]) -> bool:
        parsed = httpx.URL(str(url))
        target = str(parsed)
        path = parsed.path
        for prefix in self._excluded:
            if target.startswith(prefix):
                return True
            # Préfixe relatif ("/auth/login"): comparé au chemin de l'URL
            if prefix.startswith("/") and path.startswith(prefix):
                return True
        return False

    def is_allowed_domain(self, url: Union[httpx.URL, str]) -> bool:
        if self._allowed is None:
            return True

        parsed = httpx.URL(str(url))
        if not parsed.host:
            return True

        host = parsed.host.lower()
        # host:port exact si port explicite, sinon host seul
        candidate = host if parsed.port is None else f"{host}:{parsed.port}"

        return candidate in self._allowed

    def should_attach(self, url: Union[httpx.URL, str]) -> bool:
        """True si l'URL peut recevoir le bearer (indépendamment du token)."""
        return not self.is_excluded(url) and self.is_allowed_domain(url)

    def apply(self, request: httpx.Request) -> httpx.Request:
        """Version synchrone: modifie et retourne la requête."""
        if not self.should_attach(request.url):
            return request

        token = self._store.get_token()
        if token:
            request.headers[self.HEADER_NAME] = f"{self.AUTH_SCHEME} {token}"
        return request

    async def __call__(self, request: httpx.Request) -> None:
        self.apply(request)
