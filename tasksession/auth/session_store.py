"""
LOT 4: Session Store Implementation

Stockage du token d'accès dans un espace limité à la session courante.
"""

from collections.abc import MutableMapping
from typing import Dict, Iterator, Optional

from .interfaces import ISessionStore


class SessionStorage(MutableMapping):
    """
    Stockage clé/valeur limité à la durée de vie de la session.

    Équivalent client du sessionStorage navigateur: rien n'est persisté
    au-delà du processus. Les valeurs sont des chaînes.
    """

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)


class SessionStore(ISessionStore):
    """
    Porteur du token d'accès, indexé par le nom de token configuré.

    Note:
        Aucune validation de forme ici, ni verrou: l'accès est mono-thread
        (boucle asyncio unique).

    Example:
        store = SessionStore(SessionStorage(), token_name="access_token")
        store.set_token(token)
        store.get_token()
    """

    def __init__(self, storage: MutableMapping, token_name: str = "access_token"):
        """
        Args:
            storage: Stockage de session (SessionStorage ou tout MutableMapping)
            token_name: Clé de stockage (ClientConfig.token_name)
        """
        if not token_name:
            raise ValueError("token_name est obligatoire")
        self._storage = storage
        self._token_name = token_name

    @property
    def token_name(self) -> str:
        return self._token_name

    @property
    def storage(self) -> MutableMapping:
        return self._storage

    def get_token(self) -> Optional[str]:
        return self._storage.get(self._token_name)

    def set_token(self, token: str) -> None:
        self._storage[self._token_name] = token

    def remove_token(self) -> None:
        self._storage.pop(self._token_name, None)

    def clear(self) -> None:
        """Vide tout le stockage de session (pas seulement le token)."""
        self._storage.clear()
