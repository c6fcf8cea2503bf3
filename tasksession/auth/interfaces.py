"""
LOT 4: Interfaces Auth

Contrats du sous-système de session côté client:
stockage du token, décodage, échange login/logout, injection du bearer.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field


GENERIC_ERROR_MESSAGE = "Unable to reach the authentication service. Please try again later."


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


class ClaimStatus(Enum):
    """État d'une lecture de claim."""

    PRESENT = "present"
    ABSENT = "absent"  # Token décodable, champ manquant
    UNDECODABLE = "undecodable"  # Pas de token ou token illisible


@dataclass(frozen=True)
class ClaimLookup:
    """
    Résultat tri-état d'une lecture de claim.

    Attributes:
        status: PRESENT / ABSENT / UNDECODABLE
        value: Valeur brute si PRESENT, None sinon
    """

    status: ClaimStatus
    value: Any = None

    @property
    def is_present(self) -> bool:
        return self.status is ClaimStatus.PRESENT

    @property
    def is_decodable(self) -> bool:
        return self.status is not ClaimStatus.UNDECODABLE

    def as_string(self) -> Optional[str]:
        """
        Projection texte.

        Returns:
            None si UNDECODABLE, "" si ABSENT, sinon la valeur
            (chaînes telles quelles, autres valeurs JSON compactes)
        """
        if self.status is ClaimStatus.UNDECODABLE:
            return None
        if self.status is ClaimStatus.ABSENT:
            return ""
        if isinstance(self.value, str):
            return self.value
        return json.dumps(self.value, separators=(",", ":"), ensure_ascii=False)


class Claims(Mapping):
    """
    Payload décodé d'un token compact (lecture seule).

    Aucun schéma imposé hormis `exp` (epoch secondes) optionnel.
    """

    def __init__(self, payload: Dict[str, Any]):
        self._payload = dict(payload)

    def __getitem__(self, key: str) -> Any:
        return self._payload[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._payload)

    def __len__(self) -> int:
        return len(self._payload)

    def __repr__(self) -> str:
        return f"Claims({self._payload!r})"

    def lookup(self, field: str) -> ClaimLookup:
        """Lecture typée d'un champ (PRESENT ou ABSENT)."""
        if field in self._payload:
            return ClaimLookup(ClaimStatus.PRESENT, self._payload[field])
        return ClaimLookup(ClaimStatus.ABSENT)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._payload)


@dataclass(frozen=True)
class AuthTokens:
    """Tokens émis par le serveur au login."""

    access_token: str
    refresh_token: Optional[str] = None


@dataclass(frozen=True)
class AuthResult:
    """
    Résultat normalisé d'un échange avec l'endpoint d'authentification.

    Attributes:
        success: True si le serveur a acquitté
        message: Message serveur (échec structuré) ou message générique (échec réseau)
        data: Tokens (login) ou données brutes (register)
        status_code: Code HTTP si une réponse a été reçue
    """

    success: bool
    message: str
    data: Any = None
    status_code: Optional[int] = None

    @property
    def tokens(self) -> Optional[AuthTokens]:
        return self.data if isinstance(self.data, AuthTokens) else None


class ApiEnvelope(BaseModel):
    """Enveloppe de réponse standard du backend."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool
    message: Optional[str] = None
    data: Any = None
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    timestamp: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class ISessionStore(ABC):
    """Porteur du token d'accès courant (aucune validation de forme)."""

    @abstractmethod
    def get_token(self) -> Optional[str]:
        pass

    @abstractmethod
    def set_token(self, token: str) -> None:
        pass

    @abstractmethod
    def remove_token(self) -> None:
        pass


class ITokenCodec(ABC):
    """
    Décodage pur d'un token compact.

    Aucune méthode ne lève d'exception sur un token malformé.
    """

    @abstractmethod
    def decode(self, token: Optional[str]) -> Optional[Claims]:
        """Claims ou None si token absent/illisible."""
        pass

    @abstractmethod
    def is_expired(self, token: Optional[str], now: Optional[datetime] = None) -> bool:
        """True si illisible, sans exp, ou exp <= now."""
        pass

    @abstractmethod
    def get_claim(self, token: Optional[str], field: str) -> Optional[str]:
        """None si illisible, "" si champ absent, sinon la valeur."""
        pass


class IAuthGateway(ABC):
    """Échange réseau avec l'endpoint d'authentification."""

    @abstractmethod
    async def login(self, email: str, password: str) -> AuthResult:
        pass

    @abstractmethod
    async def logout(self) -> AuthResult:
        pass


class IRequestInterceptor(ABC):
    """Hook exécuté sur chaque requête sortante."""

    @abstractmethod
    def should_attach(self, url: httpx.URL) -> bool:
        pass

    @abstractmethod
    async def __call__(self, request: httpx.Request) -> None:
        pass
