"""
TASKSESSION - LOT 1 Core Interfaces
Contrats et types de configuration du client.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_API_URL = "http://localhost:8080/rest/api/v1"
DEFAULT_TOKEN_NAME = "access_token"
DEFAULT_DOMAINS = ["localhost:8080"]


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


class ClientConfig(BaseModel):
    """
    Configuration du client, résolue une seule fois au démarrage.

    Attributes:
        api_url: URL de base de l'API (endpoints /auth/*)
        token_name: Clé de stockage du token en session
        allowed_domains: Hôtes (host[:port]) autorisés à recevoir le header
        production: Mode production
        excluded_routes: Préfixes d'URL jamais augmentés (login, register)
        request_timeout: Timeout requête en secondes
    """

    model_config = ConfigDict(frozen=True)

    api_url: str = DEFAULT_API_URL
    token_name: str = DEFAULT_TOKEN_NAME
    allowed_domains: tuple[str, ...] = tuple(DEFAULT_DOMAINS)
    production: bool = False
    excluded_routes: tuple[str, ...] = ()
    request_timeout: float = Field(default=30.0, gt=0, le=60.0)

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("api_url ne peut pas être vide")
        return value

    @field_validator("token_name")
    @classmethod
    def _token_name_not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("token_name ne peut pas être vide")
        return value.strip()

    @model_validator(mode="before")
    @classmethod
    def _default_exclusions(cls, data: Any) -> Any:
        # Défaut login/register si non fourni; une liste vide explicite est conservée
        if isinstance(data, dict) and data.get("excluded_routes") is None:
            api_url = str(data.get("api_url") or DEFAULT_API_URL).strip().rstrip("/")
            data = dict(data)
            data["excluded_routes"] = (
                f"{api_url}/auth/login",
                f"{api_url}/auth/register",
            )
        return data

    @property
    def auth_url(self) -> str:
        """URL de base des endpoints d'authentification."""
        return f"{self.api_url}/auth"


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class IConfigLoader(ABC):
    """Charge la configuration client depuis fichier et environnement."""

    @abstractmethod
    def load(self, path: Optional[str] = None) -> ClientConfig:
        """
        Charge la configuration.

        Raises:
            ConfigIntegrityError: Si fichier illisible ou valeurs invalides
        """
        pass
