"""
LOT 4: Auth Gateway

Échange réseau login/logout/register avec l'endpoint d'authentification.

Classification des erreurs (une seule fois, ici):
    - Enveloppe structurée success=false → message serveur tel quel
    - Erreur transport, corps illisible ou hors enveloppe → message générique
Aucun retry: un échec est remonté à l'appelant qui décide de relancer.
"""

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from ..core.interfaces import ClientConfig
from ..logging import StructuredLogger
from .interfaces import (
    GENERIC_ERROR_MESSAGE,
    ApiEnvelope,
    AuthResult,
    AuthTokens,
    IAuthGateway,
)


class AuthGateway(IAuthGateway):
    """
    Passerelle vers {api_url}/auth.

    Le client HTTP est injecté: c'est lui qui porte l'intercepteur,
    donc logout part avec le bearer alors que login/register sont exclus.

    Example:
        gateway = AuthGateway(client, config)
        result = await gateway.login("alice@example.com", "secret")
        if result.success:
            store.set_token(result.tokens.access_token)
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: ClientConfig,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            client: Client HTTP asynchrone (fermé par son propriétaire)
            config: Configuration client (api_url)
            logger: Logger structuré
        """
        self._client = client
        self._config = config
        self._logger = logger or StructuredLogger("tasksession.auth.gateway")

    @property
    def login_url(self) -> str:
        return f"{self._config.auth_url}/login"

    @property
    def logout_url(self) -> str:
        return f"{self._config.auth_url}/logout"

    @property
    def register_url(self) -> str:
        return f"{self._config.auth_url}/register"

    async def login(self, email: str, password: str) -> AuthResult:
        """
        POST /auth/login.

        Returns:
            AuthResult avec AuthTokens en data si succès
        """
        self._logger.info("Login request", email=email)

        result = await self._exchange(
            "POST", self.login_url, payload={"email": email, "password": password}
        )
        if not result.success:
            self._logger.warn("Login rejected", email=email, status_code=result.status_code)
            return result

        tokens = self._extract_tokens(result.data)
        if tokens is None:
            self._logger.error("Login response without access token", email=email)
            return AuthResult(
                success=False,
                message=GENERIC_ERROR_MESSAGE,
                status_code=result.status_code,
            )

        self._logger.info("Login succeeded", email=email)
        return AuthResult(
            success=True,
            message=result.message,
            data=tokens,
            status_code=result.status_code,
        )

    async def logout(self) -> AuthResult:
        """GET /auth/logout. Ne touche pas au stockage de session."""
        result = await self._exchange("GET", self.logout_url)
        if result.success:
            self._logger.info("Logout acknowledged")
        else:
            self._logger.warn("Logout failed", status_code=result.status_code)
        return result

    async def register(self, email: str, password: str, **profile: Any) -> AuthResult:
        """
        POST /auth/register.

        Args:
            email: Email
            password: Mot de passe
            **profile: Champs utilisateur supplémentaires (name...)

        Returns:
            AuthResult avec l'utilisateur créé (dict brut) en data
        """
        self._logger.info("Registration request", email=email)
        payload: Dict[str, Any] = dict(profile)
        payload.update({"email": email, "password": password})
        return await self._exchange("POST", self.register_url, payload=payload)

    async def _exchange(
        self,
        method: str,
        url: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> AuthResult:
        """Un aller-retour HTTP, classifié en AuthResult."""
        try:
            response = await self._client.request(method, url, json=payload)
        except httpx.HTTPError as e:
            self._logger.error(
                "Auth endpoint unreachable",
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )
            return AuthResult(success=False, message=GENERIC_ERROR_MESSAGE)

        envelope = self._parse_envelope(response)
        if envelope is None:
            self._logger.error(
                "Unstructured auth response",
                url=url,
                status_code=response.status_code,
            )
            return AuthResult(
                success=False,
                message=GENERIC_ERROR_MESSAGE,
                status_code=response.status_code,
            )

        status_code = envelope.status_code or response.status_code
        message = envelope.message or ""

        if not envelope.success:
            return AuthResult(
                success=False,
                message=message or GENERIC_ERROR_MESSAGE,
                data=envelope.data,
                status_code=status_code,
            )

        return AuthResult(
            success=True,
            message=message,
            data=envelope.data,
            status_code=status_code,
        )

    def _parse_envelope(self, response: httpx.Response) -> Optional[ApiEnvelope]:
        try:
            body = response.json()
        except ValueError:
            return None

        if not isinstance(body, dict):
            return None

        try:
            return ApiEnvelope.model_validate(body)
        except ValidationError:
            return None

    def _extract_tokens(self, data: Any) -> Optional[AuthTokens]:
        if not isinstance(data, dict):
            return None

        access_token = data.get("access_token")
        if not access_token or not isinstance(access_token, str):
            return None

        refresh_token = data.get("refresh_token")
        return AuthTokens(
            access_token=access_token,
            refresh_token=refresh_token if isinstance(refresh_token, str) else None,
        )
