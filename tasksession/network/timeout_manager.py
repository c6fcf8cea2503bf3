"""
LOT 3: Network - Timeout Manager

Validation des timeouts et conversion vers httpx.Timeout.
"""

from typing import Optional

import httpx

from .interfaces import ITimeoutManager, TimeoutConfig, TimeoutType


class InvalidTimeoutError(Exception):
    """Configuration timeout invalide."""

    pass


class TimeoutManager(ITimeoutManager):
    """
    Timeouts du client HTTP.

    Un appel login/logout qui dépasse ces limites échoue (pas de retry)
    et l'échec est remonté comme erreur réseau.

    Example:
        manager = TimeoutManager(TimeoutConfig(request_timeout=15.0))
        client = httpx.AsyncClient(timeout=manager.to_httpx())
    """

    MAX_CONNECTION_TIMEOUT: float = 10.0
    MAX_REQUEST_TIMEOUT: float = 60.0

    def __init__(self, default_config: Optional[TimeoutConfig] = None) -> None:
        """
        Args:
            default_config: Configuration (défaut: 10s connexion, 30s requête)

        Raises:
            InvalidTimeoutError: Si configuration invalide
        """
        self._default = default_config or TimeoutConfig()
        self._validate_config(self._default)

    @classmethod
    def from_request_timeout(cls, request_timeout: float) -> "TimeoutManager":
        """Construit depuis ClientConfig.request_timeout."""
        connection = min(cls.MAX_CONNECTION_TIMEOUT, request_timeout)
        return cls(TimeoutConfig(connection_timeout=connection, request_timeout=request_timeout))

    def _validate_config(self, config: TimeoutConfig) -> None:
        checks = (
            ("connection_timeout", TimeoutType.CONNECTION, config.connection_timeout),
            ("request_timeout", TimeoutType.REQUEST, config.request_timeout),
            ("read_timeout", TimeoutType.READ, config.read_timeout),
            ("write_timeout", TimeoutType.WRITE, config.write_timeout),
        )
        for name, timeout_type, value in checks:
            if value is None:
                continue
            if value <= 0:
                raise InvalidTimeoutError(f"{name} must be positive")
            if not self.validate_timeout(timeout_type, value):
                raise InvalidTimeoutError(
                    f"{name} ({value}s) exceeds maximum ({self._maximum(timeout_type)}s)"
                )

    def _maximum(self, timeout_type: TimeoutType) -> float:
        if timeout_type == TimeoutType.CONNECTION:
            return self.MAX_CONNECTION_TIMEOUT
        return self.MAX_REQUEST_TIMEOUT

    def get_timeout(self, timeout_type: TimeoutType) -> float:
        """
        Args:
            timeout_type: Type de timeout demandé

        Returns:
            Valeur en secondes
        """
        config = self._default
        if timeout_type == TimeoutType.CONNECTION:
            return config.connection_timeout
        elif timeout_type == TimeoutType.REQUEST:
            return config.request_timeout
        elif timeout_type == TimeoutType.READ:
            return config.read_timeout or config.request_timeout
        elif timeout_type == TimeoutType.WRITE:
            return config.write_timeout or config.request_timeout
        else:
            raise ValueError(f"Unknown timeout type: {timeout_type}")

    def validate_timeout(self, timeout_type: TimeoutType, value: float) -> bool:
        """True si 0 < value <= maximum du type (utilisé par _validate_config)."""
        return 0 < value <= self._maximum(timeout_type)

    def to_httpx(self) -> httpx.Timeout:
        """Convertit en httpx.Timeout (pool = request_timeout)."""
        return httpx.Timeout(
            self.get_timeout(TimeoutType.REQUEST),
            connect=self.get_timeout(TimeoutType.CONNECTION),
            read=self.get_timeout(TimeoutType.READ),
            write=self.get_timeout(TimeoutType.WRITE),
        )
