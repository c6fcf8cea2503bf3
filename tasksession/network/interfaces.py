"""
LOT 3: Network - Interfaces

Types pour les timeouts du client HTTP de session.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TimeoutType(Enum):
    """Types de timeout supportés."""

    CONNECTION = "connection"
    REQUEST = "request"
    READ = "read"
    WRITE = "write"


@dataclass
class TimeoutConfig:
    """
    Configuration des timeouts.

    read_timeout / write_timeout à None = request_timeout.
    """

    connection_timeout: float = 10.0
    request_timeout: float = 30.0
    read_timeout: Optional[float] = None
    write_timeout: Optional[float] = None


class ITimeoutManager(ABC):
    """Interface gestion des timeouts."""

    @abstractmethod
    def get_timeout(self, timeout_type: TimeoutType) -> float:
        """Retourne le timeout configuré en secondes."""
        pass

    @abstractmethod
    def validate_timeout(self, timeout_type: TimeoutType, value: float) -> bool:
        """True si la valeur respecte les limites."""
        pass
