"""
LOT 1: Core

Configuration client résolue au démarrage.
"""

from .interfaces import IConfigLoader, ClientConfig, DEFAULT_API_URL, DEFAULT_TOKEN_NAME
from .config_loader import ConfigLoader, ConfigIntegrityError

__all__ = [
    # Interfaces
    "IConfigLoader",
    # Data classes
    "ClientConfig",
    # Constants
    "DEFAULT_API_URL",
    "DEFAULT_TOKEN_NAME",
    # Implementations
    "ConfigLoader",
    # Exceptions
    "ConfigIntegrityError",
]
