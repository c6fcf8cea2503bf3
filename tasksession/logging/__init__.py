"""
LOT 2: Logging

Logging structuré JSON pour le client de session:
- Champs obligatoires: timestamp, level, correlation_id, message
- Timestamp ISO 8601 UTC
- Credentials et tokens masqués
"""

from .interfaces import (
    # Enums
    LogLevel,
    # Dataclasses
    LogEntry,
    LogConfig,
    # Interfaces
    IStructuredLogger,
    ISensitiveMasker,
)
from .sensitive_masker import SensitiveMasker
from .structured_logger import StructuredLogger, MissingRequiredFieldError

__all__ = [
    "LogLevel",
    "LogEntry",
    "LogConfig",
    "IStructuredLogger",
    "ISensitiveMasker",
    "SensitiveMasker",
    "StructuredLogger",
    "MissingRequiredFieldError",
]
