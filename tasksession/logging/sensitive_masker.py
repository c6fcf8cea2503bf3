"""
LOT 2: Logging - Sensitive Masker

Masquage des credentials et tokens avant écriture des logs.
"""

import re
from typing import Any, Dict, List, Optional

from .interfaces import ISensitiveMasker


class SensitiveMasker(ISensitiveMasker):
    """
    Masquage récursif des données sensibles.

    Deux niveaux:
        - Clé sensible (password, access_token...) → valeur entière masquée
        - Valeur texte libre → bearer et tokens compacts remplacés

    Example:
        masker = SensitiveMasker()
        safe = masker.mask({"email": "a@b.com", "password": "secret"})
        # {"email": "a@b.com", "password": "***MASKED***"}
    """

    # Bearer <token> dans un message ou un header
    _BEARER_RE = re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._~+/=-]+")
    # Token compact trois segments (header.payload.signature)
    _COMPACT_TOKEN_RE = re.compile(r"\b[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]*")

    def __init__(self, additional_patterns: Optional[List[str]] = None) -> None:
        """
        Args:
            additional_patterns: Patterns de clés supplémentaires à masquer
        """
        self._patterns: List[str] = [p.lower() for p in self.SENSITIVE_PATTERNS]
        for pattern in additional_patterns or []:
            self.add_pattern(pattern)

    @property
    def patterns(self) -> List[str]:
        """Patterns sensibles configurés."""
        return list(self._patterns)

    def mask(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Masque récursivement un dictionnaire.

        Args:
            data: Dictionnaire à masquer

        Returns:
            Copie avec données sensibles masquées
        """
        if not isinstance(data, dict):
            return data

        result: Dict[str, Any] = {}
        for key, value in data.items():
            if self.is_sensitive_key(str(key)):
                result[key] = self.MASK_VALUE
            else:
                result[key] = self._mask_value(value)
        return result

    def _mask_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.mask(value)
        if isinstance(value, (list, tuple)):
            return [self._mask_value(item) for item in value]
        if isinstance(value, str):
            return self.mask_string(value)
        return value

    def mask_string(self, value: str) -> str:
        """
        Remplace bearer et tokens compacts dans une chaîne.

        Args:
            value: Texte libre (message d'erreur, URL...)

        Returns:
            Texte sans token en clair
        """
        if not value:
            return value
        masked = self._BEARER_RE.sub(f"Bearer {self.MASK_VALUE}", value)
        return self._COMPACT_TOKEN_RE.sub(self.MASK_VALUE, masked)

    def is_sensitive_key(self, key: str) -> bool:
        """
        Vérification case-insensitive.

        Args:
            key: Nom de la clé

        Returns:
            True si la clé contient un pattern sensible
        """
        if not key:
            return False

        key_lower = key.lower()
        return any(pattern in key_lower for pattern in self._patterns)

    def add_pattern(self, pattern: str) -> None:
        """
        Ajoute un pattern de clé sensible.

        Raises:
            ValueError: Si pattern vide
        """
        if not pattern or not pattern.strip():
            raise ValueError("Pattern cannot be empty")

        pattern_lower = pattern.lower().strip()
        if pattern_lower not in self._patterns:
            self._patterns.append(pattern_lower)
