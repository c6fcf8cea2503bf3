"""
LOT 4: Token Codec

Décodage et inspection d'un token compact (header.payload.signature)
sans vérification de signature: le client ne détient pas la clé, il lit
seulement les claims pour l'affichage et l'expiration.

Règles:
    - Aucune exception ne sort du codec: token illisible → None / "" / expiré
    - Aucun cache: chaque appel redécode la chaîne brute
"""

import binascii
import json
import math
import re
from datetime import datetime, timezone
from typing import Callable, Optional

from jwt.utils import base64url_decode

from .interfaces import ClaimLookup, ClaimStatus, Claims, ITokenCodec


_SEGMENT_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec(ITokenCodec):
    """
    Lecture des claims d'un token compact.

    Example:
        codec = TokenCodec()
        codec.decode(token)             # Claims ou None
        codec.is_expired(token)         # True si illisible / sans exp / expiré
        codec.get_claim(token, "username")
    """

    SEGMENT_COUNT = 3

    def __init__(self, clock: Optional[Clock] = None):
        """
        Args:
            clock: Source de l'heure courante (défaut: UTC système)
        """
        self._clock = clock or _utcnow

    def decode(self, token: Optional[str]) -> Optional[Claims]:
        """
        Décode le payload.

        Returns:
            Claims, ou None si token vide, nombre de segments != 3,
            segment non base64url, ou payload qui n'est pas un objet JSON
        """
        if not token or not isinstance(token, str):
            return None

        segments = token.split(".")
        if len(segments) != self.SEGMENT_COUNT:
            return None

        try:
            for segment in segments:
                if not _SEGMENT_RE.fullmatch(segment):
                    return None
                base64url_decode(segment)

            payload = json.loads(base64url_decode(segments[1]).decode("utf-8"))
        except (binascii.Error, ValueError, TypeError, RecursionError):
            return None

        if not isinstance(payload, dict):
            return None

        return Claims(payload)

    def lookup(self, token: Optional[str], field: str) -> ClaimLookup:
        """Lecture tri-état d'un claim."""
        claims = self.decode(token)
        if claims is None:
            return ClaimLookup(ClaimStatus.UNDECODABLE)
        return claims.lookup(field)

    def get_claim(self, token: Optional[str], field: str) -> Optional[str]:
        """
        Returns:
            None si token illisible ("on ne sait pas"),
            "" si token lisible sans ce champ ("connu, absent"),
            sinon la valeur du claim
        """
        return self.lookup(token, field).as_string()

    def get_username(self, token: Optional[str]) -> str:
        """Claim `username`, ou "" quelle que soit la raison de son absence."""
        return self.get_claim(token, "username") or ""

    def _exp_timestamp(self, token: Optional[str]) -> Optional[float]:
        lookup = self.lookup(token, "exp")
        if not lookup.is_present:
            return None

        exp = lookup.value
        # bool est un int en Python, NaN/Infinity sont acceptés par json
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            return None
        try:
            exp = float(exp)
        except OverflowError:
            return None
        if not math.isfinite(exp):
            return None
        return exp

    def get_expiration(self, token: Optional[str]) -> Optional[datetime]:
        """Date d'expiration UTC, None si absente ou invalide."""
        exp = self._exp_timestamp(token)
        if exp is None:
            return None

        try:
            return datetime.fromtimestamp(exp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    def is_expired(self, token: Optional[str], now: Optional[datetime] = None) -> bool:
        """
        Recalculé à chaque appel.

        Args:
            token: Token brut
            now: Instant de référence (défaut: horloge du codec)

        Returns:
            True si illisible, sans exp numérique, ou exp <= now
        """
        exp = self._exp_timestamp(token)
        if exp is None:
            return True

        reference = now or self._clock()
        if reference.tzinfo is None:
            reference = reference.replace(tzinfo=timezone.utc)

        return exp <= reference.timestamp()
