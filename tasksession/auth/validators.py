"""
LOT 4: Login Input Validation

Contrôles avant soumission: une saisie invalide n'atteint jamais la passerelle.
"""

import re
from typing import Optional


MIN_PASSWORD_LENGTH = 6

MSG_REQUIRED_FIELDS = "Please fill in all required fields."
MSG_INVALID_EMAIL = "Email must be a valid format."
MSG_PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."

# local@domain, sans espace, un seul @
_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+")


class LoginValidationError(ValueError):
    """Saisie refusée avant tout appel réseau."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Returns:
        Message d'erreur ou None si valide
    """
    if not email or not email.strip():
        return MSG_REQUIRED_FIELDS
    if not _EMAIL_RE.fullmatch(email.strip()):
        return MSG_INVALID_EMAIL
    return None


def validate_password(password: Optional[str]) -> Optional[str]:
    if not password:
        return MSG_REQUIRED_FIELDS
    if len(password) < MIN_PASSWORD_LENGTH:
        return MSG_PASSWORD_TOO_SHORT
    return None


def validate_login_input(email: Optional[str], password: Optional[str]) -> None:
    """
    Raises:
        LoginValidationError: Premier contrôle en échec (champs vides d'abord)
    """
    if not email or not password:
        raise LoginValidationError(MSG_REQUIRED_FIELDS, field="email" if not email else "password")

    error = validate_email(email)
    if error:
        raise LoginValidationError(error, field="email")

    error = validate_password(password)
    if error:
        raise LoginValidationError(error, field="password")
