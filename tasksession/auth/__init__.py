"""
LOT 4: Authentication & Session

Sous-système de session côté client:
- Stockage du token pour la durée de la session
- Décodage des claims et expiration (sans exception sur token malformé)
- Login / logout / register avec l'endpoint d'authentification
- Injection du bearer sur les requêtes sortantes, avec exclusions
"""

from .interfaces import (
    IAuthGateway,
    IRequestInterceptor,
    ISessionStore,
    ITokenCodec,
    ApiEnvelope,
    AuthResult,
    AuthTokens,
    ClaimLookup,
    ClaimStatus,
    Claims,
    GENERIC_ERROR_MESSAGE,
)
from .session_store import SessionStorage, SessionStore
from .token_codec import TokenCodec
from .auth_gateway import AuthGateway
from .request_interceptor import RequestAuthInterceptor
from .session_service import SessionService, create_session_service
from .validators import (
    LoginValidationError,
    validate_email,
    validate_password,
    validate_login_input,
)
from .login_flow import LoginFlow

__all__ = [
    # Interfaces
    "IAuthGateway",
    "IRequestInterceptor",
    "ISessionStore",
    "ITokenCodec",
    # Data classes
    "ApiEnvelope",
    "AuthResult",
    "AuthTokens",
    "ClaimLookup",
    "ClaimStatus",
    "Claims",
    "GENERIC_ERROR_MESSAGE",
    # Implementations
    "SessionStorage",
    "SessionStore",
    "TokenCodec",
    "AuthGateway",
    "RequestAuthInterceptor",
    "SessionService",
    "create_session_service",
    "LoginFlow",
    # Validation
    "LoginValidationError",
    "validate_email",
    "validate_password",
    "validate_login_input",
]
