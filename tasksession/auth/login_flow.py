"""
LOT 4: Login Flow

Contrôleur du formulaire de connexion: validation, indicateur de chargement,
dernier message d'erreur.
"""

from typing import Optional

from .interfaces import AuthResult
from .session_service import Callback, SessionService, notify_callback
from .validators import LoginValidationError, validate_login_input


class LoginFlow:
    """
    Soumission du formulaire de login.

    is_loading passe à True avant l'appel réseau et revient à False
    dans un bloc finally, succès comme échec.

    Example:
        flow = LoginFlow(session, on_success=lambda result: router.navigate("task"))
        result = await flow.submit(email, password)
        if not result.success:
            show(flow.last_error)
    """

    def __init__(
        self,
        session: SessionService,
        on_success: Optional[Callback] = None,
        on_failure: Optional[Callback] = None,
    ):
        """
        Args:
            session: Façade de session
            on_success: Appelé après écriture du token (navigation)
            on_failure: Appelé avec le message d'erreur (notification)
        """
        self._session = session
        self._on_success = on_success
        self._on_failure = on_failure
        self.is_loading = False
        self.last_error: Optional[str] = None

    async def submit(self, email: str, password: str) -> AuthResult:
        """
        Valide puis soumet.

        Returns:
            AuthResult; une saisie invalide donne success=False avec le
            message de validation, sans appel réseau
        """
        self.last_error = None

        try:
            validate_login_input(email, password)
        except LoginValidationError as e:
            await self._notify_failure(str(e))
            return AuthResult(success=False, message=self.last_error)

        self.is_loading = True
        try:
            result = await self._session.login(
                email.strip(),
                password,
                on_success=self._on_success,
                on_failure=self._notify_failure,
            )
        finally:
            self.is_loading = False

        return result

    async def _notify_failure(self, message: str) -> None:
        self.last_error = message
        await notify_callback(self._on_failure, message)
