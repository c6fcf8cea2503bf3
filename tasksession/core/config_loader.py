"""
TASKSESSION - Config Loader Implementation
Charge la configuration client depuis un fichier YAML et l'environnement.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from .interfaces import ClientConfig, IConfigLoader


class ConfigIntegrityError(Exception):
    """Erreur d'intégrité de configuration."""

    pass


class ConfigLoader(IConfigLoader):
    """
    Chargement de la configuration client.

    Ordre de priorité (le dernier gagne):
        1. Valeurs par défaut de ClientConfig
        2. Fichier YAML (optionnel)
        3. Variables d'environnement TASKSESSION_*

    Example:
        config = ConfigLoader().load("config/client.yaml")
    """

    ENV_PREFIX = "TASKSESSION_"
    ALLOWED_KEYS = (
        "api_url",
        "token_name",
        "allowed_domains",
        "production",
        "excluded_routes",
        "request_timeout",
    )

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Args:
            environ: Environnement à lire (défaut: os.environ)
        """
        self._environ = environ if environ is not None else os.environ

    def load(self, path: Optional[str] = None) -> ClientConfig:
        """
        Charge la configuration.

        Args:
            path: Chemin fichier YAML (optionnel)

        Returns:
            ClientConfig figée

        Raises:
            ConfigIntegrityError: Si fichier inexistant, YAML invalide ou valeurs invalides
        """
        values: Dict[str, Any] = {}

        if path is not None:
            values.update(self._read_file(Path(path)))

        values.update(self._read_environ())

        try:
            return ClientConfig(**values)
        except ValidationError as e:
            raise ConfigIntegrityError(f"Configuration invalide: {e}")

    def _read_file(self, config_file: Path) -> Dict[str, Any]:
        """Lit et valide la structure du fichier YAML."""
        if not config_file.exists():
            raise ConfigIntegrityError(f"Configuration non trouvée: {config_file}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigIntegrityError(f"Erreur de parsing YAML: {e}")
        except OSError as e:
            raise ConfigIntegrityError(f"Erreur de lecture fichier: {e}")

        if config is None:
            return {}

        if not isinstance(config, dict):
            raise ConfigIntegrityError("Configuration doit être un objet YAML")

        unknown = [key for key in config if key not in self.ALLOWED_KEYS]
        if unknown:
            raise ConfigIntegrityError(f"Champs inconnus: {', '.join(sorted(unknown))}")

        return config

    def _read_environ(self) -> Dict[str, Any]:
        """Surcharge depuis les variables TASKSESSION_*."""
        values: Dict[str, Any] = {}

        api_url = self._environ.get(f"{self.ENV_PREFIX}API_URL")
        if api_url:
            values["api_url"] = api_url

        token_name = self._environ.get(f"{self.ENV_PREFIX}TOKEN_NAME")
        if token_name:
            values["token_name"] = token_name

        domains = self._environ.get(f"{self.ENV_PREFIX}DOMAINS")
        if domains:
            values["allowed_domains"] = [d.strip() for d in domains.split(",") if d.strip()]

        production = self._environ.get(f"{self.ENV_PREFIX}PRODUCTION")
        if production:
            values["production"] = production.strip().lower() in ("1", "true", "yes", "on")

        excluded = self._environ.get(f"{self.ENV_PREFIX}EXCLUDED_ROUTES")
        if excluded:
            values["excluded_routes"] = [r.strip() for r in excluded.split(",") if r.strip()]

        # Converti et borné par ClientConfig
        request_timeout = self._environ.get(f"{self.ENV_PREFIX}REQUEST_TIMEOUT")
        if request_timeout:
            values["request_timeout"] = request_timeout.strip()

        return values
