"""
Tests unitaires pour ConfigLoader et ClientConfig.
"""

import pytest

from tasksession.core import (
    DEFAULT_API_URL,
    DEFAULT_TOKEN_NAME,
    ClientConfig,
    ConfigIntegrityError,
    ConfigLoader,
    IConfigLoader,
)


# ══════════════════════════════════════════════════════════════════════════════
# TESTS CLIENT CONFIG
# ══════════════════════════════════════════════════════════════════════════════


class TestClientConfig:
    """Valeurs par défaut et normalisation."""

    def test_defaults(self):
        config = ClientConfig()

        assert config.api_url == DEFAULT_API_URL
        assert config.token_name == DEFAULT_TOKEN_NAME
        assert config.allowed_domains == ("localhost:8080",)
        assert config.production is False
        assert config.request_timeout == 30.0

    def test_default_exclusions_follow_api_url(self):
        """login et register exclus, relatifs à api_url."""
        config = ClientConfig(api_url="https://api.example.com/v1/")

        assert config.api_url == "https://api.example.com/v1"
        assert config.excluded_routes == (
            "https://api.example.com/v1/auth/login",
            "https://api.example.com/v1/auth/register",
        )

    def test_explicit_exclusions_kept(self):
        config = ClientConfig(excluded_routes=["/public"])
        assert config.excluded_routes == ("/public",)

    @pytest.mark.parametrize("routes", [(), []])
    def test_explicit_empty_exclusions_kept(self, routes):
        """Liste vide explicite conservée, pas remplacée par le défaut."""
        assert ClientConfig(excluded_routes=routes).excluded_routes == ()

    def test_none_exclusions_use_default(self):
        config = ClientConfig(excluded_routes=None)
        assert config.excluded_routes[0] == f"{DEFAULT_API_URL}/auth/login"

    def test_auth_url(self):
        assert ClientConfig().auth_url == f"{DEFAULT_API_URL}/auth"

    def test_frozen(self):
        config = ClientConfig()
        with pytest.raises(Exception):
            config.token_name = "other"

    @pytest.mark.parametrize("field,value", [("api_url", "  "), ("token_name", ""), ("request_timeout", 0), ("request_timeout", 90)])
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ValueError):
            ClientConfig(**{field: value})


# ══════════════════════════════════════════════════════════════════════════════
# TESTS CONFIG LOADER
# ══════════════════════════════════════════════════════════════════════════════


class TestConfigLoader:
    """Tests pour ConfigLoader."""

    def setup_method(self):
        """Setup avant chaque test."""
        self.loader = ConfigLoader(environ={})

    def test_implements_interface(self):
        assert isinstance(self.loader, IConfigLoader)

    def test_load_without_file_gives_defaults(self):
        config = self.loader.load()
        assert config == ClientConfig()

    def test_load_valid_file(self, fixtures_path):
        """Le chargement d'une config valide doit réussir."""
        config = self.loader.load(str(fixtures_path / "configs" / "valid.yaml"))

        assert config.api_url == "https://api.example.com/rest/api/v1"
        assert config.token_name == "jwt"
        assert config.allowed_domains == ("api.example.com",)
        assert config.production is True
        assert config.request_timeout == 15.0
        assert config.excluded_routes[0] == "https://api.example.com/rest/api/v1/auth/login"

    def test_empty_file_gives_defaults(self, fixtures_path):
        config = self.loader.load(str(fixtures_path / "configs" / "empty.yaml"))
        assert config.api_url == DEFAULT_API_URL

    def test_missing_file_raises(self, fixtures_path):
        path = fixtures_path / "configs" / "nonexistent.yaml"

        with pytest.raises(ConfigIntegrityError) as exc_info:
            self.loader.load(str(path))

        assert "Configuration non trouvée" in str(exc_info.value)
        assert "nonexistent.yaml" in str(exc_info.value)

    def test_invalid_yaml_raises(self, fixtures_path):
        with pytest.raises(ConfigIntegrityError, match="Erreur de parsing YAML"):
            self.loader.load(str(fixtures_path / "configs" / "invalid_yaml.yaml"))

    def test_non_mapping_raises(self, fixtures_path):
        with pytest.raises(ConfigIntegrityError, match="objet YAML"):
            self.loader.load(str(fixtures_path / "configs" / "not_a_mapping.yaml"))

    def test_unknown_keys_raise(self, fixtures_path):
        with pytest.raises(ConfigIntegrityError) as exc_info:
            self.loader.load(str(fixtures_path / "configs" / "unknown_keys.yaml"))

        assert "Champs inconnus: legacy_mode, retry_count" in str(exc_info.value)

    def test_invalid_values_raise(self, fixtures_path):
        with pytest.raises(ConfigIntegrityError, match="Configuration invalide"):
            self.loader.load(str(fixtures_path / "configs" / "invalid_values.yaml"))


# ══════════════════════════════════════════════════════════════════════════════
# TESTS ENVIRONNEMENT
# ══════════════════════════════════════════════════════════════════════════════


class TestConfigLoaderEnviron:
    """Surcharge par variables TASKSESSION_*."""

    def test_environ_overrides_defaults(self):
        loader = ConfigLoader(
            environ={
                "TASKSESSION_API_URL": "https://prod.example.com/api",
                "TASKSESSION_TOKEN_NAME": "session_jwt",
                "TASKSESSION_DOMAINS": "prod.example.com, cdn.example.com ,",
                "TASKSESSION_PRODUCTION": "true",
            }
        )

        config = loader.load()

        assert config.api_url == "https://prod.example.com/api"
        assert config.token_name == "session_jwt"
        assert config.allowed_domains == ("prod.example.com", "cdn.example.com")
        assert config.production is True
        assert config.excluded_routes == (
            "https://prod.example.com/api/auth/login",
            "https://prod.example.com/api/auth/register",
        )

    def test_environ_overrides_file(self, fixtures_path):
        loader = ConfigLoader(environ={"TASKSESSION_TOKEN_NAME": "from_env"})

        config = loader.load(str(fixtures_path / "configs" / "valid.yaml"))

        assert config.token_name == "from_env"
        assert config.api_url == "https://api.example.com/rest/api/v1"

    @pytest.mark.parametrize("raw,expected", [("1", True), ("YES", True), ("on", True), ("false", False), ("0", False)])
    def test_production_flag_parsing(self, raw, expected):
        config = ConfigLoader(environ={"TASKSESSION_PRODUCTION": raw}).load()
        assert config.production is expected

    def test_request_timeout_from_environ(self):
        config = ConfigLoader(environ={"TASKSESSION_REQUEST_TIMEOUT": " 12.5 "}).load()
        assert config.request_timeout == 12.5

    @pytest.mark.parametrize("raw", ["abc", "0", "120"])
    def test_invalid_request_timeout_from_environ(self, raw):
        with pytest.raises(ConfigIntegrityError, match="Configuration invalide"):
            ConfigLoader(environ={"TASKSESSION_REQUEST_TIMEOUT": raw}).load()

    def test_excluded_routes_from_environ(self, fixtures_path):
        loader = ConfigLoader(environ={"TASKSESSION_EXCLUDED_ROUTES": "/auth/login, /public/ ,"})

        config = loader.load(str(fixtures_path / "configs" / "valid.yaml"))

        assert config.excluded_routes == ("/auth/login", "/public/")

    def test_empty_variables_ignored(self):
        config = ConfigLoader(environ={"TASKSESSION_API_URL": "", "TASKSESSION_DOMAINS": ""}).load()

        assert config.api_url == DEFAULT_API_URL
        assert config.allowed_domains == ("localhost:8080",)

    def test_unrelated_variables_ignored(self):
        config = ConfigLoader(environ={"API_URL": "https://elsewhere.example.com"}).load()
        assert config.api_url == DEFAULT_API_URL
