"""
TASKSESSION - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

import base64
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import jwt
import pytest

from tasksession.core import ClientConfig


API_URL = "http://localhost:8080/rest/api/v1"


def b64url(raw: bytes) -> str:
    """Encodage base64url sans padding."""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def raw_token(payload: Any, header: Optional[Dict[str, Any]] = None, signature: bytes = b"sig") -> str:
    """Token compact construit à la main (payload JSON quelconque)."""
    header = header or {"alg": "HS256", "typ": "JWT"}
    return ".".join(
        [
            b64url(json.dumps(header).encode()),
            b64url(json.dumps(payload).encode()),
            b64url(signature),
        ]
    )


def envelope(
    success: bool,
    message: Optional[str] = "",
    data: Any = None,
    status_code: int = 200,
) -> Dict[str, Any]:
    """Enveloppe de réponse backend."""
    return {
        "success": success,
        "message": message,
        "data": data,
        "statusCode": status_code,
        "timestamp": "2024-12-04T14:30:00.123Z",
    }


@pytest.fixture
def fixtures_path() -> Path:
    """Chemin vers le dossier fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def config() -> ClientConfig:
    """Configuration client par défaut."""
    return ClientConfig(api_url=API_URL)


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Fabrique de tokens signés HS256 (signature non vérifiée côté client)."""

    def _make(**claims: Any) -> str:
        return jwt.encode(claims, "test-secret-key-with-enough-length", algorithm="HS256")

    return _make


class RecordingHandler:
    """Handler httpx.MockTransport: enregistre les requêtes, rejoue des réponses."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def on(self, path_suffix: str, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[path_suffix] = responder

    def json(self, path_suffix: str, body: Any, status_code: int = 200) -> None:
        self.on(path_suffix, lambda request: httpx.Response(status_code, json=body))

    def fail(self, path_suffix: str, exc_type: type = httpx.ConnectError) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_type("connection refused", request=request)

        self.on(path_suffix, _raise)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for suffix, responder in self.routes.items():
            if request.url.path.endswith(suffix):
                return responder(request)
        return httpx.Response(404, json=envelope(False, "Not found", status_code=404))


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture(name="raw_token")
def raw_token_fixture() -> Callable[..., str]:
    return raw_token


@pytest.fixture(name="envelope")
def envelope_fixture() -> Callable[..., Dict[str, Any]]:
    return envelope
