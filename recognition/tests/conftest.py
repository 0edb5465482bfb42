"""
conftest.py
-----------
Fixtures compartidas: configuración aislada en tmp_path, un proveedor
falso (parcheando requests.post) y un TestClient con las dependencias
sobreescritas.
"""

import json
from pathlib import Path

import pytest
import requests
from fastapi.testclient import TestClient

from api.dependencies import get_provider, get_settings
from api.main import app
from recognition.config import RelaySettings
from recognition.provider import AuddClient


class FakeResponse:
    def __init__(self, body=None, status_code=200, content=None):
        self.status_code = status_code
        if content is not None:
            self.content = content
        elif body is None:
            self.content = b""
        else:
            self.content = json.dumps(body).encode("utf-8")

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error", response=self)


class FakeProviderPost:
    """
    Sustituto de requests.post. Guarda cada llamada (url, campos, nombre
    y bytes del archivo, si el temporal existía) y devuelve la respuesta
    configurada, o lanza la excepción configurada.
    """

    def __init__(self):
        self.calls = []
        self.response = FakeResponse({"status": "success", "result": None})
        self.error = None

    def __call__(self, url, data=None, files=None, timeout=None, **kwargs):
        filename, handle = files["file"]
        staged_path = Path(handle.name)
        self.calls.append({
            "url": url,
            "data": dict(data or {}),
            "filename": filename,
            "content": handle.read(),
            "staged_path": staged_path,
            "staged_existed": staged_path.exists(),
            "timeout": timeout,
        })
        if self.error is not None:
            raise self.error
        return self.response

    def respond(self, body=None, status_code=200, content=None):
        self.response = FakeResponse(body, status_code=status_code, content=content)


@pytest.fixture
def settings(tmp_path):
    return RelaySettings(
        audd_api_token="test-token",
        audd_api_url="https://provider.test/",
        upload_dir=tmp_path / "uploads",
        static_dir=tmp_path / "public",
    )


@pytest.fixture
def fake_post(monkeypatch):
    fake = FakeProviderPost()
    monkeypatch.setattr("recognition.provider.requests.post", fake)
    return fake


@pytest.fixture
def client(settings, fake_post):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_provider] = lambda: AuddClient(settings)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def leftover_uploads(settings):
    def _list():
        if settings.upload_dir is None or not settings.upload_dir.exists():
            return []
        return list(settings.upload_dir.iterdir())
    return _list
