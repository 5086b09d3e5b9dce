"""Tests for settings and application wiring."""

import httpx
from fastapi.testclient import TestClient

from portal.config import DEFAULT_ADMIN_TOKEN, PortalSettings
from portal.kv_store import SqliteKVStore
from portal.main import create_app


def test_settings_defaults(monkeypatch):
    for name in ["ADMIN_TOKEN", "REELBOX_DATABASE_PATH", "REELBOX_STORE", "REELBOX_HOST",
                 "REELBOX_PORT", "REELBOX_COOKIE_SECURE", "REELBOX_UPSTREAM_TIMEOUT"]:
        monkeypatch.delenv(name, raising=False)

    settings = PortalSettings.from_env()

    assert settings == PortalSettings()
    assert settings.admin_token == DEFAULT_ADMIN_TOKEN
    assert settings.cookie_secure is True


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "s3cret")
    monkeypatch.setenv("REELBOX_DATABASE_PATH", "/tmp/x.db")
    monkeypatch.setenv("REELBOX_STORE", "MEMORY")
    monkeypatch.setenv("REELBOX_PORT", "9000")
    monkeypatch.setenv("REELBOX_COOKIE_SECURE", "false")
    monkeypatch.setenv("REELBOX_UPSTREAM_TIMEOUT", "2.5")

    settings = PortalSettings.from_env()

    assert settings.admin_token == "s3cret"
    assert settings.database_path == "/tmp/x.db"
    assert settings.store_backend == "memory"
    assert settings.port == 9000
    assert settings.cookie_secure is False
    assert settings.upstream_connect_timeout == 2.5


def test_create_app_builds_sqlite_store_from_settings(tmp_path):
    settings = PortalSettings(admin_token="t", database_path=str(tmp_path / "portal.db"))

    app = create_app(settings)

    assert isinstance(app.state.store, SqliteKVStore)
    assert (tmp_path / "portal.db").exists()


def test_shutdown_closes_upstream_client(settings, memory_store):
    upstream_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    app = create_app(settings, store=memory_store, upstream_client=upstream_client)

    with TestClient(app) as client:
        assert client.get('/health').status_code == 200
        assert not upstream_client.is_closed

    assert upstream_client.is_closed


def test_unexpected_error_hides_detail(settings, memory_store):
    app = create_app(settings, store=memory_store)

    @app.get('/boom')
    async def boom():
        raise RuntimeError("database password is hunter2")

    response = TestClient(app, raise_server_exceptions=False).get('/boom')

    assert response.status_code == 500
    assert response.json() == {'detail': 'Internal server error', 'code': 'INTERNAL_ERROR'}


def test_openapi_documents_error_model(client):
    schema = client.get('/openapi.json').json()

    assert 'ErrorResponse' in schema['components']['schemas']
    assert '/stream/{slug}' in schema['paths']
