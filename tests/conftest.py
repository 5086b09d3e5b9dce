"""Shared pytest fixtures for all tests."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from cli.config import Config
from portal.config import PortalSettings
from portal.kv_store import MemoryKVStore, SqliteKVStore
from portal.main import create_app

ADMIN_TOKEN = "test-admin-token"


class FakeClock:
    """Settable clock returning aware UTC datetimes."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def memory_store(clock):
    return MemoryKVStore(clock)


@pytest.fixture
def sqlite_store(tmp_path, clock):
    """
    SQLite store on a fresh database file per test.
    """
    return SqliteKVStore(str(tmp_path / "kv.db"), clock)


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path, clock):
    """
    Each store-level test runs against both backends.
    """
    if request.param == "memory":
        return MemoryKVStore(clock)
    return SqliteKVStore(str(tmp_path / "kv.db"), clock)


@pytest.fixture
def settings():
    return PortalSettings(admin_token=ADMIN_TOKEN, store_backend="memory", cookie_secure=False)


def _default_upstream(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"content-type": "video/mp4"}, stream=httpx.ByteStream(b"video"))


@pytest.fixture
def upstream_requests():
    """Requests seen by the mocked upstream video host."""
    return []


@pytest.fixture
def make_client(settings, memory_store, clock, upstream_requests):
    """
    Factory for a TestClient on a portal wired to the in-memory store, the
    fake clock and a mocked upstream.

    Args:
        handler: Optional upstream handler (request -> httpx.Response)
    """
    def _make(handler=None):
        upstream = handler or _default_upstream

        def recording_handler(request: httpx.Request) -> httpx.Response:
            upstream_requests.append(request)
            return upstream(request)

        upstream_client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        app = create_app(settings, store=memory_store, clock=clock, upstream_client=upstream_client)
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def admin_headers():
    return {"X-Admin-Token": ADMIN_TOKEN}


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Returns:
        Path to temporary .reelbox directory
    """
    config_dir = tmp_path / '.reelbox'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir, monkeypatch):
    """
    Create temporary config instance.

    Returns:
        Config instance with temp config file
    """
    monkeypatch.delenv('REELBOX_ADMIN_TOKEN', raising=False)
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_script(tmp_path):
    """
    Create a local script file for push tests.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'player.js'
    file_path.write_text('console.log("reelbox");\n', encoding='utf-8')
    return file_path
