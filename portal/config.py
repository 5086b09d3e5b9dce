"""Configuration settings for the Portal server."""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


DEFAULT_ADMIN_TOKEN = "your-secret-admin-token"


@dataclass(frozen=True)
class PortalSettings:
    """
    Runtime settings for the portal, resolved once at startup and injected
    into create_app().
    """
    admin_token: str = DEFAULT_ADMIN_TOKEN
    database_path: str = "./data/reelbox.db"
    store_backend: str = "sqlite"
    host: str = "0.0.0.0"
    port: int = 8000
    cookie_secure: bool = True
    upstream_connect_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "PortalSettings":
        return cls(
            admin_token=os.environ.get("ADMIN_TOKEN", DEFAULT_ADMIN_TOKEN),
            database_path=os.environ.get("REELBOX_DATABASE_PATH", "./data/reelbox.db"),
            store_backend=os.environ.get("REELBOX_STORE", "sqlite").lower(),
            host=os.environ.get("REELBOX_HOST", "0.0.0.0"),
            port=int(os.environ.get("REELBOX_PORT", "8000")),
            cookie_secure=_env_bool("REELBOX_COOKIE_SECURE", True),
            upstream_connect_timeout=float(os.environ.get("REELBOX_UPSTREAM_TIMEOUT", "10")),
        )
