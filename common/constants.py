"""Project-wide constants (chunk sizing, key namespaces, lifetimes)."""

from datetime import timedelta

CHUNK_SIZE: int = 10_000  # characters per chunk
MAX_VALUE_SIZE: int = 64 * 1024  # serialized bytes per store value

MOVIES_NAMESPACE = "movies"
KEYS_NAMESPACE = "keys"
SESSIONS_NAMESPACE = "sessions"
SCRIPTS_NAMESPACE = "scripts"

CHUNK_KEY_PREFIX = "chunk_"

PREMIUM_KEY_PREFIX = "PREM-"
PREMIUM_KEY_RANDOM_BYTES = 12  # 16 url-safe characters

SESSION_TTL = timedelta(days=365)
SESSION_COOKIE_NAME = "premium_session"

MOVIES_PER_PAGE = 15
