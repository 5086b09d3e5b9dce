"""Ordered key-value store with prefix scans and per-entry expiry.

Keys are tuples of strings compared component-wise. Each single get/set/delete
is atomic; nothing here spans several keys in one transaction.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator, Callable, Dict, Optional, Tuple

from common.constants import MAX_VALUE_SIZE
from common.logging_config import get_logger
from portal.database import get_db_connection, init_database
from portal.exceptions import ValueTooLargeError

logger = get_logger(__name__)

KeyTuple = Tuple[str, ...]

KEY_SEPARATOR = "\x00"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class KVEntry:
    key: KeyTuple
    value: Any


def validate_key(key: KeyTuple, allow_empty: bool = False) -> KeyTuple:
    """
    Check that a key is a tuple of non-empty strings free of the separator.

    Raises:
        ValueError: If the key is malformed
    """
    if not isinstance(key, tuple):
        raise ValueError(f"Key must be a tuple, got {type(key).__name__}")
    if not key and not allow_empty:
        raise ValueError("Key must have at least one component")
    for part in key:
        if not isinstance(part, str) or not part:
            raise ValueError(f"Key components must be non-empty strings: {key!r}")
        if KEY_SEPARATOR in part:
            raise ValueError(f"Key components must not contain NUL: {key!r}")
    return key


def serialize_value(key: KeyTuple, value: Any) -> str:
    payload = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    try:
        size = len(payload.encode("utf-8"))
    except UnicodeEncodeError as e:
        raise ValueError(f"Value for key {key!r} is not valid UTF-8 text: {e.reason}") from e
    if size > MAX_VALUE_SIZE:
        raise ValueTooLargeError(
            f"Value for key {key!r} is {size} bytes, limit is {MAX_VALUE_SIZE}"
        )
    return payload


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _to_millis(moment: datetime) -> int:
    return (moment - EPOCH) // timedelta(milliseconds=1)


class KVStore(ABC):
    """
    Abstract ordered key-value store.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock

    def _expiry_millis(self, expire_in: Optional[timedelta]) -> Optional[int]:
        if expire_in is None:
            return None
        return _to_millis(self.clock() + expire_in)

    def _now_millis(self) -> int:
        return _to_millis(self.clock())

    @abstractmethod
    async def get(self, key: KeyTuple) -> Optional[KVEntry]:
        """Return the live entry for key, or None."""

    @abstractmethod
    async def set(self, key: KeyTuple, value: Any, expire_in: Optional[timedelta] = None) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    async def delete(self, key: KeyTuple) -> None:
        """Remove key. Deleting a missing key is a no-op."""

    @abstractmethod
    def list(self, prefix: KeyTuple) -> AsyncIterator[KVEntry]:
        """Yield live entries strictly under prefix, in key order."""

    async def close(self) -> None:
        pass


class MemoryKVStore(KVStore):
    """
    Dict-backed store. Values are kept serialized so callers never share
    mutable state with the store.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        super().__init__(clock)
        self._data: Dict[KeyTuple, Tuple[str, Optional[int]]] = {}

    def _live(self, key: KeyTuple) -> Optional[str]:
        item = self._data.get(key)
        if item is None:
            return None
        payload, expires_at = item
        if expires_at is not None and expires_at <= self._now_millis():
            del self._data[key]
            return None
        return payload

    async def get(self, key: KeyTuple) -> Optional[KVEntry]:
        validate_key(key)
        payload = self._live(key)
        if payload is None:
            return None
        return KVEntry(key=key, value=json.loads(payload))

    async def set(self, key: KeyTuple, value: Any, expire_in: Optional[timedelta] = None) -> None:
        validate_key(key)
        self._data[key] = (serialize_value(key, value), self._expiry_millis(expire_in))

    async def delete(self, key: KeyTuple) -> None:
        validate_key(key)
        self._data.pop(key, None)

    async def list(self, prefix: KeyTuple) -> AsyncIterator[KVEntry]:
        validate_key(prefix, allow_empty=True)
        depth = len(prefix)
        matching = sorted(k for k in self._data if len(k) > depth and k[:depth] == prefix)
        for key in matching:
            payload = self._live(key)
            if payload is not None:
                yield KVEntry(key=key, value=json.loads(payload))


class SqliteKVStore(KVStore):
    """
    SQLite-backed store. Keys are stored as UTF-8 BLOBs of the components
    joined with NUL, so byte ordering in SQLite equals component-wise tuple
    ordering.
    """

    def __init__(self, database_path: str, clock: Callable[[], datetime] = utc_now):
        super().__init__(clock)
        self.database_path = database_path
        init_database(database_path)
        logger.info(f"SQLite key-value store ready [path={database_path}]")

    @staticmethod
    def _encode(key: KeyTuple) -> bytes:
        return KEY_SEPARATOR.join(key).encode("utf-8")

    @staticmethod
    def _decode(raw: bytes) -> KeyTuple:
        return tuple(bytes(raw).decode("utf-8").split(KEY_SEPARATOR))

    async def get(self, key: KeyTuple) -> Optional[KVEntry]:
        validate_key(key)
        encoded = self._encode(key)
        with get_db_connection(self.database_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value, expires_at FROM kv WHERE key = ?", (encoded,))
            row = cursor.fetchone()
            if row is None:
                return None
            if row["expires_at"] is not None and row["expires_at"] <= self._now_millis():
                cursor.execute(
                    "DELETE FROM kv WHERE key = ? AND expires_at = ?",
                    (encoded, row["expires_at"])
                )
                conn.commit()
                logger.debug(f"Purged expired entry [key={key!r}]")
                return None
            return KVEntry(key=key, value=json.loads(row["value"]))

    async def set(self, key: KeyTuple, value: Any, expire_in: Optional[timedelta] = None) -> None:
        validate_key(key)
        payload = serialize_value(key, value)
        with get_db_connection(self.database_path) as conn:
            conn.execute(
                """
                INSERT INTO kv (key, value, expires_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, expires_at = excluded.expires_at
                """,
                (self._encode(key), payload, self._expiry_millis(expire_in))
            )
            conn.commit()

    async def delete(self, key: KeyTuple) -> None:
        validate_key(key)
        with get_db_connection(self.database_path) as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (self._encode(key),))
            conn.commit()

    async def list(self, prefix: KeyTuple) -> AsyncIterator[KVEntry]:
        validate_key(prefix, allow_empty=True)
        now = self._now_millis()
        with get_db_connection(self.database_path) as conn:
            cursor = conn.cursor()
            if prefix:
                encoded = self._encode(prefix)
                cursor.execute(
                    """
                    SELECT key, value FROM kv
                    WHERE key >= ? AND key < ? AND (expires_at IS NULL OR expires_at > ?)
                    ORDER BY key
                    """,
                    (encoded + b"\x00", encoded + b"\x01", now)
                )
            else:
                cursor.execute(
                    """
                    SELECT key, value FROM kv
                    WHERE expires_at IS NULL OR expires_at > ?
                    ORDER BY key
                    """,
                    (now,)
                )
            rows = cursor.fetchall()

        for row in rows:
            yield KVEntry(key=self._decode(row["key"]), value=json.loads(row["value"]))


def create_store(backend: str, database_path: str, clock: Callable[[], datetime] = utc_now) -> KVStore:
    """
    Build the store named by the REELBOX_STORE setting.

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend == "memory":
        logger.warning("Using in-memory key-value store; data is lost on restart")
        return MemoryKVStore(clock)
    if backend == "sqlite":
        return SqliteKVStore(database_path, clock)
    raise ValueError(f"Unknown store backend: {backend}")
