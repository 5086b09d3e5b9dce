"""Premium key and session repositories."""

from datetime import timedelta
from typing import List, Optional

from common.constants import KEYS_NAMESPACE, SESSIONS_NAMESPACE
from common.logging_config import get_logger
from common.types import PremiumKey, Session
from portal.kv_store import KVStore

logger = get_logger(__name__)


class PremiumKeyRepository:
    def __init__(self, store: KVStore):
        self.store = store

    async def create(self, premium_key: PremiumKey) -> PremiumKey:
        logger.debug(f"Storing premium key for owner={premium_key.owner}")
        await self.store.set((KEYS_NAMESPACE, premium_key.key), premium_key.to_dict())
        return premium_key

    async def get(self, key: str) -> Optional[PremiumKey]:
        if not key or "\x00" in key:
            return None
        entry = await self.store.get((KEYS_NAMESPACE, key))
        if entry is None:
            return None
        return PremiumKey.from_dict(entry.value)

    async def list_all(self) -> List[PremiumKey]:
        return [PremiumKey.from_dict(entry.value) async for entry in self.store.list((KEYS_NAMESPACE,))]

    async def delete(self, key: str) -> bool:
        """
        Returns:
            True if the key existed
        """
        existing = await self.get(key)
        if existing is None:
            return False
        await self.store.delete((KEYS_NAMESPACE, key))
        logger.info(f"Deleted premium key for owner={existing.owner}")
        return True


class SessionRepository:
    def __init__(self, store: KVStore):
        self.store = store

    async def create(self, session: Session, ttl: timedelta) -> Session:
        await self.store.set((SESSIONS_NAMESPACE, session.session_token), session.to_dict(), expire_in=ttl)
        return session

    async def get(self, session_token: str) -> Optional[Session]:
        if not session_token or "\x00" in session_token:
            return None
        entry = await self.store.get((SESSIONS_NAMESPACE, session_token))
        if entry is None:
            return None
        return Session.from_dict(entry.value)

    async def delete(self, session_token: str) -> None:
        if session_token and "\x00" not in session_token:
            await self.store.delete((SESSIONS_NAMESPACE, session_token))
