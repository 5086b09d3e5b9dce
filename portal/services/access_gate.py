"""Access gate: admin token checks and premium key/session authorization."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from common.constants import SESSION_TTL
from common.logging_config import get_logger
from common.types import PremiumKey, Session
from portal.auth import generate_premium_key, generate_session_token, tokens_match
from portal.kv_store import KVStore, utc_now
from portal.repositories.key_repository import PremiumKeyRepository, SessionRepository

logger = get_logger(__name__)

INVALID_OR_EXPIRED_KEY = "Invalid or expired key"


@dataclass(frozen=True)
class ActivationResult:
    """
    Outcome of redeeming a premium key. Failures carry only a generic
    message that does not say whether the key was unknown or expired.
    """
    ok: bool
    session_token: Optional[str] = None
    premium_key: Optional[PremiumKey] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, session_token: str, premium_key: PremiumKey) -> "ActivationResult":
        return cls(ok=True, session_token=session_token, premium_key=premium_key)

    @classmethod
    def failure(cls) -> "ActivationResult":
        return cls(ok=False, error=INVALID_OR_EXPIRED_KEY)


@dataclass(frozen=True)
class PremiumAccess:
    authorized: bool
    key_info: Optional[PremiumKey] = None


class AccessGate:
    """
    Decides per request whether the caller is the administrator, a holder of
    a currently valid premium session, or anonymous.

    Nothing is cached in process; every check reads the store. A session's
    validity is derived from its bound key at read time, so deleting or
    expiring a key revokes all of its sessions without touching them. Stale
    session records are left to expire through their own TTL.
    """

    def __init__(
        self,
        store: KVStore,
        admin_token: str,
        clock: Callable[[], datetime] = utc_now,
        session_ttl: timedelta = SESSION_TTL,
    ):
        self.admin_token = admin_token
        self.clock = clock
        self.session_ttl = session_ttl
        self.key_repo = PremiumKeyRepository(store)
        self.session_repo = SessionRepository(store)

    def check_admin(self, supplied_token: Optional[str]) -> bool:
        allowed = tokens_match(supplied_token, self.admin_token)
        if not allowed:
            logger.warning("Admin check failed")
        return allowed

    async def generate_key(self, duration_days: int, owner: str) -> PremiumKey:
        """
        Issue a new premium key valid for duration_days from now.

        Raises:
            ValueError: If duration_days is not positive
        """
        if duration_days <= 0:
            raise ValueError("duration_days must be positive")

        now = self.clock()
        premium_key = PremiumKey(
            key=generate_premium_key(),
            created_at=now,
            owner=owner,
            expiry_date=now + timedelta(days=duration_days),
        )
        await self.key_repo.create(premium_key)
        logger.info(f"Generated premium key for owner={owner} duration_days={duration_days}")
        return premium_key

    async def list_keys(self) -> List[PremiumKey]:
        return await self.key_repo.list_all()

    async def delete_key(self, key: str) -> bool:
        return await self.key_repo.delete(key)

    async def activate_key(self, supplied_key: Optional[str]) -> ActivationResult:
        """
        Redeem a premium key for a new session. Each call creates an
        independent session; earlier sessions for the same key stay valid.
        """
        premium_key = await self.key_repo.get(supplied_key or "")
        if premium_key is None or not premium_key.is_valid_at(self.clock()):
            logger.warning("Premium key activation rejected")
            return ActivationResult.failure()

        session = Session(session_token=generate_session_token(), premium_key=premium_key.key)
        await self.session_repo.create(session, self.session_ttl)
        logger.info(f"Premium key activated for owner={premium_key.owner}")
        return ActivationResult.success(session.session_token, premium_key)

    async def check_premium_access(self, session_token: Optional[str]) -> PremiumAccess:
        if not session_token:
            return PremiumAccess(authorized=False)

        session = await self.session_repo.get(session_token)
        if session is None:
            logger.debug("No session for supplied token")
            return PremiumAccess(authorized=False)

        premium_key = await self.key_repo.get(session.premium_key)
        if premium_key is None or not premium_key.is_valid_at(self.clock()):
            logger.debug("Session bound to missing or expired key")
            return PremiumAccess(authorized=False)

        return PremiumAccess(authorized=True, key_info=premium_key)

    async def end_session(self, session_token: Optional[str]) -> None:
        await self.session_repo.delete(session_token or "")
