"""Movie catalog repository."""

from typing import List, Optional

from common.constants import MOVIES_NAMESPACE
from common.logging_config import get_logger
from common.types import MovieRecord
from portal.kv_store import KVStore

logger = get_logger(__name__)


class MovieRepository:
    def __init__(self, store: KVStore):
        self.store = store

    async def save(self, movie: MovieRecord) -> MovieRecord:
        await self.store.set((MOVIES_NAMESPACE, movie.slug), movie.to_dict())
        logger.info(f"Saved movie [slug={movie.slug}]")
        return movie

    async def get(self, slug: str) -> Optional[MovieRecord]:
        if not slug or "\x00" in slug:
            return None
        entry = await self.store.get((MOVIES_NAMESPACE, slug))
        if entry is None:
            return None
        return MovieRecord.from_dict(entry.value)

    async def list_all(self) -> List[MovieRecord]:
        return [MovieRecord.from_dict(entry.value) async for entry in self.store.list((MOVIES_NAMESPACE,))]

    async def delete(self, slug: str) -> None:
        await self.store.delete((MOVIES_NAMESPACE, slug))
        logger.info(f"Deleted movie [slug={slug}]")
