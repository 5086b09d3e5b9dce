"""Script (paste) service backed by the chunked object store."""

from dataclasses import dataclass
from typing import List

from common.logging_config import get_logger
from portal.exceptions import NotFoundError
from portal.kv_store import KVStore
from portal.repositories.chunk_repository import ChunkRepository
from portal.utils import validate_script_name

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScriptDocument:
    name: str
    content: str


class ScriptService:
    def __init__(self, store: KVStore):
        self.chunk_repo = ChunkRepository(store)

    async def list_scripts(self) -> List[str]:
        return await self.chunk_repo.list_object_ids()

    async def load(self, name: str) -> ScriptDocument:
        validate_script_name(name)
        content = await self.chunk_repo.read(name)
        if content is None:
            raise NotFoundError("Script not found")
        return ScriptDocument(name=name, content=content)

    async def save(self, name: str, content: str) -> int:
        validate_script_name(name)
        chunks = await self.chunk_repo.write(name, content)
        logger.info(f"Saved script [name={name}] chunks={chunks}")
        return chunks

    async def delete(self, name: str) -> None:
        validate_script_name(name)
        await self.chunk_repo.delete(name)
