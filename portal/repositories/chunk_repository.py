"""Chunked object storage on top of the key-value store."""

from typing import List, Optional, Tuple

from common.constants import CHUNK_KEY_PREFIX, CHUNK_SIZE, SCRIPTS_NAMESPACE
from common.logging_config import get_logger
from portal.kv_store import KVStore, serialize_value

logger = get_logger(__name__)


def split_into_chunks(content: str, chunk_size: int = CHUNK_SIZE) -> List[str]:
    """
    Split content into consecutive fixed-size slices.

    Empty content yields a single empty chunk so a written-but-empty object
    is distinguishable from one that was never written.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if not content:
        return [""]
    return [content[i:i + chunk_size] for i in range(0, len(content), chunk_size)]


def chunk_name(index: int) -> str:
    return f"{CHUNK_KEY_PREFIX}{index}"


def parse_chunk_index(name: str) -> Optional[int]:
    """
    Parse the numeric suffix of a chunk key component.

    Returns:
        The sequence index, or None when the name is not of the form chunk_<n>
    """
    if not name.startswith(CHUNK_KEY_PREFIX):
        return None
    suffix = name[len(CHUNK_KEY_PREFIX):]
    if not suffix.isdigit() or not suffix.isascii():
        return None
    return int(suffix)


class ChunkRepository:
    """
    Stores arbitrary-length text objects as fixed-size chunks under
    (namespace, object_id, "chunk_<n>") keys.

    write() checks that every new chunk is storable, deletes the old chunk
    set and then writes the new one; the delete and write phases are not
    transactional. A reader racing an overwrite, or an
    interrupted write, can observe a partial or missing object.
    """

    def __init__(self, store: KVStore, namespace: str = SCRIPTS_NAMESPACE, chunk_size: int = CHUNK_SIZE):
        self.store = store
        self.namespace = namespace
        self.chunk_size = chunk_size

    async def _chunk_keys(self, object_id: str) -> List[Tuple[str, ...]]:
        return [entry.key async for entry in self.store.list((self.namespace, object_id))]

    async def write(self, object_id: str, content: str) -> int:
        """
        Replace the object's content.

        Returns:
            Number of chunks written
        """
        chunks = split_into_chunks(content, self.chunk_size)
        keys = [(self.namespace, object_id, chunk_name(index)) for index in range(len(chunks))]
        # every chunk must be storable before the old set is removed
        for key, piece in zip(keys, chunks):
            serialize_value(key, piece)

        removed = await self.delete(object_id)
        for key, piece in zip(keys, chunks):
            await self.store.set(key, piece)

        logger.info(
            f"Wrote object [object_id={object_id}] chars={len(content)} "
            f"chunks={len(chunks)} replaced_chunks={removed}"
        )
        return len(chunks)

    async def read(self, object_id: str) -> Optional[str]:
        """
        Reassemble the object in numeric chunk order.

        Returns:
            The content, or None when no chunk exists
        """
        indexed = []
        async for entry in self.store.list((self.namespace, object_id)):
            index = parse_chunk_index(entry.key[-1]) if len(entry.key) == 3 else None
            if index is None:
                logger.warning(f"Ignoring unexpected key under object [key={entry.key!r}]")
                continue
            indexed.append((index, entry.value))

        if not indexed:
            logger.debug(f"Object not found [object_id={object_id}]")
            return None

        indexed.sort(key=lambda pair: pair[0])
        return "".join(piece for _, piece in indexed)

    async def delete(self, object_id: str) -> int:
        """
        Delete every chunk of the object. Deleting a missing object is a no-op.

        Returns:
            Number of chunks removed
        """
        keys = await self._chunk_keys(object_id)
        for key in keys:
            await self.store.delete(key)
        if keys:
            logger.debug(f"Deleted {len(keys)} chunks [object_id={object_id}]")
        return len(keys)

    async def list_object_ids(self) -> List[str]:
        """
        Distinct identifiers that have at least one chunk, sorted.
        """
        seen = set()
        async for entry in self.store.list((self.namespace,)):
            if len(entry.key) == 3 and parse_chunk_index(entry.key[-1]) is not None:
                seen.add(entry.key[1])
        return sorted(seen)
