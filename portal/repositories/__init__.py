"""Repository layer for data access."""

from portal.repositories.chunk_repository import ChunkRepository
from portal.repositories.key_repository import PremiumKeyRepository, SessionRepository
from portal.repositories.movie_repository import MovieRepository

__all__ = [
    "ChunkRepository",
    "PremiumKeyRepository",
    "SessionRepository",
    "MovieRepository",
]
