"""Movie catalog service for business logic."""

from dataclasses import dataclass, replace
from typing import List, Optional

from common.constants import MOVIES_PER_PAGE
from common.logging_config import get_logger
from common.types import MovieRecord
from portal.exceptions import InvalidNameError, NotFoundError
from portal.kv_store import KVStore
from portal.repositories.movie_repository import MovieRepository
from portal.utils import create_slug, paginate, parse_lines

logger = get_logger(__name__)


@dataclass(frozen=True)
class MoviePage:
    movies: List[MovieRecord]
    page: int
    total_pages: int
    total_movies: int


@dataclass(frozen=True)
class MovieView:
    """
    A movie as shown to one viewer; premium links are withheld unless the
    viewer holds premium access.
    """
    movie: MovieRecord
    locked: bool


class MovieService:
    def __init__(self, store: KVStore, per_page: int = MOVIES_PER_PAGE):
        self.movie_repo = MovieRepository(store)
        self.per_page = per_page

    async def list_page(self, page: int) -> MoviePage:
        movies = await self.movie_repo.list_all()
        items, total_pages = paginate(movies, page, self.per_page)
        return MoviePage(movies=items, page=page, total_pages=total_pages, total_movies=len(movies))

    async def list_all(self) -> List[MovieRecord]:
        return await self.movie_repo.list_all()

    async def get(self, slug: str) -> MovieRecord:
        movie = await self.movie_repo.get(slug)
        if movie is None:
            raise NotFoundError("Movie not found")
        return movie

    async def view(self, slug: str, premium_authorized: bool) -> MovieView:
        movie = await self.get(slug)
        if movie.premium and not premium_authorized:
            return MovieView(movie=replace(movie, links=[]), locked=True)
        return MovieView(movie=movie, locked=False)

    async def save(
        self,
        title: str,
        slug: Optional[str] = None,
        poster_url: str = "",
        synopsis: str = "",
        links: str = "",
        screenshots: str = "",
        premium: bool = False,
    ) -> MovieRecord:
        """
        Create or replace a movie. The slug defaults to one derived from the title.

        Raises:
            InvalidNameError: If no usable slug can be derived
        """
        final_slug = (slug or "").strip() or create_slug(title)
        if not final_slug or "\x00" in final_slug:
            raise InvalidNameError("A slug or a title with letters or digits is required")

        movie = MovieRecord(
            slug=final_slug,
            title=title,
            poster_url=poster_url,
            synopsis=synopsis,
            links=parse_lines(links),
            screenshots=parse_lines(screenshots),
            premium=premium,
        )
        return await self.movie_repo.save(movie)

    async def delete(self, slug: str) -> None:
        if not slug or "\x00" in slug:
            raise InvalidNameError("Invalid slug")
        await self.movie_repo.delete(slug)
