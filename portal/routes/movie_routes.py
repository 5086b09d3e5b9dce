"""Public movie catalog routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from portal.deps import get_movie_service, get_premium_access
from portal.schemas.movies import MoviePageResponse, MovieResponse, MovieSummary
from portal.services.access_gate import PremiumAccess
from portal.services.movie_service import MovieService
from portal.utils import parse_page

router = APIRouter(prefix="/movies", tags=["Movies"])


@router.get("", response_model=MoviePageResponse)
async def list_movies(
    page: Optional[str] = Query(None),
    movie_service: MovieService = Depends(get_movie_service),
):
    """
    List one page of the catalog, in slug order.

    Parameters:
        - page: 1-based page number; invalid or missing values mean page 1

    Returns:
        - movies: Catalog cards for the page (no links)
        - page, total_pages, total_movies
    """
    result = await movie_service.list_page(parse_page(page))

    return MoviePageResponse(
        movies=[
            MovieSummary(slug=m.slug, title=m.title, poster_url=m.poster_url, premium=m.premium)
            for m in result.movies
        ],
        page=result.page,
        total_pages=result.total_pages,
        total_movies=result.total_movies,
    )


@router.get("/{slug}", response_model=MovieResponse)
async def get_movie(
    slug: str,
    movie_service: MovieService = Depends(get_movie_service),
    access: PremiumAccess = Depends(get_premium_access),
):
    """
    Show one movie. Links of premium movies are withheld (locked=true)
    unless the caller holds a valid premium session.

    Raises:
        - 404: Movie not found
    """
    view = await movie_service.view(slug, premium_authorized=access.authorized)

    return MovieResponse.from_record(view.movie, locked=view.locked)
