"""Pydantic schemas for movie catalog endpoints."""

from typing import List, Optional, Union

from pydantic import BaseModel

from common.types import MovieRecord


class MovieResponse(BaseModel):
    """Response model for a single movie as seen by the caller."""
    slug: str
    title: str
    poster_url: str
    synopsis: str
    links: List[str]
    screenshots: List[str]
    premium: bool
    locked: bool = False

    @classmethod
    def from_record(cls, movie: MovieRecord, locked: bool = False) -> "MovieResponse":
        return cls(**movie.to_dict(), locked=locked)


class MovieSummary(BaseModel):
    """Catalog card: no links, so listing never leaks premium sources."""
    slug: str
    title: str
    poster_url: str
    premium: bool


class MoviePageResponse(BaseModel):
    """Response model for one catalog page."""
    movies: List[MovieSummary]
    page: int
    total_pages: int
    total_movies: int


class SaveMovieRequest(BaseModel):
    """
    Request model for creating or replacing a movie.

    links and screenshots accept either a list or newline-separated text.
    """
    title: str
    slug: Optional[str] = None
    poster_url: str = ""
    synopsis: str = ""
    links: Union[List[str], str] = ""
    screenshots: Union[List[str], str] = ""
    premium: bool = False


class AdminMovieListResponse(BaseModel):
    """Response model for the admin movie table."""
    movies: List[MovieResponse]
