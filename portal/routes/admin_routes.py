"""Administrator routes: catalog, premium keys and scripts."""

from fastapi import APIRouter, Depends, status

from portal.deps import get_access_gate, get_movie_service, get_script_service, require_admin
from portal.exceptions import NotFoundError
from portal.schemas.common import ErrorResponse
from portal.schemas.keys import (
    DeleteKeyResponse,
    GenerateKeyRequest,
    ListKeysResponse,
    PremiumKeyResponse,
)
from portal.schemas.movies import AdminMovieListResponse, MovieResponse, SaveMovieRequest
from portal.schemas.scripts import SaveScriptRequest, SaveScriptResponse
from portal.services.access_gate import AccessGate
from portal.services.movie_service import MovieService
from portal.services.script_service import ScriptService

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
    responses={403: {"model": ErrorResponse, "description": "Bad or missing admin token"}},
)


def _as_text(value) -> str:
    if isinstance(value, list):
        return "\n".join(value)
    return value or ""


@router.get("/movies", response_model=AdminMovieListResponse)
async def admin_list_movies(movie_service: MovieService = Depends(get_movie_service)):
    """
    List every movie with full details.

    Raises:
        - 403: Bad or missing admin token
    """
    movies = await movie_service.list_all()
    return AdminMovieListResponse(movies=[MovieResponse.from_record(m) for m in movies])


@router.post("/movies", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
async def admin_save_movie(
    request: SaveMovieRequest,
    movie_service: MovieService = Depends(get_movie_service),
):
    """
    Create or replace a movie.

    Parameters:
        - slug: Optional; derived from the title when empty
        - title, poster_url, synopsis, premium
        - links, screenshots: list or newline-separated text

    Raises:
        - 400: No usable slug
        - 403: Bad or missing admin token
    """
    movie = await movie_service.save(
        title=request.title,
        slug=request.slug,
        poster_url=request.poster_url,
        synopsis=request.synopsis,
        links=_as_text(request.links),
        screenshots=_as_text(request.screenshots),
        premium=request.premium,
    )
    return MovieResponse.from_record(movie)


@router.delete("/movies/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_movie(slug: str, movie_service: MovieService = Depends(get_movie_service)):
    """
    Delete a movie. Deleting a missing movie succeeds.
    """
    await movie_service.delete(slug)


@router.get("/keys", response_model=ListKeysResponse)
async def admin_list_keys(gate: AccessGate = Depends(get_access_gate)):
    """
    List all premium keys, expired ones included.
    """
    keys = await gate.list_keys()
    return ListKeysResponse(keys=[PremiumKeyResponse.from_key(k) for k in keys])


@router.post("/keys", response_model=PremiumKeyResponse, status_code=status.HTTP_201_CREATED)
async def admin_generate_key(request: GenerateKeyRequest, gate: AccessGate = Depends(get_access_gate)):
    """
    Issue a premium key.

    Parameters:
        - duration_days: Validity in days from now
        - owner: Who the key was issued to

    Returns:
        - key: 'PREM-' prefixed key string
        - expiry_date
    """
    premium_key = await gate.generate_key(request.duration_days, request.owner)
    return PremiumKeyResponse.from_key(premium_key)


@router.delete("/keys/{key}", response_model=DeleteKeyResponse)
async def admin_delete_key(key: str, gate: AccessGate = Depends(get_access_gate)):
    """
    Delete a premium key. Every session bound to it stops being authorized.

    Raises:
        - 404: Key not found
    """
    deleted = await gate.delete_key(key)
    if not deleted:
        raise NotFoundError("Key not found")
    return DeleteKeyResponse(deleted=True)


@router.put("/scripts/{name}", response_model=SaveScriptResponse)
async def admin_save_script(
    name: str,
    request: SaveScriptRequest,
    script_service: ScriptService = Depends(get_script_service),
):
    """
    Create or overwrite a script.

    Raises:
        - 400: Invalid script name
    """
    chunks = await script_service.save(name, request.content)
    return SaveScriptResponse(name=name, size=len(request.content), chunks=chunks)


@router.delete("/scripts/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_script(name: str, script_service: ScriptService = Depends(get_script_service)):
    """
    Delete a script. Deleting a missing script succeeds.
    """
    await script_service.delete(name)
