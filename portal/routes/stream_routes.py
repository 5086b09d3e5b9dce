"""Premium video stream proxy route."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from portal.deps import get_movie_service, get_premium_access, get_stream_service
from portal.exceptions import ForbiddenError, NotFoundError
from portal.schemas.common import ErrorResponse
from portal.services.access_gate import PremiumAccess
from portal.services.movie_service import MovieService
from portal.services.stream_service import StreamService

router = APIRouter(prefix="/stream", tags=["Stream"])


@router.get(
    "/{slug}",
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def stream_movie(
    slug: str,
    request: Request,
    access: PremiumAccess = Depends(get_premium_access),
    movie_service: MovieService = Depends(get_movie_service),
    stream_service: StreamService = Depends(get_stream_service),
):
    """
    Relay the movie's video from its first link, forwarding the Range header.

    Returns:
        - 200/206 with the upstream body and range headers

    Raises:
        - 403: No valid premium session
        - 404: Movie not found or has no link
        - 502: Upstream fetch failed
    """
    if not access.authorized:
        raise ForbiddenError()

    movie = await movie_service.get(slug)
    if not movie.links:
        raise NotFoundError("Movie has no stream source")

    upstream = await stream_service.open(movie.links[0], request.headers.get("range"))

    return StreamingResponse(
        upstream.body,
        status_code=upstream.status_code,
        headers=upstream.headers,
    )
