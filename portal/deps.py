"""FastAPI dependencies resolving services from application state."""

from typing import Optional

from fastapi import Depends, Header, Query, Request

from common.constants import SESSION_COOKIE_NAME
from portal.exceptions import ForbiddenError
from portal.services.access_gate import AccessGate, PremiumAccess
from portal.services.movie_service import MovieService
from portal.services.script_service import ScriptService
from portal.services.stream_service import StreamService


def get_access_gate(request: Request) -> AccessGate:
    return request.app.state.access_gate


def get_movie_service(request: Request) -> MovieService:
    return request.app.state.movie_service


def get_script_service(request: Request) -> ScriptService:
    return request.app.state.script_service


def get_stream_service(request: Request) -> StreamService:
    return request.app.state.stream_service


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(SESSION_COOKIE_NAME)


async def get_premium_access(
    session_token: Optional[str] = Depends(get_session_token),
    gate: AccessGate = Depends(get_access_gate),
) -> PremiumAccess:
    return await gate.check_premium_access(session_token)


async def require_admin(
    token: Optional[str] = Query(None),
    x_admin_token: Optional[str] = Header(None),
    gate: AccessGate = Depends(get_access_gate),
) -> None:
    """
    Admin gate. The token comes from the `token` query parameter or the
    X-Admin-Token header, the query parameter taking precedence.

    Raises:
        ForbiddenError: 403 if the token is missing or wrong
    """
    supplied = token if token is not None else x_admin_token
    if not gate.check_admin(supplied):
        raise ForbiddenError()
