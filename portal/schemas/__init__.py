"""Pydantic schemas for API requests and responses."""

from portal.schemas.common import ErrorResponse
from portal.schemas.keys import (
    DeleteKeyResponse,
    GenerateKeyRequest,
    ListKeysResponse,
    PremiumKeyResponse,
)
from portal.schemas.movies import (
    AdminMovieListResponse,
    MoviePageResponse,
    MovieResponse,
    MovieSummary,
    SaveMovieRequest,
)
from portal.schemas.premium import ActivateRequest, ActivateResponse, PremiumStatusResponse
from portal.schemas.scripts import (
    ListScriptsResponse,
    SaveScriptRequest,
    SaveScriptResponse,
    ScriptResponse,
)

__all__ = [
    "ErrorResponse",
    "DeleteKeyResponse",
    "GenerateKeyRequest",
    "ListKeysResponse",
    "PremiumKeyResponse",
    "AdminMovieListResponse",
    "MoviePageResponse",
    "MovieResponse",
    "MovieSummary",
    "SaveMovieRequest",
    "ActivateRequest",
    "ActivateResponse",
    "PremiumStatusResponse",
    "ListScriptsResponse",
    "SaveScriptRequest",
    "SaveScriptResponse",
    "ScriptResponse",
]
