"""Service layer for business logic."""

from portal.services.access_gate import AccessGate, ActivationResult, PremiumAccess
from portal.services.movie_service import MovieService
from portal.services.script_service import ScriptService
from portal.services.stream_service import StreamService

__all__ = [
    "AccessGate",
    "ActivationResult",
    "PremiumAccess",
    "MovieService",
    "ScriptService",
    "StreamService",
]
