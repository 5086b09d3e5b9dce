"""API routes package."""

from portal.routes.admin_routes import router as admin_router
from portal.routes.movie_routes import router as movie_router
from portal.routes.premium_routes import router as premium_router
from portal.routes.script_routes import router as script_router
from portal.routes.stream_routes import router as stream_router

__all__ = ["admin_router", "movie_router", "premium_router", "script_router", "stream_router"]
