"""Entry point for the Portal service."""

import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import get_logger, setup_logging
from portal.config import DEFAULT_ADMIN_TOKEN, PortalSettings
from portal.exceptions import (
    ForbiddenError,
    InvalidNameError,
    NotFoundError,
    PortalException,
    UpstreamFetchError,
    ValueTooLargeError,
)
from portal.kv_store import KVStore, create_store, utc_now
from portal.routes import admin_router, movie_router, premium_router, script_router, stream_router
from portal.services.access_gate import AccessGate
from portal.services.movie_service import MovieService
from portal.services.script_service import ScriptService
from portal.services.stream_service import StreamService, build_upstream_client

logger = get_logger("portal")


def _request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', 'unknown')


def _error(status_code: int, detail: str, code: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail, "code": code, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map portal exceptions to JSON error responses.
    """

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.warning(f"Not found: {exc} [request_id={_request_id(request)}] path={request.url.path}")
        return _error(status.HTTP_404_NOT_FOUND, str(exc), "NOT_FOUND")

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError):
        logger.warning(f"Forbidden [request_id={_request_id(request)}] path={request.url.path}")
        return _error(status.HTTP_403_FORBIDDEN, "Forbidden", "FORBIDDEN")

    @app.exception_handler(UpstreamFetchError)
    async def upstream_fetch_handler(request: Request, exc: UpstreamFetchError):
        logger.error(
            f"Upstream fetch error: {exc} upstream_status={exc.upstream_status} "
            f"[request_id={_request_id(request)}] path={request.url.path}"
        )
        return _error(
            status.HTTP_502_BAD_GATEWAY,
            str(exc),
            "UPSTREAM_FETCH_FAILED",
            upstream_status=exc.upstream_status,
        )

    @app.exception_handler(ValueTooLargeError)
    async def value_too_large_handler(request: Request, exc: ValueTooLargeError):
        logger.warning(f"Value too large: {exc} [request_id={_request_id(request)}] path={request.url.path}")
        return _error(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, str(exc), "VALUE_TOO_LARGE")

    @app.exception_handler(InvalidNameError)
    async def invalid_name_handler(request: Request, exc: InvalidNameError):
        logger.warning(f"Invalid name: {exc} [request_id={_request_id(request)}] path={request.url.path}")
        return _error(status.HTTP_400_BAD_REQUEST, str(exc), "INVALID_NAME")

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.warning(f"Bad request: {exc} [request_id={_request_id(request)}] path={request.url.path}")
        return _error(status.HTTP_400_BAD_REQUEST, str(exc), "BAD_REQUEST")

    @app.exception_handler(PortalException)
    async def portal_exception_handler(request: Request, exc: PortalException):
        logger.error(
            f"Portal exception: {exc} [request_id={_request_id(request)}] path={request.url.path}",
            exc_info=True
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "INTERNAL_ERROR")

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unexpected error [request_id={_request_id(request)}] path={request.url.path}",
            exc_info=exc
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "INTERNAL_ERROR")


def create_app(
    settings: Optional[PortalSettings] = None,
    store: Optional[KVStore] = None,
    clock: Callable[[], datetime] = utc_now,
    upstream_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Build the portal application.

    Every collaborator can be injected; anything omitted is built from
    settings (which default to the environment).
    """
    if settings is None:
        settings = PortalSettings.from_env()
    if store is None:
        store = create_store(settings.store_backend, settings.database_path, clock)
    if upstream_client is None:
        upstream_client = build_upstream_client(settings.upstream_connect_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Portal starting up [store={type(store).__name__}]")
        try:
            yield
        finally:
            logger.info("Portal shutting down...")
            await upstream_client.aclose()
            await store.close()

    app = FastAPI(
        title="Reelbox Portal",
        description="Movie catalog, script hosting and premium streaming over a key-value store",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.access_gate = AccessGate(store, settings.admin_token, clock=clock)
    app.state.movie_service = MovieService(store)
    app.state.script_service = ScriptService(store)
    app.state.stream_service = StreamService(upstream_client)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Log every request with a generated request id.
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        logger.info(f"Request started: {request.method} {request.url.path} [request_id={request_id}]")

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
        )

        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)

    app.include_router(movie_router)
    app.include_router(admin_router)
    app.include_router(premium_router)
    app.include_router(script_router)
    app.include_router(stream_router)

    @app.get("/")
    async def root():
        """
        Root endpoint for health check.
        """
        return {"message": "Reelbox Portal API", "status": "running"}

    @app.get("/health")
    async def health_check():
        """
        Liveness probe.
        """
        return {"status": "healthy", "service": "portal"}

    return app


def main() -> None:
    """
    Start the portal with uvicorn.
    """
    setup_logging('portal')
    settings = PortalSettings.from_env()
    if settings.admin_token == DEFAULT_ADMIN_TOKEN:
        logger.warning("ADMIN_TOKEN is not set; using the built-in default token")

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
