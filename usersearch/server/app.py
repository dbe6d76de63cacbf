"""FastAPI application exposing the record search endpoint."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from usersearch.config import ServerSettings
from usersearch.logging import logger
from usersearch.server.routes import router
from usersearch.services.exceptions import (
    AccessTokenRejected,
    BadQueryParameter,
    RecordStoreError,
)
from usersearch.services.search import SearchService
from usersearch.services.store import RecordStore

BAD_ACCESS_TOKEN = "ErrorBadAccessToken"
INTERNAL_ERROR = "ErrorInternal"


async def _bad_query_handler(request: Request, exc: BadQueryParameter) -> JSONResponse:
    logger.info(
        "search_request_rejected",
        reason=exc.reason.value,
        detail=exc.detail,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"Error": exc.reason.value},
    )


async def _access_denied_handler(request: Request, exc: AccessTokenRejected) -> JSONResponse:
    logger.warning("search_access_denied", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"Error": BAD_ACCESS_TOKEN},
    )


async def _store_failure_handler(request: Request, exc: RecordStoreError) -> JSONResponse:
    logger.error("record_store_failed", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"Error": INTERNAL_ERROR},
    )


def create_app(settings: ServerSettings | None = None, store: RecordStore | None = None) -> FastAPI:
    """Build the application around a record store.

    When no store is given one is created from ``settings.dataset_path``; it
    loads lazily on the first search so a broken dataset surfaces as a 500.
    """

    settings = settings or ServerSettings()
    store = store or RecordStore(settings.dataset_path)

    app = FastAPI(title="User Search API")
    app.state.settings = settings
    app.state.store = store
    app.state.search_service = SearchService(store)

    app.add_exception_handler(BadQueryParameter, _bad_query_handler)
    app.add_exception_handler(AccessTokenRejected, _access_denied_handler)
    app.add_exception_handler(RecordStoreError, _store_failure_handler)
    app.include_router(router)
    return app


__all__ = ["BAD_ACCESS_TOKEN", "INTERNAL_ERROR", "create_app"]
