from __future__ import annotations

import secrets
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from usersearch.config import ServerSettings
from usersearch.domain.models import UserRecord
from usersearch.logging import logger
from usersearch.services.exceptions import AccessTokenRejected
from usersearch.services.search import SearchService
from usersearch.services.store import RecordStore

router = APIRouter()
bearer_scheme = HTTPBearer(auto_error=False)


def get_search_service(request: Request) -> SearchService:
    return request.app.state.search_service


def require_access_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> None:
    settings: ServerSettings = request.app.state.settings
    if settings.access_token is None:
        return
    expected = settings.access_token.get_secret_value()
    presented = credentials.credentials if credentials else ""
    if not secrets.compare_digest(presented.encode(), expected.encode()):
        raise AccessTokenRejected("bad access token")


@router.get(
    "/search",
    response_model=list[UserRecord],
    response_model_by_alias=True,
    dependencies=[Depends(require_access_token)],
)
def search_users(
    limit: str | None = None,
    offset: str | None = None,
    query: str | None = None,
    order_field: str | None = None,
    order_by: str | None = None,
    service: SearchService = Depends(get_search_service),
) -> list[UserRecord]:
    params = {
        "limit": limit,
        "offset": offset,
        "query": query,
        "order_field": order_field,
        "order_by": order_by,
    }
    users = service.search(params)
    logger.info(
        "search_request_served",
        query=query or "",
        order_field=order_field or "",
        order_by=order_by,
        limit=limit,
        offset=offset,
        returned=len(users),
    )
    return users


@router.get("/health")
def health(request: Request) -> dict[str, Any]:
    store: RecordStore = request.app.state.store
    return {
        "status": "healthy",
        "records": len(store.records()) if store.loaded else None,
    }
