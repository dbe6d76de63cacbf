"""Async client for the record search endpoint."""

from __future__ import annotations

from typing import Any, Callable

import httpx
from pydantic import TypeAdapter, ValidationError

from usersearch.config import DEFAULT_MAX_PAGE_SIZE, ClientSettings
from usersearch.domain.models import (
    ErrorBody,
    ErrorReason,
    SearchRequest,
    SearchResponse,
    UserRecord,
)
from usersearch.logging import logger
from usersearch.services.exceptions import (
    AuthError,
    BadOrderFieldError,
    LocalValidationError,
    ResponseDecodeError,
    SearchError,
    SearchServerError,
    SearchTimeoutError,
    TransportError,
    UnknownBadRequestError,
    UnknownStatusError,
)

_USERS = TypeAdapter(list[UserRecord])

FailureFactory = Callable[[httpx.Response, SearchRequest], SearchError]


def _unauthorized(response: httpx.Response, request: SearchRequest) -> SearchError:
    return AuthError("bad access token")


def _server_error(response: httpx.Response, request: SearchRequest) -> SearchError:
    return SearchServerError("search server fatal error")


def _bad_request(response: httpx.Response, request: SearchRequest) -> SearchError:
    try:
        body = ErrorBody.model_validate_json(response.content)
    except ValidationError:
        return UnknownStatusError(response.status_code)
    if body.error == ErrorReason.BAD_ORDER_FIELD.value:
        return BadOrderFieldError(request.order_field)
    return UnknownBadRequestError(body.error)


_FAILURES: dict[int, FailureFactory] = {
    httpx.codes.UNAUTHORIZED: _unauthorized,
    httpx.codes.INTERNAL_SERVER_ERROR: _server_error,
    httpx.codes.BAD_REQUEST: _bad_request,
}


class SearchClient:
    """Validates requests locally, calls the service and classifies the outcome.

    Every failure is raised once as a :class:`SearchError` subclass; nothing is
    retried. Pages are capped at ``max_page_size`` and one extra record is
    requested to tell whether another page exists.
    """

    def __init__(
        self,
        url: str,
        access_token: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 1.0,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ) -> None:
        self.url = url
        self._access_token = access_token
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()
        self._timeout = timeout
        self._max_page_size = max_page_size

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, http_client: httpx.AsyncClient | None = None
    ) -> "SearchClient":
        token = settings.access_token.get_secret_value() if settings.access_token else None
        return cls(
            str(settings.url),
            token,
            http_client=http_client,
            timeout=settings.timeout_seconds,
            max_page_size=settings.max_page_size,
        )

    async def __aenter__(self) -> "SearchClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def find_users(self, request: SearchRequest) -> SearchResponse:
        if request.limit < 0:
            raise LocalValidationError("limit must be >= 0")
        if request.offset < 0:
            raise LocalValidationError("offset must be >= 0")

        limit = min(request.limit, self._max_page_size)
        params = {
            "limit": str(limit + 1),
            "offset": str(request.offset),
            "query": request.query,
            "order_field": request.order_field,
            "order_by": str(int(request.order_by)),
        }
        headers = {}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"

        try:
            response = await self._client.get(
                self.url, params=params, headers=headers, timeout=self._timeout
            )
        except httpx.TimeoutException as exc:
            logger.warning("search_request_timeout", url=self.url, timeout=self._timeout)
            raise SearchTimeoutError(f"timeout for {self.url} after {self._timeout}s") from exc
        except httpx.RequestError as exc:
            logger.warning("search_request_failed", url=self.url, error=str(exc))
            raise TransportError(f"search request failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            factory = _FAILURES.get(response.status_code)
            if factory is None:
                raise UnknownStatusError(response.status_code)
            raise factory(response, request)

        try:
            users = _USERS.validate_json(response.content)
        except ValidationError as exc:
            raise ResponseDecodeError(f"cannot unpack result json: {exc}") from exc

        if len(users) > limit:
            return SearchResponse(users=users[:limit], next_page=True)
        return SearchResponse(users=users, next_page=False)


__all__ = ["SearchClient"]
