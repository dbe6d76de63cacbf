"""Domain-specific exceptions."""

from __future__ import annotations

from usersearch.domain.models import ErrorReason


class SearchError(Exception):
    pass


class LocalValidationError(SearchError):
    """Request rejected before any call was issued."""


class TransportError(SearchError):
    """Connection could not be established or the response could not be read."""


class SearchTimeoutError(TransportError):
    pass


class AuthError(SearchError):
    pass


class SearchServerError(SearchError):
    pass


class BadOrderFieldError(SearchError):
    def __init__(self, order_field: str) -> None:
        super().__init__(f"order field {order_field!r} invalid")
        self.order_field = order_field


class UnknownBadRequestError(SearchError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"unknown bad request error: {reason}")
        self.reason = reason


class UnknownStatusError(SearchError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"unknown error, status {status_code}")
        self.status_code = status_code


class ResponseDecodeError(SearchError):
    pass


class BadQueryParameter(ValueError):
    """Raised by the query engine for requests the caller got wrong."""

    def __init__(self, reason: ErrorReason, detail: str) -> None:
        super().__init__(detail)
        self.reason = reason
        self.detail = detail


class RecordStoreError(RuntimeError):
    """Raised when the backing dataset cannot be read or decoded."""


class AccessTokenRejected(PermissionError):
    pass


__all__ = [
    "AccessTokenRejected",
    "AuthError",
    "BadOrderFieldError",
    "BadQueryParameter",
    "LocalValidationError",
    "RecordStoreError",
    "ResponseDecodeError",
    "SearchError",
    "SearchServerError",
    "SearchTimeoutError",
    "TransportError",
    "UnknownBadRequestError",
    "UnknownStatusError",
]
