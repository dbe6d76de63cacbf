"""Query engine behind the search endpoint: validate, filter, order, paginate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from usersearch.domain.models import ErrorReason, OrderBy, OrderField, UserRecord
from usersearch.services.exceptions import BadQueryParameter
from usersearch.services.store import RecordStore

SortKey = Callable[[UserRecord], object]

_SORT_KEYS: dict[str, SortKey] = {
    OrderField.ID.value: lambda user: user.id,
    OrderField.AGE.value: lambda user: user.age,
    OrderField.NAME.value: lambda user: user.name,
    "": lambda user: user.name,
}


@dataclass(slots=True, frozen=True)
class SearchQuery:
    limit: int
    offset: int
    query: str
    order_field: str
    order_by: OrderBy


def _parse_int(raw: str | None, reason: ErrorReason, name: str) -> int:
    try:
        return int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise BadQueryParameter(reason, f"{name} must be an integer, got {raw!r}") from exc


def parse_query(params: Mapping[str, str | None]) -> SearchQuery:
    """Turn loosely-typed wire parameters into a :class:`SearchQuery`.

    Stops at the first invalid parameter, in wire order.
    """

    limit = _parse_int(params.get("limit"), ErrorReason.BAD_LIMIT, "limit")
    if limit < 0:
        raise BadQueryParameter(ErrorReason.BAD_LIMIT, "limit must be >= 0")

    offset = _parse_int(params.get("offset"), ErrorReason.BAD_OFFSET, "offset")
    if offset < 0:
        raise BadQueryParameter(ErrorReason.BAD_OFFSET, "offset must be >= 0")

    query = params.get("query") or ""
    order_field = params.get("order_field") or ""

    raw_order_by = _parse_int(params.get("order_by"), ErrorReason.BAD_ORDER_BY, "order_by")
    try:
        order_by = OrderBy(raw_order_by)
    except ValueError as exc:
        raise BadQueryParameter(
            ErrorReason.BAD_ORDER_BY, f"order_by must be one of -1, 0, 1, got {raw_order_by}"
        ) from exc

    return SearchQuery(
        limit=limit,
        offset=offset,
        query=query,
        order_field=order_field,
        order_by=order_by,
    )


class SearchService:
    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def search(self, params: Mapping[str, str | None]) -> list[UserRecord]:
        return self.execute(parse_query(params))

    def execute(self, query: SearchQuery) -> list[UserRecord]:
        found = [
            user
            for user in self._store.records()
            if query.query in user.name or query.query in user.about
        ]

        if query.order_by is not OrderBy.AS_IS:
            key = _SORT_KEYS.get(query.order_field)
            if key is None:
                raise BadQueryParameter(
                    ErrorReason.BAD_ORDER_FIELD,
                    f"cannot order by {query.order_field!r}",
                )
            found.sort(key=key, reverse=query.order_by is OrderBy.DESC)

        return found[query.offset:][: query.limit]


__all__ = ["SearchQuery", "SearchService", "parse_query"]
