"""Pydantic models shared by the search service and its client."""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field


class OrderBy(IntEnum):
    DESC = -1
    AS_IS = 0
    ASC = 1


class OrderField(str, Enum):
    ID = "Id"
    AGE = "Age"
    NAME = "Name"


class ErrorReason(str, Enum):
    """Reason codes carried in the ``Error`` field of a 400 response."""

    BAD_ORDER_FIELD = "ErrorBadOrderField"
    BAD_ORDER_BY = "ErrorBadOrderBy"
    BAD_LIMIT = "ErrorBadLimit"
    BAD_OFFSET = "ErrorBadOffset"


class UserRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    age: int = Field(alias="Age", ge=0)
    about: str = Field(alias="About")
    gender: str = Field(alias="Gender")


class SearchRequest(BaseModel):
    limit: int
    offset: int
    query: str = ""
    order_field: str = ""
    order_by: int = OrderBy.AS_IS


class SearchResponse(BaseModel):
    users: list[UserRecord] = Field(default_factory=list)
    next_page: bool = False


class ErrorBody(BaseModel):
    error: str = Field(alias="Error")


__all__ = [
    "ErrorBody",
    "ErrorReason",
    "OrderBy",
    "OrderField",
    "SearchRequest",
    "SearchResponse",
    "UserRecord",
]
