"""Search criteria model for customer queries.

- ``SortField`` / ``SortDirection`` / ``SortKey``: one ordering rule.
- ``SearchCriteria``: immutable description of one query (free text,
  per-field filters, date bounds, sort keys, page/size).  Pagination is
  clamped on construction, never rejected.
- ``PageResult``: one page of results plus the total match count.

Criteria are plain Pydantic models: build them with keyword arguments or
through ``modules.customers.filters.build_search_criteria``, which parses
raw request strings.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

FIELD_FILTERS = ("name", "email", "phone", "city", "state", "country", "zip_code")
DATE_FILTERS = ("created_after", "created_before", "updated_after", "updated_before")


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SortField(StrEnum):
    """Closed set of sortable fields, in their canonical (lower-case) form."""

    NAME = "name"
    EMAIL = "email"
    PHONE = "phone"
    CITY = "city"
    STATE = "state"
    COUNTRY = "country"
    ZIPCODE = "zipcode"
    CREATEDAT = "createdat"
    UPDATEDAT = "updatedat"


SORT_FIELD_ALIASES = {
    "zip": SortField.ZIPCODE,
    "created": SortField.CREATEDAT,
    "updated": SortField.UPDATEDAT,
}


class SortKey(BaseModel):
    """A (field, direction) pair used in multi-key ordering."""

    model_config = ConfigDict(frozen=True)

    field: SortField
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC


class SearchCriteria(BaseModel):
    """Immutable, validated description of one customer query.

    ``page`` is clamped to ``>= 0`` and ``size`` to ``[1, 100]``, so callers
    never see an out-of-range value reflected back.  Text filters are
    trimmed; a blank one is stored as ``None``.
    """

    model_config = ConfigDict(frozen=True)

    search_text: Optional[str] = None

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None

    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    updated_after: Optional[datetime] = None
    updated_before: Optional[datetime] = None

    sort_keys: tuple[SortKey, ...] = ()

    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE

    @field_validator("search_text", *FIELD_FILTERS)
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("page")
    @classmethod
    def clamp_page(cls, v: int) -> int:
        return max(0, v)

    @field_validator("size")
    @classmethod
    def clamp_size(cls, v: int) -> int:
        return max(1, min(MAX_PAGE_SIZE, v))

    # ------------------------------------------------------------------
    # Derived predicates
    # ------------------------------------------------------------------

    @property
    def has_search_text(self) -> bool:
        return self.search_text is not None

    @property
    def has_field_filters(self) -> bool:
        return any(getattr(self, name) is not None for name in FIELD_FILTERS)

    @property
    def has_date_filters(self) -> bool:
        return any(getattr(self, name) is not None for name in DATE_FILTERS)

    @property
    def has_sorting(self) -> bool:
        return bool(self.sort_keys)

    @property
    def has_any_filters(self) -> bool:
        return (
            self.has_search_text
            or self.has_field_filters
            or self.has_date_filters
            or self.has_sorting
        )


T = TypeVar("T")


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of query results.

    ``total_elements`` counts every match before pagination.
    """

    content: List[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)
