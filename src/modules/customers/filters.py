"""Criteria builder: raw query inputs -> ``SearchCriteria``.

Turns the loosely typed values that arrive with a request (optional
strings, repeated sort expressions, page/size) into a validated,
immutable ``SearchCriteria``:

- strings are trimmed; blank means "not specified";
- date bounds must be ISO-8601 local date-times
  (``YYYY-MM-DDTHH:MM[:SS[.ffffff]]``, no offset), otherwise
  ``InvalidDateFormat`` is raised;
- sort expressions are ``"<field>"`` or ``"<field>,<asc|desc>"``;
  anything else is dropped without error;
- page/size default to 0/20 and are clamped by the criteria model.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable, Optional

import structlog

from modules.customers.criteria import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    SORT_FIELD_ALIASES,
    SearchCriteria,
    SortDirection,
    SortField,
    SortKey,
)
from modules.customers.exceptions import InvalidDateFormat

logger = structlog.get_logger(__name__)

_SORT_WITH_DIRECTION = re.compile(
    r"^\s*([a-zA-Z]+)\s*,\s*(asc|desc)\s*$", re.IGNORECASE
)
_LOCAL_DATETIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?$"
)


def sanitize(value: Optional[str]) -> Optional[str]:
    """Trim *value*; blank or ``None`` becomes ``None``."""
    if value is None or not value.strip():
        return None
    return value.strip()


def normalize_sort_field(name: str) -> Optional[SortField]:
    """Map a case-insensitive field name or alias to its canonical form."""
    key = name.strip().lower()
    if key in SORT_FIELD_ALIASES:
        return SORT_FIELD_ALIASES[key]
    try:
        return SortField(key)
    except ValueError:
        return None


def parse_sort_expression(expression: Optional[str]) -> Optional[SortKey]:
    """Parse one sort expression, or return ``None`` if it is unusable."""
    if expression is None or not expression.strip():
        return None

    match = _SORT_WITH_DIRECTION.match(expression)
    if match:
        field_name, direction = match.group(1), SortDirection(match.group(2).lower())
    else:
        field_name, direction = expression, SortDirection.ASC

    field = normalize_sort_field(field_name)
    if field is None:
        logger.debug("customer.sort.dropped", expression=expression)
        return None
    return SortKey(field=field, direction=direction)


def parse_sort_expressions(expressions: Optional[Iterable[Optional[str]]]) -> tuple[SortKey, ...]:
    """Parse sort expressions, keeping input order and skipping bad entries."""
    if not expressions:
        return ()
    keys = (parse_sort_expression(expr) for expr in expressions)
    return tuple(key for key in keys if key is not None)


def parse_datetime(value: Optional[str], field: str) -> Optional[datetime]:
    """Parse an ISO-8601 local date-time; blank means "no bound".

    Raises:
        InvalidDateFormat: the value is present but not a valid date-time.
    """
    cleaned = sanitize(value)
    if cleaned is None:
        return None
    if not _LOCAL_DATETIME.match(cleaned):
        raise InvalidDateFormat(field, value)
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError as exc:
        raise InvalidDateFormat(field, value) from exc


def build_search_criteria(
    search: Optional[str] = None,
    name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    country: Optional[str] = None,
    zip_code: Optional[str] = None,
    created_after: Optional[str] = None,
    created_before: Optional[str] = None,
    updated_after: Optional[str] = None,
    updated_before: Optional[str] = None,
    sort: Optional[Iterable[Optional[str]]] = None,
    page: Optional[int] = None,
    size: Optional[int] = None,
) -> SearchCriteria:
    """Build ``SearchCriteria`` from raw request values.

    Date bounds are parsed in argument order and the first invalid one
    raises ``InvalidDateFormat``.
    """
    return SearchCriteria(
        search_text=sanitize(search),
        name=sanitize(name),
        email=sanitize(email),
        phone=sanitize(phone),
        city=sanitize(city),
        state=sanitize(state),
        country=sanitize(country),
        zip_code=sanitize(zip_code),
        created_after=parse_datetime(created_after, "createdAfter"),
        created_before=parse_datetime(created_before, "createdBefore"),
        updated_after=parse_datetime(updated_after, "updatedAfter"),
        updated_before=parse_datetime(updated_before, "updatedBefore"),
        sort_keys=parse_sort_expressions(sort),
        page=DEFAULT_PAGE if page is None else page,
        size=DEFAULT_PAGE_SIZE if size is None else size,
    )
