"""
Turns raw list parameters into a bounded, deterministic query.

Nothing here raises for bad input: unknown statuses, sort fields and orders
fall back to defaults and numeric ranges are clamped.
"""
import math
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from app.core.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    FALLBACK_SORT_FIELD,
    ITEM_STATUSES,
    MAX_PAGE_SIZE,
    SORTABLE_FIELDS,
)

SEARCH_FIELDS = ("sku", "name", "category", "supplier")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _field_value(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


@dataclass(frozen=True)
class ItemFilter:
    search: Optional[str] = None
    status: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.search and not self.status

    def matches(self, record: Any) -> bool:
        if self.status and _field_value(record, "status") != self.status:
            return False
        if self.search:
            needle = self.search.lower()
            return any(
                needle in str(_field_value(record, name) or "").lower()
                for name in SEARCH_FIELDS
            )
        return True


@dataclass(frozen=True)
class ListQuery:
    filter: ItemFilter = field(default_factory=ItemFilter)
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: str = DEFAULT_SORT_ORDER
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def sort_column(self) -> str:
        return SORTABLE_FIELDS[self.sort_field]

    @property
    def descending(self) -> bool:
        return self.sort_direction == "desc"


def _single(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def parse_int(value: Any, default: int) -> int:
    """Leading-integer parse: "3", " 3abc" and 3.7 all give 3; junk gives ``default``."""
    value = _single(value)
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def plan_list_query(params: Mapping[str, Any]) -> ListQuery:
    search = _single(params.get("search"))
    search = str(search) if search is not None else ""

    status = _single(params.get("status"))
    if status not in ITEM_STATUSES:
        status = None

    page = max(1, parse_int(params.get("page"), DEFAULT_PAGE))
    page_size = parse_int(params.get("pageSize"), DEFAULT_PAGE_SIZE)
    page_size = max(1, min(MAX_PAGE_SIZE, page_size))

    sort = _single(params.get("sort"))
    if sort is None:
        sort = DEFAULT_SORT_FIELD
    elif sort not in SORTABLE_FIELDS:
        # An explicit but unknown sort key lands on updatedAt, not the default.
        sort = FALLBACK_SORT_FIELD

    order = _single(params.get("order"))
    if order is None:
        order = DEFAULT_SORT_ORDER
    direction = "asc" if str(order).lower() == "asc" else "desc"

    return ListQuery(
        filter=ItemFilter(search=search or None, status=status),
        sort_field=sort,
        sort_direction=direction,
        page=page,
        page_size=page_size,
    )


def page_count(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size > 0 else 0


__all__ = ["ItemFilter", "ListQuery", "SEARCH_FIELDS", "page_count", "parse_int", "plan_list_query"]
