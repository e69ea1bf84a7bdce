"""Pure filtering, sorting and paging over in-memory listings."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date, datetime
from enum import Enum
from typing import Any, TypeVar

from .query_state import SortDirection

ItemT = TypeVar("ItemT")

SortKey = Callable[[Any], Any]
CustomFilter = Callable[[Any, str], bool]


def field_value(item: Any, field_name: str) -> Any:
    """Read a field from a mapping or an attribute from a record."""
    if isinstance(item, Mapping):
        return item.get(field_name)
    return getattr(item, field_name, None)


def as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def apply_filters(
    items: Iterable[ItemT],
    search_term: str,
    field_filters: Mapping[str, str],
    search_fields: Sequence[str],
    custom_filters: Mapping[str, CustomFilter] | None = None,
) -> list[ItemT]:
    """Keep items matching the search and every active filter.

    The search is a case-insensitive substring test over ``search_fields``; a blank
    term matches everything. A non-blank term is matched as typed, surrounding
    spaces included. Filters compare the item's text form for equality
    unless ``custom_filters`` supplies a predicate for that name. Empty filter
    values are ignored.
    """
    needle = search_term.lower() if search_term.strip() else ""
    active = {name: value for name, value in field_filters.items() if value}
    custom = custom_filters or {}

    def matches(item: ItemT) -> bool:
        if needle and not any(
            needle in as_text(field_value(item, name)).lower() for name in search_fields
        ):
            return False
        for name, expected in active.items():
            if name in custom:
                if not custom[name](item, expected):
                    return False
            elif as_text(field_value(item, name)) != expected:
                return False
        return True

    return [item for item in items if matches(item)]


def sort_items(
    items: Iterable[ItemT],
    column: str | None,
    direction: SortDirection = SortDirection.ASC,
    key: SortKey | None = None,
) -> list[ItemT]:
    """Stable sort into a new list; text ignores case and missing values sort as ''."""
    result = list(items)
    if not column:
        return result
    extract = key or (lambda item: field_value(item, column))
    return sorted(
        result,
        key=lambda item: _comparable(extract(item)),
        reverse=direction is SortDirection.DESC,
    )


def paginate(items: Sequence[ItemT], page: int, page_size: int) -> list[ItemT]:
    start = (page - 1) * page_size
    return list(items[start : start + page_size])


def total_pages(count: int, page_size: int) -> int:
    return math.ceil(count / page_size) if page_size > 0 else 0


def unique_values(items: Iterable[Any], field_name: str) -> list[str]:
    """Distinct non-empty values of one field, for filter choices."""
    values = {as_text(field_value(item, field_name)) for item in items}
    values.discard("")
    return sorted(values, key=str.lower)


def _comparable(value: Any) -> tuple[int, Any]:
    # Ranks keep mixed types orderable; None shares the text rank as ''.
    if value is None:
        return (0, "")
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return (1, int(value))
    if isinstance(value, int | float):
        return (1, value)
    if isinstance(value, datetime):
        return (2, value.timestamp())
    if isinstance(value, date):
        return (2, datetime(value.year, value.month, value.day).timestamp())
    return (0, str(value).lower())
