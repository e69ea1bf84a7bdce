"""Immutable search, filter, sort and page state of one listing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum

DEFAULT_PAGE_SIZE = 10


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class ListQueryState:
    """Every transition returns a new state; pages are 1-based."""

    search_term: str = ""
    field_filters: Mapping[str, str] = field(default_factory=dict)
    sort_column: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def active_filters(self) -> dict[str, str]:
        return {name: value for name, value in self.field_filters.items() if value}

    def with_search(self, search_term: str) -> ListQueryState:
        return replace(self, search_term=search_term, page=1)

    def with_filter(self, field_name: str, value: str) -> ListQueryState:
        filters = dict(self.field_filters)
        filters[field_name] = value
        return replace(self, field_filters=filters, page=1)

    def toggle_sort(self, column: str) -> ListQueryState:
        """Same column flips direction; a new column starts ascending."""
        if column == self.sort_column:
            return replace(self, sort_direction=self.sort_direction.flipped())
        return replace(self, sort_column=column, sort_direction=SortDirection.ASC)

    def go_to_page(self, page: int, total_pages: int) -> ListQueryState:
        """Move to ``page``; out-of-range requests leave the state unchanged."""
        if page < 1 or page > total_pages:
            return self
        return replace(self, page=page)

    def reset(self) -> ListQueryState:
        return ListQueryState(page_size=self.page_size)
