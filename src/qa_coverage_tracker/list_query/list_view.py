"""Stateful listing that keeps its visible page in step with the query state."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import Generic

from .query_engine import ItemT, apply_filters, paginate, sort_items, total_pages
from .query_state import DEFAULT_PAGE_SIZE, ListQueryState
from .view_profiles import ViewProfile


class ListView(Generic[ItemT]):
    """One raw list plus one query state.

    Search and filter changes recompute the matching items in raw order and
    return to page 1. Sorting reorders the current matching items, so the next
    search or filter change drops that order unless the profile keeps it.
    """

    def __init__(
        self,
        items: Iterable[ItemT],
        profile: ViewProfile,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._items = list(items)
        self._profile = profile
        self._state = ListQueryState(page_size=page_size)
        self._matching: list[ItemT] = []
        self._refresh(sort=False)

    @property
    def state(self) -> ListQueryState:
        return self._state

    @property
    def profile(self) -> ViewProfile:
        return self._profile

    @property
    def all_items(self) -> list[ItemT]:
        return list(self._items)

    @property
    def matching_items(self) -> list[ItemT]:
        """Matching items across every page, in display order."""
        return list(self._matching)

    @property
    def page_items(self) -> list[ItemT]:
        return paginate(self._matching, self._state.page, self._state.page_size)

    @property
    def total_pages(self) -> int:
        return total_pages(len(self._matching), self._state.page_size)

    def replace_items(self, items: Iterable[ItemT]) -> None:
        self._items = list(items)
        self._refresh()
        if self._state.page > max(self.total_pages, 1):
            self._state = replace(self._state, page=1)

    def search(self, term: str) -> None:
        self._state = self._state.with_search(term)
        self._refresh()

    def set_filter(self, field_name: str, value: str) -> None:
        self._profile.check_filter(field_name)
        self._state = self._state.with_filter(field_name, value)
        self._refresh()

    def toggle_sort(self, column: str) -> None:
        self._profile.check_sort(column)
        self._state = self._state.toggle_sort(column)
        self._matching = self._sorted(self._matching)

    def go_to_page(self, page: int) -> bool:
        """Return False when ``page`` is out of range and nothing changed."""
        moved = self._state.go_to_page(page, self.total_pages)
        changed = moved is not self._state
        self._state = moved
        return changed

    def reset(self) -> None:
        self._state = self._state.reset()
        self._refresh()

    def _refresh(self, *, sort: bool | None = None) -> None:
        if sort is None:
            sort = self._profile.keeps_sort_on_filter
        state = self._state
        filtered = apply_filters(
            self._items,
            state.search_term,
            state.field_filters,
            self._profile.search_fields,
            self._profile.custom_filters,
        )
        self._matching = self._sorted(filtered) if sort else filtered

    def _sorted(self, items: list[ItemT]) -> list[ItemT]:
        state = self._state
        key = self._profile.sort_keys.get(state.sort_column or "")
        return sort_items(items, state.sort_column, state.sort_direction, key)
