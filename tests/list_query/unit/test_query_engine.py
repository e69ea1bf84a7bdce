"""List query engine tests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

import pytest
from qa_coverage_tracker.list_query import (
    SortDirection,
    apply_filters,
    paginate,
    sort_items,
    total_pages,
    unique_values,
)


@dataclass(frozen=True)
class Item:
    name: str | None
    status: str = ""
    score: int | None = None


FRUIT = [Item("Banana", "open", 2), Item("apple", "closed", 10), Item("Cherry", "open", None)]


def test_blank_search_matches_everything() -> None:
    assert apply_filters(FRUIT, "   ", {}, ("name",)) == FRUIT


def test_search_is_case_insensitive_substring_over_any_field() -> None:
    result = apply_filters(FRUIT, "AN", {}, ("name", "status"))

    assert [item.name for item in result] == ["Banana"]


def test_filters_combine_with_search_and_ignore_empty_values() -> None:
    result = apply_filters(FRUIT, "e", {"status": "open", "score": ""}, ("name",))

    assert [item.name for item in result] == ["Cherry"]


def test_filter_compares_text_form_of_numbers() -> None:
    assert apply_filters(FRUIT, "", {"score": "10"}, ()) == [FRUIT[1]]


def test_custom_filter_predicate_is_used_for_named_filter() -> None:
    at_least = {"min_score": lambda item, value: (item.score or 0) >= int(value)}

    result = apply_filters(FRUIT, "", {"min_score": "3"}, (), at_least)

    assert result == [FRUIT[1]]


def test_filtering_does_not_modify_input() -> None:
    items = list(FRUIT)
    apply_filters(items, "zzz", {}, ("name",))
    assert items == FRUIT


def test_sort_ignores_case_and_reverses_for_descending() -> None:
    ascending = sort_items(FRUIT, "name", SortDirection.ASC)
    descending = sort_items(FRUIT, "name", SortDirection.DESC)

    assert [item.name for item in ascending] == ["apple", "Banana", "Cherry"]
    assert [item.name for item in descending] == ["Cherry", "Banana", "apple"]


def test_sort_returns_new_list_and_handles_missing_values() -> None:
    items = [Item("b"), Item(None), Item("A")]

    result = sort_items(items, "name")

    assert [item.name for item in result] == [None, "A", "b"]
    assert [item.name for item in items] == ["b", None, "A"]


def test_sort_numbers_with_missing_values_and_custom_key() -> None:
    by_score = sort_items(FRUIT, "score")
    by_length = sort_items(FRUIT, "name_length", key=lambda item: len(item.name or ""))

    assert [item.name for item in by_score] == ["Cherry", "Banana", "apple"]
    assert [item.name for item in by_length] == ["apple", "Banana", "Cherry"]


def test_sort_datetimes_chronologically() -> None:
    early = {"at": datetime(2024, 1, 1, tzinfo=UTC)}
    late = {"at": datetime(2024, 6, 1, tzinfo=UTC)}

    assert sort_items([late, early], "at") == [early, late]


def test_no_sort_column_keeps_order() -> None:
    assert sort_items(FRUIT, None) == FRUIT


@pytest.mark.parametrize(
    ("count", "page_size", "pages"), [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2)]
)
def test_total_pages_rounds_up(count: int, page_size: int, pages: int) -> None:
    assert total_pages(count, page_size) == pages


def test_paginate_slices_by_page() -> None:
    items = list(range(25))

    assert paginate(items, 1, 10) == list(range(10))
    assert paginate(items, 3, 10) == [20, 21, 22, 23, 24]
    assert paginate(items, 4, 10) == []


def test_unique_values_skip_blanks() -> None:
    items = [Item("x", "open"), Item("y", ""), Item("z", "Closed"), Item("w", "open")]

    assert unique_values(items, "status") == ["Closed", "open"]


def test_search_keeps_surrounding_spaces_of_a_non_blank_term() -> None:
    items = [Item("Red apple"), Item("Redapple"), Item("apple")]

    result = apply_filters(items, " apple", {}, ("name",))

    assert [item.name for item in result] == ["Red apple"]
