"""Bulk import pipeline tests."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from qa_coverage_tracker.bulk_import import ImportOutcome, ImportOutcomeBuilder, import_all
from qa_coverage_tracker.testcase_conversion import convert_rows

NOW = datetime(2024, 5, 1, tzinfo=UTC)
DESCRIPTION = "A description that is long enough"


def _records(*titles: str, description: str = DESCRIPTION):
    rows = [{"Test Case Title": title, "Description": description} for title in titles]
    return convert_rows(rows, project_id=1, default_tester_id=2, testers=(), now=NOW)


def _assert_counts_add_up(outcome: ImportOutcome) -> None:
    assert outcome.success_count + outcome.error_count == outcome.total_rows


def test_valid_rows_are_created_in_order(store_factory) -> None:
    store = store_factory()

    outcome = import_all(_records("First case", "Second case"), store)

    assert outcome == ImportOutcome(total_rows=2, success_count=2, error_count=0)
    assert outcome.success is True
    assert [payload["title"] for payload in store.created] == ["First case", "Second case"]
    assert store.calls == ["list:1", "create:First case", "list:1", "create:Second case"]


def test_short_title_fails_without_backend_call(store_factory) -> None:
    store = store_factory()

    outcome = import_all(_records("Abcd"), store)

    assert outcome.errors == (
        "Row 2: Title is required and must be at least 5 characters long",
    )
    assert outcome.success is False
    assert store.calls == []


def test_five_character_title_passes(store_factory) -> None:
    store = store_factory()

    outcome = import_all(_records("Abcde"), store)

    assert outcome.success_count == 1


def test_short_description_is_reported(store_factory) -> None:
    store = store_factory()

    outcome = import_all(_records("Valid title", description="too short"), store)

    assert outcome.errors == (
        "Row 2: Description is required and must be at least 10 characters long",
    )
    assert store.calls == []


def test_duplicate_in_same_file_is_flagged_on_later_row(store_factory) -> None:
    store = store_factory()

    outcome = import_all(_records("Login test", "login TEST"), store)

    assert outcome.success_count == 1
    assert outcome.error_count == 1
    assert outcome.errors == ()
    assert outcome.duplicates == ('Row 3: Test case "login TEST" already exists',)
    _assert_counts_add_up(outcome)


def test_existing_backend_title_is_a_duplicate(store_factory) -> None:
    store = store_factory(existing_titles=("Checkout Flow",))

    outcome = import_all(_records("checkout flow"), store)

    assert outcome.duplicates == ('Row 2: Test case "checkout flow" already exists',)
    assert store.created == []


def test_create_failure_is_recorded_and_import_continues(store_factory) -> None:
    store = store_factory(fail_titles=("Broken case",))

    outcome = import_all(_records("Broken case", "Healthy case"), store)

    assert outcome.errors == ("Row 2: Failed to create test case - backend said no",)
    assert outcome.success_count == 1
    _assert_counts_add_up(outcome)


def test_failed_duplicate_lookup_still_attempts_create(store_factory, caplog) -> None:
    store = store_factory(fail_lookup=True)

    with caplog.at_level(logging.WARNING, logger="qa_coverage_tracker.bulk_import"):
        outcome = import_all(_records("Lookup fails"), store)

    assert outcome.success_count == 1
    assert store.calls == ["list:1", "create:Lookup fails"]
    assert "Error checking for duplicates" in caplog.text


def test_mixed_rows_keep_counts_consistent(store_factory) -> None:
    store = store_factory(existing_titles=("Already there",), fail_titles=("Will fail",))

    outcome = import_all(
        _records("Good one", "Bad", "Already there", "Will fail", "Good two"), store
    )

    assert outcome.total_rows == 5
    assert outcome.success_count == 2
    assert outcome.error_count == 3
    assert [message.split(":")[0] for message in outcome.errors] == ["Row 3", "Row 5"]
    assert outcome.duplicates == ('Row 4: Test case "Already there" already exists',)
    _assert_counts_add_up(outcome)


def test_empty_input_is_a_success() -> None:
    outcome = ImportOutcomeBuilder(total_rows=0).build()

    assert outcome.success is True
    assert outcome.error_count == 0


class SessionGone(Exception):
    pass


def test_stop_on_error_ends_import_and_counts_remaining_rows(store_factory) -> None:
    store = store_factory(fail_titles=("Second case",), fail_with=SessionGone)

    outcome = import_all(
        _records("First case", "Second case", "Third case", "Fourth case"),
        store,
        stop_on=(SessionGone,),
    )

    assert outcome.success_count == 1
    assert outcome.error_count == 3
    assert outcome.errors == (
        "Row 3: Import stopped - backend said no; 3 row(s) were not imported",
    )
    assert store.calls == ["list:1", "create:First case", "list:1", "create:Second case"]
    _assert_counts_add_up(outcome)


def test_stop_on_error_during_duplicate_lookup_ends_import(store_factory) -> None:
    store = store_factory(fail_lookup=True, fail_with=SessionGone)

    outcome = import_all(_records("First case", "Second case"), store, stop_on=(SessionGone,))

    assert outcome == ImportOutcome(
        total_rows=2,
        success_count=0,
        error_count=2,
        errors=("Row 2: Import stopped - lookup unavailable; 2 row(s) were not imported",),
    )
    assert store.calls == ["list:1"]


def test_errors_outside_stop_on_keep_the_import_going(store_factory) -> None:
    store = store_factory(fail_titles=("First case",))

    outcome = import_all(_records("First case", "Second case"), store, stop_on=(SessionGone,))

    assert outcome.success_count == 1
    assert outcome.errors == ("Row 2: Failed to create test case - backend said no",)
