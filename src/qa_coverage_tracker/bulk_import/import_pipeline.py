"""Sequential bulk import of spreadsheet test cases."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from qa_coverage_tracker.template_ingestion import (
    AcceptedSpreadsheet,
    SpreadsheetParseError,
    parse_spreadsheet,
)
from qa_coverage_tracker.testcase_conversion import (
    InvalidRecord,
    TestCaseRecord,
    convert_rows,
    validate_record,
)
from qa_coverage_tracker.tracking_records import Tester, TrackedTestCase

from .import_outcome import ImportOutcome, ImportOutcomeBuilder, failed_file_outcome

LOGGER = logging.getLogger(__name__)

HEADER_ROW_OFFSET = 2


class TestCaseStore(Protocol):
    """Backend operations needed by the import."""

    def list_test_cases_by_project(self, project_id: int) -> Sequence[TrackedTestCase]: ...

    def create_test_case(self, payload: Mapping[str, Any]) -> Any: ...


@dataclass(frozen=True)
class ImportSelection:
    """Project and fallback tester chosen before the import starts."""

    project_id: int
    default_tester_id: int


def import_all(
    records: Sequence[TestCaseRecord],
    backend: TestCaseStore,
    *,
    stop_on: tuple[type[Exception], ...] = (),
) -> ImportOutcome:
    """Create each record in order, one backend round trip at a time.

    A backend error of a type listed in ``stop_on`` ends the import. That row
    and every row after it are counted as not imported.
    """
    outcome = ImportOutcomeBuilder(total_rows=len(records))
    for index, record in enumerate(records):
        row_number = index + HEADER_ROW_OFFSET
        check = validate_record(record)
        if isinstance(check, InvalidRecord):
            outcome.record_error(f"Row {row_number}: {check.reason}")
            continue
        try:
            exists = _title_exists(backend, record, stop_on)
        except stop_on as exc:
            _stop_import(outcome, row_number, len(records) - index, exc)
            break
        if exists:
            outcome.record_duplicate(
                f'Row {row_number}: Test case "{record.title}" already exists'
            )
            continue
        try:
            backend.create_test_case(record.to_payload())
        except stop_on as exc:
            _stop_import(outcome, row_number, len(records) - index, exc)
            break
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.error("Row %d: create failed: %s", row_number, exc)
            outcome.record_error(f"Row {row_number}: Failed to create test case - {exc}")
            continue
        outcome.record_success()
    result = outcome.build()
    LOGGER.info(
        "Bulk import finished: %d rows, %d created, %d failed",
        result.total_rows,
        result.success_count,
        result.error_count,
    )
    return result


def run_bulk_import(
    upload: AcceptedSpreadsheet,
    selection: ImportSelection,
    backend: TestCaseStore,
    testers: Sequence[Tester],
    *,
    stop_on: tuple[type[Exception], ...] = (),
) -> ImportOutcome:
    """Parse, convert and import one accepted spreadsheet."""
    try:
        rows = parse_spreadsheet(upload)
    except SpreadsheetParseError as exc:
        LOGGER.error("Upload error: %s", exc)
        return failed_file_outcome()
    records = convert_rows(rows, selection.project_id, selection.default_tester_id, testers)
    return import_all(records, backend, stop_on=stop_on)


def _title_exists(
    backend: TestCaseStore, record: TestCaseRecord, stop_on: tuple[type[Exception], ...]
) -> bool:
    # A failed lookup must not block the create.
    try:
        existing = backend.list_test_cases_by_project(record.project_id)
    except stop_on:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.warning("Error checking for duplicates: %s", exc)
        return False
    wanted = record.title.lower()
    return any(test_case.title.lower() == wanted for test_case in existing or ())


def _stop_import(
    outcome: ImportOutcomeBuilder, row_number: int, remaining: int, exc: Exception
) -> None:
    LOGGER.error("Row %d: import stopped: %s", row_number, exc)
    outcome.record_stopped(
        f"Row {row_number}: Import stopped - {exc}; {remaining} row(s) were not imported",
        remaining,
    )
