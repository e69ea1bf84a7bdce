"""Spreadsheet row to test case record conversion tests."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from qa_coverage_tracker.testcase_conversion import (
    InvalidRecord,
    ValidRecord,
    convert_rows,
    validate_record,
)
from qa_coverage_tracker.tracking_records import TestCasePriority, TestCaseStatus, Tester

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
TESTERS = (Tester(id=7, name="John Doe"), Tester(id=8, name="Jane Smith"))


def _row(**overrides: str) -> dict[str, str]:
    row = {
        "Test Case Title": "Login with valid credentials",
        "Description": "Verify user can login with valid username and password",
    }
    row.update(overrides)
    return row


def test_full_row_maps_every_column() -> None:
    row = _row(
        **{
            "Test Steps": "1. Open\n2. Submit",
            "Expected Result": "Dashboard is shown",
            "Priority": "High",
            "Status": "Automated",
            "Assigned Tester": "jane smith",
        }
    )

    (record,) = convert_rows([row], project_id=3, default_tester_id=7, testers=TESTERS, now=NOW)

    assert record.title == "Login with valid credentials"
    assert record.test_steps == "1. Open\n2. Submit"
    assert record.expected_result == "Dashboard is shown"
    assert record.project_id == 3
    assert record.tester_id == 8
    assert record.priority is TestCasePriority.HIGH
    assert record.status is TestCaseStatus.AUTOMATED
    assert record.created_at == record.updated_at == NOW


def test_missing_optional_columns_use_defaults() -> None:
    (record,) = convert_rows([_row()], 3, 7, TESTERS, now=NOW)

    assert record.test_steps == ""
    assert record.expected_result == ""
    assert record.tester_id == 7
    assert record.priority is TestCasePriority.MEDIUM
    assert record.status is TestCaseStatus.READY_TO_AUTOMATE


@pytest.mark.parametrize(
    ("priority", "status"), [("Urgent", "Done"), ("high", "automated"), ("", "")]
)
def test_unknown_priority_and_status_fall_back(priority: str, status: str) -> None:
    (record,) = convert_rows([_row(Priority=priority, Status=status)], 3, 7, TESTERS, now=NOW)

    assert record.priority is TestCasePriority.MEDIUM
    assert record.status is TestCaseStatus.READY_TO_AUTOMATE


def test_unknown_tester_uses_default() -> None:
    (record,) = convert_rows([_row(**{"Assigned Tester": "Nobody"})], 3, 7, TESTERS, now=NOW)

    assert record.tester_id == 7


def test_payload_uses_camel_case_keys() -> None:
    (record,) = convert_rows([_row(Priority="Low")], 3, 7, TESTERS, now=NOW)

    payload = record.to_payload()

    assert payload == {
        "title": "Login with valid credentials",
        "description": "Verify user can login with valid username and password",
        "testSteps": "",
        "expectedResult": "",
        "projectId": 3,
        "testerId": 7,
        "priority": "Low",
        "status": "Ready to Automate",
        "createdAt": "2024-05-01T12:00:00+00:00",
        "updatedAt": "2024-05-01T12:00:00+00:00",
    }


@pytest.mark.parametrize(
    ("title", "description", "valid"),
    [
        ("Abcd", "Long enough description", False),
        ("Abcde", "Long enough description", True),
        ("   Abcd   ", "Long enough description", False),
        ("Abcde", "123456789", False),
        ("Abcde", "1234567890", True),
        ("", "", False),
    ],
)
def test_validate_record_length_rules(title: str, description: str, valid: bool) -> None:
    (record,) = convert_rows(
        [{"Test Case Title": title, "Description": description}], 3, 7, TESTERS, now=NOW
    )

    check = validate_record(record)

    assert isinstance(check, ValidRecord if valid else InvalidRecord)
    assert check.record is record


def test_title_failure_is_reported_before_description_failure() -> None:
    (record,) = convert_rows([{}], 3, 7, TESTERS, now=NOW)

    check = validate_record(record)

    assert isinstance(check, InvalidRecord)
    assert check.reason.startswith("Title is required")
