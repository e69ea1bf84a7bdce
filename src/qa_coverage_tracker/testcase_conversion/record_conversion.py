"""Conversion of spreadsheet rows into test case records ready for creation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TypeVar

from qa_coverage_tracker.template_generation import (
    ASSIGNED_TESTER_HEADER,
    DESCRIPTION_HEADER,
    EXPECTED_RESULT_HEADER,
    PRIORITY_HEADER,
    STATUS_HEADER,
    TEST_STEPS_HEADER,
    TITLE_HEADER,
)
from qa_coverage_tracker.template_ingestion import SpreadsheetRow
from qa_coverage_tracker.tracking_records import TestCasePriority, TestCaseStatus, Tester

MIN_TITLE_LENGTH = 5
MIN_DESCRIPTION_LENGTH = 10

TITLE_REQUIREMENT = "Title is required and must be at least 5 characters long"
DESCRIPTION_REQUIREMENT = "Description is required and must be at least 10 characters long"

EnumT = TypeVar("EnumT", bound=Enum)


@dataclass(frozen=True)
class TestCaseRecord:  # pylint: disable=too-many-instance-attributes
    """Test case built from one spreadsheet row, not yet persisted."""

    __test__ = False

    title: str
    description: str
    test_steps: str
    expected_result: str
    project_id: int
    tester_id: int
    priority: TestCasePriority
    status: TestCaseStatus
    created_at: datetime
    updated_at: datetime

    def to_payload(self) -> dict[str, Any]:
        """camelCase body for the create endpoint."""
        return {
            "title": self.title,
            "description": self.description,
            "testSteps": self.test_steps,
            "expectedResult": self.expected_result,
            "projectId": self.project_id,
            "testerId": self.tester_id,
            "priority": self.priority.value,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class ValidRecord:
    record: TestCaseRecord


@dataclass(frozen=True)
class InvalidRecord:
    record: TestCaseRecord
    reason: str


RecordCheck = ValidRecord | InvalidRecord


def convert_rows(
    rows: Iterable[SpreadsheetRow],
    project_id: int,
    default_tester_id: int,
    testers: Sequence[Tester],
    now: datetime | None = None,
) -> list[TestCaseRecord]:
    """Map rows to records using the caller's project and default tester.

    ``Assigned Tester`` wins when it names a known tester (case-insensitive).
    Unknown priority or status values fall back to Medium / Ready to Automate.
    """
    timestamp = now or datetime.now(UTC)
    testers_by_name = {tester.name.lower(): tester.id for tester in testers}
    return [
        _convert_row(row, project_id, default_tester_id, testers_by_name, timestamp)
        for row in rows
    ]


def validate_record(record: TestCaseRecord) -> RecordCheck:
    """Length checks run before any backend call."""
    if len(record.title.strip()) < MIN_TITLE_LENGTH:
        return InvalidRecord(record, TITLE_REQUIREMENT)
    if len(record.description.strip()) < MIN_DESCRIPTION_LENGTH:
        return InvalidRecord(record, DESCRIPTION_REQUIREMENT)
    return ValidRecord(record)


def _convert_row(
    row: SpreadsheetRow,
    project_id: int,
    default_tester_id: int,
    testers_by_name: dict[str, int],
    timestamp: datetime,
) -> TestCaseRecord:
    assigned = row.get(ASSIGNED_TESTER_HEADER, "")
    tester_id = testers_by_name.get(assigned.lower(), default_tester_id)
    return TestCaseRecord(
        title=row.get(TITLE_HEADER, ""),
        description=row.get(DESCRIPTION_HEADER, ""),
        test_steps=row.get(TEST_STEPS_HEADER, ""),
        expected_result=row.get(EXPECTED_RESULT_HEADER, ""),
        project_id=project_id,
        tester_id=tester_id,
        priority=_enum_or_default(
            row.get(PRIORITY_HEADER), TestCasePriority, TestCasePriority.MEDIUM
        ),
        status=_enum_or_default(
            row.get(STATUS_HEADER), TestCaseStatus, TestCaseStatus.READY_TO_AUTOMATE
        ),
        created_at=timestamp,
        updated_at=timestamp,
    )


def _enum_or_default(value: str | None, enum_type: type[EnumT], default: EnumT) -> EnumT:
    try:
        return enum_type(value)
    except ValueError:
        return default
