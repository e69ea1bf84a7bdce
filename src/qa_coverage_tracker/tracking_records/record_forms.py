"""Request bodies for records created or edited from the command line.

Each builder applies the input rules the backend's forms enforce and raises
``RecordFormError`` naming the first rule a value breaks.
"""

from __future__ import annotations

import re
from typing import Any

from .record_models import TestCasePriority, TestCaseStatus

PROJECT_NAME_MIN_LENGTH = 3
PROJECT_DESCRIPTION_MIN_LENGTH = 10
TESTER_NAME_MIN_LENGTH = 2
PASSWORD_MIN_LENGTH = 4
TEST_CASE_TITLE_MIN_LENGTH = 5
TEST_CASE_DESCRIPTION_MIN_LENGTH = 3

_DIGITS = re.compile(r"^\d*$")


class RecordFormError(ValueError):
    """Raised when a form value breaks one of the backend's input rules."""


def domain_payload(name: str, description: str = "", status: str = "Active") -> dict[str, Any]:
    _require_text(name, "Domain name")
    return {"name": name.strip(), "description": description.strip(), "status": status}


def project_payload(  # pylint: disable=too-many-arguments
    *,
    domain_id: int | None,
    name: str,
    description: str,
    status: str = "Active",
    jira_project_key: str | None = None,
    jira_board_id: str | None = None,
) -> dict[str, Any]:
    """Project body with its domain reference and optional Jira board link."""
    if domain_id is None:
        raise RecordFormError("Domain is required")
    _require_length(name, PROJECT_NAME_MIN_LENGTH, "Project name")
    _require_length(description, PROJECT_DESCRIPTION_MIN_LENGTH, "Description")
    board_id = (jira_board_id or "").strip()
    if not _DIGITS.match(board_id):
        raise RecordFormError("Jira board id must contain only digits")
    return {
        "name": name,
        "description": description,
        "status": status,
        "domain": {"id": domain_id},
        "jiraProjectKey": (jira_project_key or "").strip() or None,
        "jiraBoardId": board_id or None,
    }


def tester_payload(*, name: str, role: str, gender: str, experience: int | None) -> dict[str, Any]:
    _require_length(name, TESTER_NAME_MIN_LENGTH, "Tester name")
    _require_text(role, "Role")
    _require_text(gender, "Gender")
    experience = experience or 0
    if experience < 0:
        raise RecordFormError("Experience cannot be negative")
    return {"name": name, "role": role, "gender": gender, "experience": experience}


def registration_payload(user_name: str, password: str, role: str) -> dict[str, Any]:
    _require_text(user_name, "User name")
    _require_length(password, PASSWORD_MIN_LENGTH, "Password")
    _require_text(role, "Role")
    return {"userName": user_name, "password": password, "role": role}


def edited_test_case_payload(  # pylint: disable=too-many-arguments
    *,
    title: str,
    description: str,
    project_id: int | None,
    tester_id: int | None,
    status: str = TestCaseStatus.READY_TO_AUTOMATE.value,
    priority: str = TestCasePriority.MEDIUM.value,
) -> dict[str, Any]:
    """Body for editing a tracked test case."""
    _require_length(title, TEST_CASE_TITLE_MIN_LENGTH, "Title")
    _require_length(description, TEST_CASE_DESCRIPTION_MIN_LENGTH, "Description")
    if project_id is None:
        raise RecordFormError("Project is required")
    if tester_id is None:
        raise RecordFormError("Tester is required")
    try:
        status = TestCaseStatus(status).value
        priority = TestCasePriority(priority).value
    except ValueError as exc:
        raise RecordFormError(str(exc)) from exc
    return {
        "title": title,
        "description": description,
        "projectId": project_id,
        "testerId": tester_id,
        "status": status,
        "priority": priority,
    }


def _require_text(value: str | None, label: str) -> None:
    if not (value or "").strip():
        raise RecordFormError(f"{label} is required")


def _require_length(value: str | None, minimum: int, label: str) -> None:
    _require_text(value, label)
    if len(value or "") < minimum:
        raise RecordFormError(f"{label} must be at least {minimum} characters")
