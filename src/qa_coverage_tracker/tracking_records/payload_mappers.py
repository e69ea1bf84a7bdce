"""Adapters from backend JSON payloads to tracking entities."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from .record_models import (
    AutomationStatus,
    DashboardStats,
    Domain,
    JenkinsResult,
    JenkinsStatistics,
    JenkinsTestCase,
    JiraIssue,
    JiraTestCase,
    Project,
    Sprint,
    SprintStatistics,
    Tester,
    TrackedTestCase,
)

Payload = Mapping[str, Any]


class PayloadMappingError(ValueError):
    """Raised when a backend payload lacks a field the entity cannot do without."""


def to_domain(payload: Payload) -> Domain:
    return Domain(
        id=_require_int(payload, "id"),
        name=_text(payload.get("name")),
        description=_text(payload.get("description")),
        status=_text(payload.get("status")) or "Active",
    )


def to_project(payload: Payload) -> Project:
    domain = payload.get("domain")
    domain_id: int | None = None
    domain_name = ""
    if isinstance(domain, Mapping):
        domain_id = _optional_int(domain.get("id"))
        domain_name = _text(domain.get("name"))
    else:
        domain_id = _optional_int(payload.get("domainId"))
    return Project(
        id=_require_int(payload, "id"),
        name=_text(payload.get("name")),
        description=_text(payload.get("description")),
        status=_text(payload.get("status")) or "Active",
        domain_id=domain_id,
        domain_name=domain_name,
        jira_project_key=_text(payload.get("jiraProjectKey")) or None,
        jira_board_id=_text(payload.get("jiraBoardId")) or None,
    )


def to_tester(payload: Payload) -> Tester:
    return Tester(
        id=_require_int(payload, "id"),
        name=_text(payload.get("name")),
        role=_text(payload.get("role")),
        gender=_text(payload.get("gender")),
        email=_text(payload.get("email")),
        experience=_optional_int(payload.get("experience")),
    )


def to_tracked_test_case(payload: Payload) -> TrackedTestCase:
    return TrackedTestCase(
        id=_require_int(payload, "id"),
        title=_text(payload.get("title")),
        description=_text(payload.get("description")),
        test_steps=_text(payload.get("testSteps")),
        expected_result=_text(payload.get("expectedResult")),
        project_id=_reference_id(payload.get("projectId", payload.get("project"))),
        tester_id=_reference_id(payload.get("testerId", payload.get("tester"))),
        priority=_text(payload.get("priority")),
        status=_text(payload.get("status")),
        created_at=_timestamp(payload.get("createdAt")),
        updated_at=_timestamp(payload.get("updatedAt")),
    )


def to_jenkins_result(payload: Payload) -> JenkinsResult:
    project = payload.get("project")
    return JenkinsResult(
        id=_require_int(payload, "id"),
        job_name=_text(payload.get("jobName")),
        build_number=_text(payload.get("buildNumber")),
        build_status=_text(payload.get("buildStatus")),
        total_tests=_optional_int(payload.get("totalTests")) or 0,
        passed_tests=_optional_int(payload.get("passedTests")) or 0,
        failed_tests=_optional_int(payload.get("failedTests")) or 0,
        skipped_tests=_optional_int(payload.get("skippedTests")) or 0,
        build_url=_text(payload.get("buildUrl")),
        build_timestamp=_timestamp(payload.get("buildTimestamp")),
        job_frequency=_text(payload.get("jobFrequency")) or "Unknown",
        project_id=_reference_id(project),
        project_name=_text(project.get("name")) if isinstance(project, Mapping) else "",
        automation_tester_id=_reference_id(payload.get("automationTester")),
        manual_tester_id=_reference_id(payload.get("manualTester")),
        bugs_identified=_text(payload.get("bugsIdentified")),
        failure_reasons=_text(payload.get("failureReasons")),
    )


def to_jenkins_test_case(payload: Payload) -> JenkinsTestCase:
    duration = payload.get("duration")
    return JenkinsTestCase(
        id=_require_int(payload, "id"),
        test_name=_text(payload.get("testName")),
        class_name=_text(payload.get("className")),
        status=_text(payload.get("status")),
        duration=float(duration) if isinstance(duration, int | float) else 0.0,
        error_message=_text(payload.get("errorMessage")) or None,
        stack_trace=_text(payload.get("stackTrace")) or None,
    )


def to_dashboard_stats(payload: Payload) -> DashboardStats:
    return DashboardStats(
        total_domains=_optional_int(payload.get("totalDomains")) or 0,
        total_projects=_optional_int(payload.get("totalProjects")) or 0,
        total_test_cases=_optional_int(payload.get("totalTestCases")) or 0,
        total_testers=_optional_int(payload.get("totalTesters")) or 0,
        automated_test_cases=_optional_int(payload.get("automatedTestCases")) or 0,
        in_progress_test_cases=_optional_int(payload.get("inProgressTestCases")) or 0,
        ready_test_cases=_optional_int(payload.get("readyTestCases")) or 0,
        completed_test_cases=_optional_int(payload.get("completedTestCases")) or 0,
    )


def to_jenkins_statistics(payload: Payload) -> JenkinsStatistics:
    return JenkinsStatistics(
        total_jobs=_optional_int(payload.get("totalJobs")) or 0,
        successful_jobs=_optional_int(payload.get("successfulJobs")) or 0,
        failed_jobs=_optional_int(payload.get("failedJobs")) or 0,
        total_tests=_optional_int(payload.get("totalTests")) or 0,
        passed_tests=_optional_int(payload.get("passedTests")) or 0,
        failed_tests=_optional_int(payload.get("failedTests")) or 0,
        skipped_tests=_optional_int(payload.get("skippedTests")) or 0,
    )


def to_sprint(payload: Payload) -> Sprint:
    sprint_id = payload.get("id")
    if sprint_id in (None, ""):
        raise PayloadMappingError("Sprint payload is missing 'id'.")
    return Sprint(
        id=str(sprint_id),
        name=_text(payload.get("name")),
        state=_text(payload.get("state")),
        start_date=_text(payload.get("startDate")),
        end_date=_text(payload.get("endDate")),
    )


def to_jira_test_case(payload: Payload) -> JiraTestCase:
    return JiraTestCase(
        id=_require_int(payload, "id"),
        qtest_title=_text(payload.get("qtestTitle")),
        automation_status=_automation_status(payload),
        qtest_id=_text(payload.get("qtestId")) or None,
        project_id=_optional_int(payload.get("projectId")),
        project_name=_text(payload.get("projectName")),
        assigned_tester_id=_optional_int(payload.get("assignedTesterId")),
        assigned_tester_name=_text(payload.get("assignedTesterName")),
        domain_mapped=_text(payload.get("domainMapped")),
    )


def to_jira_issue(payload: Payload) -> JiraIssue:
    linked = payload.get("linkedTestCases") or []
    return JiraIssue(
        id=_require_int(payload, "id"),
        jira_key=_text(payload.get("jiraKey")),
        summary=_text(payload.get("summary")),
        status=_text(payload.get("status")),
        priority=_text(payload.get("priority")),
        assignee=_text(payload.get("assignee")),
        assignee_display_name=_text(payload.get("assigneeDisplayName")),
        issue_type=_text(payload.get("issueType")),
        sprint_id=_text(payload.get("sprintId")),
        keyword_count=_optional_int(payload.get("keywordCount")) or 0,
        linked_test_cases=tuple(
            to_jira_test_case(item) for item in linked if isinstance(item, Mapping)
        ),
    )


def to_sprint_statistics(payload: Payload) -> SprintStatistics:
    return SprintStatistics(
        total_test_cases=_optional_int(payload.get("totalTestCases")) or 0,
        ready_to_automate=_optional_int(payload.get("readyToAutomate")) or 0,
        not_automatable=_optional_int(payload.get("notAutomatable")) or 0,
        pending=_optional_int(payload.get("pending")) or 0,
    )


def to_many(payload: Any, mapper) -> list:
    """Map a JSON array with ``mapper``; anything that is not a list maps to no records."""
    if not isinstance(payload, Sequence) or isinstance(payload, str | bytes):
        return []
    return [mapper(item) for item in payload if isinstance(item, Mapping)]


def _automation_status(payload: Payload) -> AutomationStatus:
    raw = _text(payload.get("automationStatus")).upper()
    if raw in AutomationStatus.__members__:
        return AutomationStatus[raw]
    return AutomationStatus.from_flags(
        bool(payload.get("canBeAutomated")), bool(payload.get("cannotBeAutomated"))
    )


def _reference_id(value: Any) -> int | None:
    if isinstance(value, Mapping):
        return _optional_int(value.get("id"))
    return _optional_int(value)


def _require_int(payload: Payload, key: str) -> int:
    value = _optional_int(payload.get(key))
    if value is None:
        raise PayloadMappingError(f"Payload is missing integer field '{key}'.")
    return value


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, int | float) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return None
