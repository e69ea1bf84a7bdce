"""Search, filter and sort rules for each listing."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from qa_coverage_tracker.coverage_reconciliation import pass_percentage
from qa_coverage_tracker.tracking_records import (
    JenkinsResult,
    JiraIssue,
    Project,
    Tester,
    TrackedTestCase,
)

from .query_engine import CustomFilter, SortKey


class ListQueryError(ValueError):
    """Raised for filter or sort requests a listing does not support."""


@dataclass(frozen=True)
class ViewProfile:
    """Fields a listing searches, the filters it offers and any non-default sort keys.

    Search and filter changes drop the current sort order unless
    ``keeps_sort_on_filter`` is set.
    """

    name: str
    columns: tuple[str, ...]
    search_fields: tuple[str, ...]
    filter_fields: tuple[str, ...]
    sort_keys: Mapping[str, SortKey] = field(default_factory=dict)
    custom_filters: Mapping[str, CustomFilter] = field(default_factory=dict)
    keeps_sort_on_filter: bool = False

    def check_filter(self, field_name: str) -> None:
        if field_name not in self.filter_fields:
            allowed = ", ".join(self.filter_fields)
            raise ListQueryError(
                f"Unknown filter '{field_name}' for {self.name}; expected one of: {allowed}"
            )

    def check_sort(self, column: str) -> None:
        if column not in self.columns and column not in self.sort_keys:
            allowed = ", ".join(self.columns)
            raise ListQueryError(
                f"Unknown sort column '{column}' for {self.name}; expected one of: {allowed}"
            )


def tracked_test_case_profile(
    projects: Iterable[Project] = (), testers: Iterable[Tester] = ()
) -> ViewProfile:
    """Project and tester columns sort by display name rather than by id."""
    project_names = {project.id: project.name for project in projects}
    tester_names = {tester.id: tester.name for tester in testers}

    def project_name(test_case: TrackedTestCase) -> str:
        return project_names.get(test_case.project_id, "Unknown Project")

    def tester_name(test_case: TrackedTestCase) -> str:
        return tester_names.get(test_case.tester_id, "Unknown Tester")

    return ViewProfile(
        name="test cases",
        columns=("id", "title", "project_id", "tester_id", "priority", "status"),
        search_fields=("title", "description"),
        filter_fields=("project_id",),
        sort_keys={"project_id": project_name, "tester_id": tester_name},
    )


def _threshold(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ListQueryError(
            f"Pass percentage threshold must be a number, got '{value}'"
        ) from exc


def _pass_at_least(result: JenkinsResult, value: str) -> bool:
    threshold = _threshold(value)
    return not threshold or pass_percentage(result) >= threshold


def _pass_at_most(result: JenkinsResult, value: str) -> bool:
    threshold = _threshold(value)
    return not threshold or pass_percentage(result) <= threshold


JENKINS_RESULT_PROFILE = ViewProfile(
    name="jenkins results",
    columns=(
        "id",
        "job_name",
        "build_number",
        "build_status",
        "total_tests",
        "passed_tests",
        "failed_tests",
        "skipped_tests",
        "build_timestamp",
    ),
    search_fields=("job_name",),
    filter_fields=("build_status", "pass_percentage_gte", "pass_percentage_lte"),
    sort_keys={
        "build_timestamp": lambda result: result.build_timestamp,
        "pass_percentage": pass_percentage,
    },
    custom_filters={"pass_percentage_gte": _pass_at_least, "pass_percentage_lte": _pass_at_most},
)

JENKINS_TEST_CASE_PROFILE = ViewProfile(
    name="jenkins test cases",
    columns=("id", "test_name", "class_name", "status", "duration"),
    search_fields=("test_name", "class_name"),
    filter_fields=("status",),
)


def _linked_count(issue: JiraIssue) -> int:
    return len(issue.linked_test_cases)


JIRA_ISSUE_PROFILE = ViewProfile(
    name="sprint issues",
    columns=(
        "jira_key",
        "summary",
        "status",
        "priority",
        "assignee_display_name",
        "keyword_count",
        "linked_test_cases",
    ),
    search_fields=("summary", "jira_key", "assignee_display_name"),
    filter_fields=("status", "priority", "assignee"),
    sort_keys={"linked_test_cases": _linked_count},
    keeps_sort_on_filter=True,
)
