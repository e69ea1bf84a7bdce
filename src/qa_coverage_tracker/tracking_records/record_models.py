"""Tracking backend entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TestCasePriority(str, Enum):
    """Priority levels accepted for tracked test cases."""

    __test__ = False

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TestCaseStatus(str, Enum):
    """Automation lifecycle of a tracked test case."""

    __test__ = False

    READY_TO_AUTOMATE = "Ready to Automate"
    AUTOMATED = "Automated"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class AutomationStatus(str, Enum):
    """Automation verdict for an issue-tracker test case.

    The two legacy booleans are derived from this value instead of being stored.
    """

    PENDING = "PENDING"
    READY_TO_AUTOMATE = "READY_TO_AUTOMATE"
    NOT_AUTOMATABLE = "NOT_AUTOMATABLE"

    @property
    def can_be_automated(self) -> bool:
        return self is AutomationStatus.READY_TO_AUTOMATE

    @property
    def cannot_be_automated(self) -> bool:
        return self is AutomationStatus.NOT_AUTOMATABLE

    @property
    def display_label(self) -> str:
        return _AUTOMATION_LABELS[self]

    def as_flags(self) -> dict[str, bool]:
        """Request body for the automation-flags endpoint."""
        return {
            "canBeAutomated": self.can_be_automated,
            "cannotBeAutomated": self.cannot_be_automated,
        }

    @staticmethod
    def from_flags(can_be_automated: bool, cannot_be_automated: bool) -> AutomationStatus:
        if can_be_automated:
            return AutomationStatus.READY_TO_AUTOMATE
        if cannot_be_automated:
            return AutomationStatus.NOT_AUTOMATABLE
        return AutomationStatus.PENDING


_AUTOMATION_LABELS = {
    AutomationStatus.PENDING: "Pending",
    AutomationStatus.READY_TO_AUTOMATE: "Ready to Automate",
    AutomationStatus.NOT_AUTOMATABLE: "Not Automatable",
}


@dataclass(frozen=True)
class Domain:
    """Top-level grouping of projects."""

    id: int
    name: str
    description: str = ""
    status: str = "Active"


@dataclass(frozen=True)
class Project:  # pylint: disable=too-many-instance-attributes
    """Unit of work holding test cases, optionally linked to a Jira board."""

    id: int
    name: str
    description: str = ""
    status: str = "Active"
    domain_id: int | None = None
    domain_name: str = ""
    jira_project_key: str | None = None
    jira_board_id: str | None = None


@dataclass(frozen=True)
class Tester:
    """Person assignable to test cases as manual or automation owner."""

    id: int
    name: str
    role: str = ""
    gender: str = ""
    email: str = ""
    experience: int | None = None


@dataclass(frozen=True)
class TrackedTestCase:  # pylint: disable=too-many-instance-attributes
    """Test case persisted by the backend."""

    id: int
    title: str
    description: str
    test_steps: str
    expected_result: str
    project_id: int | None
    tester_id: int | None
    priority: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class JenkinsTestCase:
    """One test inside a CI build."""

    id: int
    test_name: str
    class_name: str
    status: str
    duration: float
    error_message: str | None = None
    stack_trace: str | None = None


@dataclass(frozen=True)
class JenkinsResult:  # pylint: disable=too-many-instance-attributes
    """Aggregate counts of one CI job execution."""

    id: int
    job_name: str
    build_number: str
    build_status: str
    total_tests: int
    passed_tests: int
    failed_tests: int
    skipped_tests: int
    build_url: str = ""
    build_timestamp: datetime | None = None
    job_frequency: str = "Unknown"
    project_id: int | None = None
    project_name: str = ""
    automation_tester_id: int | None = None
    manual_tester_id: int | None = None
    bugs_identified: str = ""
    failure_reasons: str = ""


@dataclass(frozen=True)
class DashboardStats:  # pylint: disable=too-many-instance-attributes
    """Backend-wide totals shown on the dashboard."""

    total_domains: int = 0
    total_projects: int = 0
    total_test_cases: int = 0
    total_testers: int = 0
    automated_test_cases: int = 0
    in_progress_test_cases: int = 0
    ready_test_cases: int = 0
    completed_test_cases: int = 0

    @property
    def covered_test_cases(self) -> int:
        """Automated plus completed; everything else counts as not automated."""
        return self.automated_test_cases + self.completed_test_cases


@dataclass(frozen=True)
class JenkinsStatistics:
    """Totals across every synced CI job."""

    total_jobs: int = 0
    successful_jobs: int = 0
    failed_jobs: int = 0
    total_tests: int = 0
    passed_tests: int = 0
    failed_tests: int = 0
    skipped_tests: int = 0


@dataclass(frozen=True)
class Sprint:
    """Issue-tracker sprint."""

    id: str
    name: str
    state: str
    start_date: str = ""
    end_date: str = ""

    @property
    def is_active(self) -> bool:
        return self.state.lower() == "active"


@dataclass(frozen=True)
class JiraTestCase:  # pylint: disable=too-many-instance-attributes
    """Manual test case linked to an issue-tracker item."""

    id: int
    qtest_title: str
    automation_status: AutomationStatus = AutomationStatus.PENDING
    qtest_id: str | None = None
    project_id: int | None = None
    project_name: str = ""
    assigned_tester_id: int | None = None
    assigned_tester_name: str = ""
    domain_mapped: str = ""

    @property
    def can_be_automated(self) -> bool:
        return self.automation_status.can_be_automated

    @property
    def cannot_be_automated(self) -> bool:
        return self.automation_status.cannot_be_automated


@dataclass(frozen=True)
class JiraIssue:  # pylint: disable=too-many-instance-attributes
    """Issue-tracker item synced for a sprint."""

    id: int
    jira_key: str
    summary: str
    status: str = ""
    priority: str = ""
    assignee: str = ""
    assignee_display_name: str = ""
    issue_type: str = ""
    sprint_id: str = ""
    keyword_count: int = 0
    linked_test_cases: tuple[JiraTestCase, ...] = ()


@dataclass(frozen=True)
class SprintStatistics:
    """Automation verdict totals for one sprint."""

    total_test_cases: int = 0
    ready_to_automate: int = 0
    not_automatable: int = 0
    pending: int = 0
