"""Tracking record exports."""

from .payload_mappers import PayloadMappingError
from .record_forms import (
    RecordFormError,
    domain_payload,
    edited_test_case_payload,
    project_payload,
    registration_payload,
    tester_payload,
)
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
    TestCasePriority,
    TestCaseStatus,
    Tester,
    TrackedTestCase,
)

__all__ = [
    "AutomationStatus",
    "DashboardStats",
    "Domain",
    "JenkinsResult",
    "JenkinsStatistics",
    "JenkinsTestCase",
    "JiraIssue",
    "JiraTestCase",
    "PayloadMappingError",
    "Project",
    "RecordFormError",
    "Sprint",
    "SprintStatistics",
    "TestCasePriority",
    "TestCaseStatus",
    "Tester",
    "TrackedTestCase",
    "domain_payload",
    "edited_test_case_payload",
    "project_payload",
    "registration_payload",
    "tester_payload",
]
