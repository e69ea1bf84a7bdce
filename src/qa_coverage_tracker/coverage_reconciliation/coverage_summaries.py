"""Derived numbers shown next to test case and CI listings."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sized
from dataclasses import dataclass

from qa_coverage_tracker.tracking_records import (
    DashboardStats,
    JenkinsResult,
    TestCaseStatus,
    TrackedTestCase,
)


@dataclass(frozen=True)
class StatusCounts:
    """Test cases per lifecycle status for a project or domain."""

    ready_to_automate: int = 0
    in_progress: int = 0
    automated: int = 0
    completed: int = 0

    @property
    def total(self) -> int:
        return self.ready_to_automate + self.in_progress + self.automated + self.completed

    @property
    def automated_share(self) -> int:
        """Automated plus completed cases; the rest counts as not automated."""
        return self.automated + self.completed


@dataclass(frozen=True)
class JenkinsJobSeries:
    """Pass/fail/skip numbers for one CI job."""

    job_name: str
    passed: int
    failed: int
    skipped: int
    pass_percentage: int


def pass_percentage(result: JenkinsResult) -> int:
    """Whole-number pass rate, half rounded up; 0 when the build ran no tests."""
    if not result.total_tests:
        return 0
    return math.floor(result.passed_tests / result.total_tests * 100 + 0.5)


def count_statuses(test_cases: Iterable[TrackedTestCase]) -> StatusCounts:
    counts = dict.fromkeys(TestCaseStatus, 0)
    for test_case in test_cases:
        try:
            counts[TestCaseStatus(test_case.status)] += 1
        except ValueError:
            continue
    return StatusCounts(
        ready_to_automate=counts[TestCaseStatus.READY_TO_AUTOMATE],
        in_progress=counts[TestCaseStatus.IN_PROGRESS],
        automated=counts[TestCaseStatus.AUTOMATED],
        completed=counts[TestCaseStatus.COMPLETED],
    )


def jenkins_job_series(results: Iterable[JenkinsResult]) -> list[JenkinsJobSeries]:
    return [
        JenkinsJobSeries(
            job_name=result.job_name,
            passed=result.passed_tests,
            failed=result.failed_tests,
            skipped=result.skipped_tests,
            pass_percentage=pass_percentage(result),
        )
        for result in results
    ]


def basic_dashboard_stats(domains: Sized, projects: Sized) -> DashboardStats:
    """Fallback when the backend statistics call fails: only domain and project counts."""
    return DashboardStats(total_domains=len(domains), total_projects=len(projects))


def coverage_percentage(covered: int, total: int) -> float:
    """Share of ``total`` that is covered, to one decimal; 0 for an empty total."""
    if total <= 0:
        return 0.0
    return round(covered / total * 100, 1)
