"""Sprint selection and local bookkeeping for issue-tracker coverage."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from qa_coverage_tracker.tracking_records import (
    AutomationStatus,
    JiraIssue,
    JiraTestCase,
    Sprint,
    SprintStatistics,
)

LOGGER = logging.getLogger(__name__)

KEYWORD_MIN_LENGTH = 3


def find_active_sprint(sprints: Iterable[Sprint]) -> Sprint | None:
    return next((sprint for sprint in sprints if sprint.is_active), None)


def visible_sprints(sprints: Sequence[Sprint], show_all: bool) -> list[Sprint]:
    """All sprints, or only the active ones when ``show_all`` is off."""
    if show_all:
        return list(sprints)
    return [sprint for sprint in sprints if sprint.is_active]


def merge_updated_test_case(
    issues: Sequence[JiraIssue], updated: JiraTestCase
) -> list[JiraIssue]:
    """Swap in ``updated`` inside the first issue linking a test case with the same id."""
    merged = list(issues)
    for index, issue in enumerate(merged):
        linked = list(issue.linked_test_cases)
        position = next(
            (pos for pos, test_case in enumerate(linked) if test_case.id == updated.id), None
        )
        if position is None:
            continue
        linked[position] = updated
        merged[index] = replace(issue, linked_test_cases=tuple(linked))
        return merged
    LOGGER.warning("Test case not found in local issues for update: %s", updated.id)
    return merged


def summarize_automation(issues: Iterable[JiraIssue]) -> SprintStatistics:
    """Verdict totals over every linked test case, for use when statistics are not fetched."""
    counts = dict.fromkeys(AutomationStatus, 0)
    for issue in issues:
        for test_case in issue.linked_test_cases:
            counts[test_case.automation_status] += 1
    return SprintStatistics(
        total_test_cases=sum(counts.values()),
        ready_to_automate=counts[AutomationStatus.READY_TO_AUTOMATE],
        not_automatable=counts[AutomationStatus.NOT_AUTOMATABLE],
        pending=counts[AutomationStatus.PENDING],
    )


def search_keyword(raw: str) -> str | None:
    """Trimmed keyword for the comment search, or None when it is too short to send."""
    keyword = raw.strip()
    return keyword if len(keyword) >= KEYWORD_MIN_LENGTH else None
