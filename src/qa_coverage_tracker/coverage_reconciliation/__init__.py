"""Coverage reconciliation exports."""

from .coverage_summaries import (
    JenkinsJobSeries,
    StatusCounts,
    basic_dashboard_stats,
    count_statuses,
    coverage_percentage,
    jenkins_job_series,
    pass_percentage,
)
from .sprint_reconciliation import (
    KEYWORD_MIN_LENGTH,
    find_active_sprint,
    merge_updated_test_case,
    search_keyword,
    summarize_automation,
    visible_sprints,
)

__all__ = [
    "KEYWORD_MIN_LENGTH",
    "JenkinsJobSeries",
    "StatusCounts",
    "basic_dashboard_stats",
    "count_statuses",
    "coverage_percentage",
    "find_active_sprint",
    "jenkins_job_series",
    "merge_updated_test_case",
    "pass_percentage",
    "search_keyword",
    "summarize_automation",
    "visible_sprints",
]
