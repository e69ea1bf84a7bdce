"""List query exports."""

from .list_view import ListView
from .query_engine import (
    apply_filters,
    field_value,
    paginate,
    sort_items,
    total_pages,
    unique_values,
)
from .query_state import DEFAULT_PAGE_SIZE, ListQueryState, SortDirection
from .view_profiles import (
    JENKINS_RESULT_PROFILE,
    JENKINS_TEST_CASE_PROFILE,
    JIRA_ISSUE_PROFILE,
    ListQueryError,
    ViewProfile,
    tracked_test_case_profile,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "JENKINS_RESULT_PROFILE",
    "JENKINS_TEST_CASE_PROFILE",
    "JIRA_ISSUE_PROFILE",
    "ListQueryError",
    "ListQueryState",
    "ListView",
    "SortDirection",
    "ViewProfile",
    "apply_filters",
    "field_value",
    "paginate",
    "sort_items",
    "tracked_test_case_profile",
    "total_pages",
    "unique_values",
]
