"""Shared fakes for bulk import tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest
from qa_coverage_tracker.tracking_records import TrackedTestCase


class FakeTestCaseStore:
    """In-memory backend that remembers created test cases per project."""

    def __init__(
        self,
        existing_titles: tuple[str, ...] = (),
        *,
        fail_lookup: bool = False,
        fail_titles: tuple[str, ...] = (),
        fail_with: type[Exception] = RuntimeError,
    ) -> None:
        self.created: list[dict[str, Any]] = []
        self.calls: list[str] = []
        self._fail_lookup = fail_lookup
        self._fail_titles = fail_titles
        self._fail_with = fail_with
        self._cases = [
            _tracked(index, title, project_id=1) for index, title in enumerate(existing_titles)
        ]

    def list_test_cases_by_project(self, project_id: int) -> list[TrackedTestCase]:
        self.calls.append(f"list:{project_id}")
        if self._fail_lookup:
            raise self._fail_with("lookup unavailable")
        return [case for case in self._cases if case.project_id == project_id]

    def create_test_case(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        self.calls.append(f"create:{payload['title']}")
        if payload["title"] in self._fail_titles:
            raise self._fail_with("backend said no")
        created = dict(payload, id=len(self._cases) + 100)
        self.created.append(created)
        self._cases.append(_tracked(created["id"], payload["title"], payload["projectId"]))
        return created


def _tracked(case_id: int, title: str, project_id: int) -> TrackedTestCase:
    return TrackedTestCase(
        id=case_id,
        title=title,
        description="",
        test_steps="",
        expected_result="",
        project_id=project_id,
        tester_id=None,
        priority="Medium",
        status="Ready to Automate",
    )


@pytest.fixture
def store_factory():
    return FakeTestCaseStore
