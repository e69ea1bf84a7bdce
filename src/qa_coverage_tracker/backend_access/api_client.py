"""REST client for the tracking backend: one method per endpoint."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import requests

from qa_coverage_tracker.configuration.runtime_settings import ApiSettings
from qa_coverage_tracker.tracking_records import payload_mappers as mappers
from qa_coverage_tracker.tracking_records.record_models import (
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

from .api_errors import ApiError, SessionExpiredError, describe_failure, is_unauthorized
from .bearer_auth import BearerTokenAuth, LoginState

LOGGER = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class TrackerApiClient:  # pylint: disable=too-many-public-methods
    """Thin passthrough over the backend REST API.

    Every call is a single request: nothing is retried and failures surface as
    ``ApiError``. A rejected session clears ``login_state`` and raises
    ``SessionExpiredError``.
    """

    def __init__(
        self,
        settings: ApiSettings,
        *,
        session: requests.Session | None = None,
        login_state: LoginState | None = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._login_state = login_state
        if login_state is not None:
            self._session.auth = BearerTokenAuth(login_state.token)

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    # Authentication

    def login(self, user_name: str, password: str) -> Mapping[str, Any]:
        payload = self._get("/user", params={"userName": user_name, "password": password})
        if not isinstance(payload, Mapping):
            raise ApiError("User does not exist.", status=404, url=self._url("/user"))
        return payload

    def register_user(self, payload: Mapping[str, Any]) -> Any:
        return self._post("/user", payload)

    # Domains

    def list_domains(self) -> list[Domain]:
        return mappers.to_many(self._get("/domains"), mappers.to_domain)

    def list_active_domains(self) -> list[Domain]:
        return mappers.to_many(self._get("/domains/active"), mappers.to_domain)

    def get_domain(self, domain_id: int) -> Domain:
        return mappers.to_domain(self._get(f"/domains/{domain_id}"))

    def create_domain(self, payload: Mapping[str, Any]) -> Domain:
        return mappers.to_domain(self._post("/domains", payload))

    def update_domain(self, domain_id: int, payload: Mapping[str, Any]) -> Domain:
        return mappers.to_domain(self._put(f"/domains/{domain_id}", payload))

    def delete_domain(self, domain_id: int) -> None:
        self._delete(f"/domains/{domain_id}")

    # Projects

    def list_projects(self) -> list[Project]:
        return mappers.to_many(self._get("/projects"), mappers.to_project)

    def list_projects_by_domain(self, domain_id: int) -> list[Project]:
        return mappers.to_many(self._get(f"/projects/domain/{domain_id}"), mappers.to_project)

    def get_project(self, project_id: int) -> Project:
        return mappers.to_project(self._get(f"/projects/{project_id}"))

    def create_project(self, payload: Mapping[str, Any]) -> Project:
        return mappers.to_project(self._post("/projects", payload))

    def update_project(self, project_id: int, payload: Mapping[str, Any]) -> Project:
        return mappers.to_project(self._put(f"/projects/{project_id}", payload))

    def delete_project(self, project_id: int) -> None:
        self._delete(f"/projects/{project_id}")

    # Test cases

    def list_test_cases(self) -> list[TrackedTestCase]:
        return mappers.to_many(self._get("/testcases"), mappers.to_tracked_test_case)

    def list_test_cases_by_project(self, project_id: int) -> list[TrackedTestCase]:
        return mappers.to_many(
            self._get(f"/testcases/project/{project_id}"), mappers.to_tracked_test_case
        )

    def list_test_cases_by_domain(self, domain_id: int) -> list[TrackedTestCase]:
        return mappers.to_many(
            self._get(f"/testcases/domain/{domain_id}"), mappers.to_tracked_test_case
        )

    def get_test_case(self, test_case_id: int) -> TrackedTestCase:
        return mappers.to_tracked_test_case(self._get(f"/testcases/{test_case_id}"))

    def create_test_case(self, payload: Mapping[str, Any]) -> Any:
        return self._post("/testcases", payload)

    def update_test_case(self, test_case_id: int, payload: Mapping[str, Any]) -> Any:
        return self._put(f"/testcases/{test_case_id}", payload)

    def delete_test_case(self, test_case_id: int) -> None:
        self._delete(f"/testcases/{test_case_id}")

    # Testers

    def list_testers(self) -> list[Tester]:
        return mappers.to_many(self._get("/testers"), mappers.to_tester)

    def get_tester(self, tester_id: int) -> Tester:
        return mappers.to_tester(self._get(f"/testers/{tester_id}"))

    def create_tester(self, payload: Mapping[str, Any]) -> Tester:
        return mappers.to_tester(self._post("/testers", payload))

    def update_tester(self, tester_id: int, payload: Mapping[str, Any]) -> Tester:
        return mappers.to_tester(self._put(f"/testers/{tester_id}", payload))

    def delete_tester(self, tester_id: int) -> None:
        self._delete(f"/testers/{tester_id}")

    # Dashboard

    def get_dashboard_stats(self) -> DashboardStats:
        payload = self._get("/dashboard/stats")
        return mappers.to_dashboard_stats(payload if isinstance(payload, Mapping) else {})

    # Jenkins

    def list_jenkins_results(self) -> list[JenkinsResult]:
        return mappers.to_many(self._get("/jenkins/results"), mappers.to_jenkins_result)

    def list_filtered_jenkins_results(
        self,
        *,
        project_id: int | None = None,
        automation_tester_id: int | None = None,
        job_frequency: str | None = None,
        build_status: str | None = None,
        search_term: str | None = None,
        pass_percentage_threshold: int | None = None,
    ) -> list[JenkinsResult]:
        params = {
            "projectId": project_id,
            "automationTesterId": automation_tester_id,
            "jobFrequency": job_frequency,
            "buildStatus": build_status,
            "searchTerm": search_term,
            "passPercentageThreshold": pass_percentage_threshold,
        }
        active = {key: str(value) for key, value in params.items() if value}
        return mappers.to_many(
            self._get("/jenkins/results/filtered", params=active), mappers.to_jenkins_result
        )

    def list_jenkins_test_cases(self, result_id: int) -> list[JenkinsTestCase]:
        return mappers.to_many(
            self._get(f"/jenkins/results/{result_id}/testcases"), mappers.to_jenkins_test_case
        )

    def get_jenkins_statistics(self) -> JenkinsStatistics:
        payload = self._get("/jenkins/statistics")
        return mappers.to_jenkins_statistics(payload if isinstance(payload, Mapping) else {})

    def list_job_frequencies(self) -> list[str]:
        payload = self._get("/jenkins/job-frequencies")
        return [str(item) for item in payload] if isinstance(payload, list) else []

    def sync_jenkins_jobs(self) -> Any:
        return self._post("/jenkins/sync", {})

    def sync_jenkins_job(self, job_name: str) -> Any:
        return self._post(f"/jenkins/sync/{quote(job_name, safe='')}", {})

    def test_jenkins_connection(self) -> Mapping[str, Any]:
        return _mapping(self._get("/jenkins/test-connection"))

    def save_jenkins_job_data(
        self,
        result_id: int,
        *,
        notes: str | None = None,
        automation_tester_id: int | None = None,
        manual_tester_id: int | None = None,
        project_id: int | None = None,
    ) -> Any:
        """Store notes and owner assignments for one CI build."""
        body = {
            "notes": notes,
            "automationTesterId": automation_tester_id,
            "manualTesterId": manual_tester_id,
            "projectId": project_id,
        }
        return self._post(f"/jenkins/results/{result_id}/save-all", body)

    # Issue tracker (manual coverage page)

    def list_sprints(
        self, jira_project_key: str | None = None, jira_board_id: str | None = None
    ) -> list[Sprint]:
        params = _jira_params(jira_project_key, jira_board_id)
        return mappers.to_many(self._get("/manual-page/sprints", params=params), mappers.to_sprint)

    def sync_sprint_issues(
        self,
        sprint_id: str,
        jira_project_key: str | None = None,
        jira_board_id: str | None = None,
    ) -> list[JiraIssue]:
        params = _jira_params(jira_project_key, jira_board_id)
        payload = self._post(f"/manual-page/sprints/{sprint_id}/sync", {}, params=params)
        return mappers.to_many(payload, mappers.to_jira_issue)

    def list_sprint_issues(self, sprint_id: str) -> list[JiraIssue]:
        return mappers.to_many(
            self._get(f"/manual-page/sprints/{sprint_id}/issues"), mappers.to_jira_issue
        )

    def get_sprint_statistics(self, sprint_id: str) -> SprintStatistics:
        payload = self._get(f"/manual-page/sprints/{sprint_id}/statistics")
        return mappers.to_sprint_statistics(payload if isinstance(payload, Mapping) else {})

    def update_automation_status(
        self, test_case_id: int, status: AutomationStatus
    ) -> JiraTestCase:
        payload = self._put(
            f"/manual-page/test-cases/{test_case_id}/automation-flags", status.as_flags()
        )
        return mappers.to_jira_test_case(payload)

    def map_test_case(
        self, test_case_id: int, *, project_id: int | None, tester_id: int | None
    ) -> JiraTestCase:
        payload = self._put(
            f"/manual-page/test-cases/{test_case_id}/mapping",
            {"projectId": project_id, "testerId": tester_id},
        )
        return mappers.to_jira_test_case(payload)

    def search_keyword_in_comments(self, jira_key: str, keyword: str) -> JiraIssue:
        payload = self._post(f"/manual-page/issues/{jira_key}/keyword-search", {"keyword": keyword})
        return mappers.to_jira_issue(payload)

    def global_keyword_search(
        self, keyword: str, jira_project_key: str | None = None, sprint_id: str | None = None
    ) -> Mapping[str, Any]:
        request: dict[str, Any] = {"keyword": keyword, "jiraProjectKey": jira_project_key or ""}
        if sprint_id:
            request["sprintId"] = sprint_id
        try:
            payload = self._post("/manual-page/global-keyword-search", request)
        except ApiError as exc:
            if exc.status != 404:
                raise
            LOGGER.warning("Global search endpoint not available, returning empty result")
            return {"count": 0, "totalMatches": 0, "message": "Global search not implemented"}
        return _mapping(payload)

    def list_manual_page_projects(self) -> list[Project]:
        return mappers.to_many(self._get("/manual-page/projects"), mappers.to_project)

    def list_manual_page_testers(self) -> list[Tester]:
        return mappers.to_many(self._get("/manual-page/testers"), mappers.to_tester)

    def test_jira_connection(self) -> Mapping[str, Any]:
        return _mapping(self._get("/manual-page/test-connection"))

    # Transport

    def _get(self, path: str, *, params: Mapping[str, str] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def _post(
        self, path: str, body: Mapping[str, Any], *, params: Mapping[str, str] | None = None
    ) -> Any:
        return self._request("POST", path, params=params, body=body)

    def _put(self, path: str, body: Mapping[str, Any]) -> Any:
        return self._request("PUT", path, body=body)

    def _delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def _url(self, path: str) -> str:
        return f"{self._settings.base_url}{path}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        url = self._url(path)
        try:
            response = self._session.request(
                method,
                url,
                params=dict(params) if params else None,
                json=dict(body) if body is not None else None,
                headers=JSON_HEADERS if body is not None else None,
                timeout=self._settings.timeout_seconds,
                verify=self._settings.verify_tls,
            )
        except requests.RequestException as exc:
            LOGGER.error("API request %s %s failed: %s", method, url, exc)
            raise ApiError(describe_failure(0, None), status=0, url=url) from exc

        if response.ok:
            return _json_or_none(response)

        error_body = _json_or_none(response)
        if is_unauthorized(response.status_code, error_body):
            LOGGER.warning("Backend rejected the session for %s %s", method, url)
            if self._login_state is not None:
                self._login_state.forget()
            raise SessionExpiredError(
                "Session expired. Please log in again.", status=response.status_code, url=url
            )
        message = describe_failure(response.status_code, error_body, response.reason or "")
        LOGGER.error(
            "API error details: status=%s url=%s message=%s", response.status_code, url, message
        )
        raise ApiError(message, status=response.status_code, url=url)


def _jira_params(jira_project_key: str | None, jira_board_id: str | None) -> dict[str, str]:
    params: dict[str, str] = {}
    if jira_project_key:
        params["jiraProjectKey"] = jira_project_key
    if jira_board_id:
        params["jiraBoardId"] = jira_board_id
    return params


def _mapping(payload: Any) -> Mapping[str, Any]:
    return payload if isinstance(payload, Mapping) else {}


def _json_or_none(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
