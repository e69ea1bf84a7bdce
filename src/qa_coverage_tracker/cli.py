"""Command line interface entry point."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from qa_coverage_tracker.backend_access import (
    ApiError,
    LoginState,
    SessionCache,
    SessionExpiredError,
    TrackerApiClient,
)
from qa_coverage_tracker.bulk_import import ImportOutcome, ImportSelection, run_bulk_import
from qa_coverage_tracker.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from qa_coverage_tracker.coverage_reconciliation import (
    KEYWORD_MIN_LENGTH,
    StatusCounts,
    basic_dashboard_stats,
    count_statuses,
    coverage_percentage,
    find_active_sprint,
    jenkins_job_series,
    pass_percentage,
    search_keyword,
    summarize_automation,
    visible_sprints,
)
from qa_coverage_tracker.list_query import (
    JENKINS_RESULT_PROFILE,
    JENKINS_TEST_CASE_PROFILE,
    JIRA_ISSUE_PROFILE,
    ListQueryError,
    ListView,
    ViewProfile,
    tracked_test_case_profile,
)
from qa_coverage_tracker.template_generation import generate_template_workbook, template_filename
from qa_coverage_tracker.template_ingestion import PendingUpload, UploadRejectedError
from qa_coverage_tracker.tracking_records import (
    AutomationStatus,
    Domain,
    PayloadMappingError,
    Project,
    RecordFormError,
    SprintStatistics,
    TestCasePriority,
    TestCaseStatus,
    Tester,
    TrackedTestCase,
    domain_payload,
    edited_test_case_payload,
    project_payload,
    registration_payload,
    tester_payload,
)

PACKAGE_LOGGER = "qa_coverage_tracker"
LOGGER = logging.getLogger(__name__)

BACKEND_ERRORS = (ApiError, PayloadMappingError)
FORM_ERRORS = (ApiError, PayloadMappingError, RecordFormError)


class CliError(Exception):
    """Custom CLI error."""


@dataclass(frozen=True)
class _CliOptions:
    config_path: str | None
    verbose: bool


@dataclass(frozen=True)
class _ListOptions:
    search: str
    filters: tuple[str, ...]
    sorts: tuple[str, ...]
    page: int
    page_size: int | None


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="qa-coverage-tracker")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=f"Path to the YAML configuration (defaults to ./{DEFAULT_CONFIG_FILENAME} when present)",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log progress to stderr.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """QA test coverage tracker client."""
    ctx.obj = _CliOptions(config_path=config_path, verbose=verbose)
    if verbose:
        _enable_verbose_logging()


def _list_options(command: Callable[..., Any]) -> Callable[..., Any]:
    decorators = (
        click.option("--search", default="", help="Case-insensitive text search."),
        click.option(
            "--filter",
            "filters",
            multiple=True,
            metavar="FIELD=VALUE",
            help="Exact-match filter; repeat for more fields.",
        ),
        click.option(
            "--sort",
            "sorts",
            multiple=True,
            metavar="COLUMN",
            help="Sort column; naming the same column again flips the direction.",
        ),
        click.option("--page", default=1, show_default=True, type=int, help="Page to show."),
        click.option("--page-size", type=int, default=None, help="Rows per page."),
    )
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="login")
@click.option("--user", "user_name", required=True, help="Backend user name")
@click.option("--password", prompt=True, hide_input=True, help="Backend password")
@click.pass_obj
def login(options: _CliOptions, user_name: str, password: str) -> None:
    """Log in and cache the session for later commands."""
    configuration = _load(options)
    login_state = _login_state(configuration)
    client = TrackerApiClient(configuration.api, login_state=login_state)
    try:
        payload = client.login(user_name, password)
    except ApiError as exc:
        raise CliError(str(exc)) from exc
    user = login_state.remember(payload)
    click.echo(f"Logged in as {user.user_name or user_name}")


@cli.command(name="logout")
@click.pass_obj
def logout(options: _CliOptions) -> None:
    """Forget the cached session."""
    _login_state(_load(options)).forget()
    click.echo("Logged out")


@cli.command(name="generate-template")
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the workbook to write (defaults to a dated name in the current directory)",
)
@click.option("--domain", "domain_name", default=None, help="Domain name used in the file name")
@click.option("--project", "project_name", default=None, help="Project name used in the file name")
def generate_template(
    output_path: str | None, domain_name: str | None, project_name: str | None
) -> None:
    """Generate the bulk import template workbook with two sample rows."""
    destination = Path(output_path or template_filename(domain_name, project_name))
    try:
        written = generate_template_workbook(destination)
    except (OSError, ValueError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(written.resolve()))


@cli.command(name="import-testcases")
@click.option(
    "--file",
    "file_path",
    required=True,
    type=click.Path(path_type=str),
    help="Filled .xlsx or .xls workbook",
)
@click.option("--project-id", required=True, type=int, help="Project receiving the test cases")
@click.option(
    "--default-tester-id",
    required=True,
    type=int,
    help="Tester used when 'Assigned Tester' is empty or unknown",
)
@click.pass_context
def import_testcases(
    ctx: click.Context, file_path: str, project_id: int, default_tester_id: int
) -> None:
    """Bulk import test cases from a spreadsheet, one row at a time."""
    options: _CliOptions = ctx.obj
    configuration = _load(options)
    pending = PendingUpload(max_bytes=configuration.imports.max_upload_bytes)
    try:
        pending.select(file_path)
    except UploadRejectedError as exc:
        raise CliError(str(exc)) from exc
    client = _authenticated_client(configuration)
    try:
        testers = client.list_testers()
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    outcome = run_bulk_import(
        pending.take(),
        ImportSelection(project_id=project_id, default_tester_id=default_tester_id),
        client,
        testers,
        stop_on=(SessionExpiredError,),
    )
    _echo_outcome(outcome)
    if not outcome.success:
        ctx.exit(1)


@cli.command(name="test-cases")
@click.option("--project-id", type=int, default=None, help="Only this project's test cases")
@click.option("--domain-id", type=int, default=None, help="Only this domain's test cases")
@_list_options
@click.pass_obj
def test_cases(  # pylint: disable=too-many-arguments
    options: _CliOptions,
    project_id: int | None,
    domain_id: int | None,
    **list_args: Any,
) -> None:
    """List tracked test cases."""
    configuration = _load(options)
    client = _authenticated_client(configuration)
    try:
        if project_id is not None:
            items = client.list_test_cases_by_project(project_id)
        elif domain_id is not None:
            items = client.list_test_cases_by_domain(domain_id)
        else:
            items = client.list_test_cases()
        projects = client.list_projects()
        testers = client.list_testers()
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc

    project_names = {project.id: project.name for project in projects}
    tester_names = {tester.id: tester.name for tester in testers}
    profile = tracked_test_case_profile(projects, testers)
    view = _build_view(items, profile, _ListOptions(**list_args), configuration)
    _echo_table(
        ("ID", "Title", "Project", "Tester", "Priority", "Status"),
        [
            (
                str(item.id),
                item.title,
                project_names.get(item.project_id, "Unknown Project"),
                tester_names.get(item.tester_id, "Unknown Tester"),
                item.priority,
                item.status,
            )
            for item in view.page_items
        ],
    )
    _echo_page_footer(view)
    _echo_status_counts(count_statuses(view.matching_items))


@cli.command(name="jenkins-results")
@click.option("--project-id", type=int, default=None, help="Backend filter: project")
@click.option("--automation-tester-id", type=int, default=None, help="Backend filter: tester")
@click.option("--job-frequency", default=None, help="Backend filter: job frequency")
@click.option("--sync", "sync_first", is_flag=True, default=False, help="Sync jobs first")
@click.option("--sync-job", default=None, help="Sync one job by name first")
@click.option("--result-id", type=int, default=None, help="List the tests of one build instead")
@_list_options
@click.pass_obj
def jenkins_results(  # pylint: disable=too-many-arguments,too-many-locals
    options: _CliOptions,
    project_id: int | None,
    automation_tester_id: int | None,
    job_frequency: str | None,
    sync_first: bool,
    sync_job: str | None,
    result_id: int | None,
    **list_args: Any,
) -> None:
    """List CI build results, or the tests of one build with --result-id."""
    configuration = _load(options)
    client = _authenticated_client(configuration)
    list_options = _ListOptions(**list_args)
    try:
        if sync_first:
            client.sync_jenkins_jobs()
        if sync_job:
            client.sync_jenkins_job(sync_job)
        if result_id is not None:
            cases = client.list_jenkins_test_cases(result_id)
        elif project_id or automation_tester_id or job_frequency:
            results = client.list_filtered_jenkins_results(
                project_id=project_id,
                automation_tester_id=automation_tester_id,
                job_frequency=job_frequency,
            )
        else:
            results = client.list_jenkins_results()
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc

    if result_id is not None:
        case_view = _build_view(cases, JENKINS_TEST_CASE_PROFILE, list_options, configuration)
        _echo_table(
            ("ID", "Test", "Class", "Status", "Duration"),
            [
                (str(case.id), case.test_name, case.class_name, case.status, f"{case.duration:g}")
                for case in case_view.page_items
            ],
        )
        _echo_page_footer(case_view)
        return

    view = _build_view(results, JENKINS_RESULT_PROFILE, list_options, configuration)
    _echo_table(
        ("ID", "Job", "Build", "Status", "Passed", "Failed", "Skipped", "Pass %", "Timestamp"),
        [
            (
                str(result.id),
                result.job_name,
                result.build_number,
                result.build_status,
                str(result.passed_tests),
                str(result.failed_tests),
                str(result.skipped_tests),
                f"{pass_percentage(result)}%",
                result.build_timestamp.isoformat() if result.build_timestamp else "",
            )
            for result in view.page_items
        ],
    )
    _echo_page_footer(view)


@cli.command(name="sprint-issues")
@click.option("--project-key", default=None, help="Issue-tracker project key")
@click.option("--board-id", default=None, help="Issue-tracker board id")
@click.option("--sprint-id", default=None, help="Sprint to show (defaults to the active sprint)")
@click.option("--show-all", is_flag=True, default=False, help="List every sprint, not only active")
@click.option("--sync", "sync_first", is_flag=True, default=False, help="Sync issues first")
@_list_options
@click.pass_obj
def sprint_issues(  # pylint: disable=too-many-arguments,too-many-locals
    options: _CliOptions,
    project_key: str | None,
    board_id: str | None,
    sprint_id: str | None,
    show_all: bool,
    sync_first: bool,
    **list_args: Any,
) -> None:
    """Show sprint issues with their linked test cases' automation verdicts."""
    configuration = _load(options)
    client = _authenticated_client(configuration)
    try:
        sprints = client.list_sprints(project_key, board_id)
        if show_all:
            for sprint in visible_sprints(sprints, show_all=True):
                marker = "*" if sprint.is_active else " "
                click.echo(f"{marker} {sprint.id}  {sprint.name}  ({sprint.state})")
            return
        if sprint_id is None:
            active = find_active_sprint(sprints)
            if active is None:
                raise CliError("No active sprint found; pass --sprint-id or --show-all.")
            sprint_id = active.id
        if sync_first:
            issues = client.sync_sprint_issues(sprint_id, project_key, board_id)
        else:
            issues = client.list_sprint_issues(sprint_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc

    view = _build_view(issues, JIRA_ISSUE_PROFILE, _ListOptions(**list_args), configuration)
    _echo_table(
        ("Key", "Summary", "Status", "Priority", "Assignee", "Test cases"),
        [
            (
                issue.jira_key,
                issue.summary,
                issue.status,
                issue.priority,
                issue.assignee_display_name,
                ", ".join(
                    f"{case.qtest_title} [{case.automation_status.display_label}]"
                    for case in issue.linked_test_cases
                ),
            )
            for issue in view.page_items
        ],
    )
    _echo_page_footer(view)
    _echo_sprint_statistics(summarize_automation(issues))


@cli.command(name="set-automation")
@click.argument("test_case_id", type=int)
@click.argument(
    "status",
    type=click.Choice([status.value for status in AutomationStatus], case_sensitive=False),
)
@click.pass_obj
def set_automation(options: _CliOptions, test_case_id: int, status: str) -> None:
    """Record whether a sprint test case can be automated."""
    client = _authenticated_client(_load(options))
    try:
        updated = client.update_automation_status(test_case_id, AutomationStatus(status.upper()))
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"{updated.qtest_title}: {updated.automation_status.display_label}")


@cli.command(name="register")
@click.option("--user", "user_name", required=True, help="New backend user name")
@click.option(
    "--password", prompt=True, hide_input=True, confirmation_prompt=True, help="New password"
)
@click.option("--role", required=True, help="Role granted to the new user")
@click.pass_obj
def register(options: _CliOptions, user_name: str, password: str, role: str) -> None:
    """Register a backend user account."""
    client = TrackerApiClient(_load(options).api)
    try:
        client.register_user(registration_payload(user_name, password, role))
    except RecordFormError as exc:
        raise CliError(str(exc)) from exc
    except ApiError as exc:
        raise CliError(f"Unable to register: {exc}") from exc
    click.echo(f"Registered {user_name}; log in with 'qa-coverage-tracker login'.")


@cli.group(name="domains")
def domains() -> None:
    """List and maintain domains."""


@domains.command(name="list")
@click.option("--active-only", is_flag=True, default=False, help="Only active domains")
@click.pass_obj
def list_domains(options: _CliOptions, active_only: bool) -> None:
    """List domains."""
    client = _authenticated_client(_load(options))
    try:
        items = client.list_active_domains() if active_only else client.list_domains()
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_table(
        ("ID", "Name", "Status", "Description"),
        [(str(domain.id), domain.name, domain.status, domain.description) for domain in items],
    )


@domains.command(name="show")
@click.argument("domain_id", type=int)
@click.pass_obj
def show_domain(options: _CliOptions, domain_id: int) -> None:
    """Show one domain."""
    client = _authenticated_client(_load(options))
    try:
        domain = client.get_domain(domain_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_domain(domain)


@domains.command(name="add")
@click.option("--name", required=True, help="Domain name")
@click.option("--description", default="", help="Domain description")
@click.option("--status", default="Active", show_default=True, help="Domain status")
@click.pass_obj
def add_domain(options: _CliOptions, name: str, description: str, status: str) -> None:
    """Create a domain."""
    client = _authenticated_client(_load(options))
    try:
        created = client.create_domain(domain_payload(name, description, status))
    except FORM_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Created domain {created.id}: {created.name}")


@domains.command(name="update")
@click.argument("domain_id", type=int)
@click.option("--name", default=None, help="New domain name")
@click.option("--description", default=None, help="New description")
@click.option("--status", default=None, help="New status")
@click.pass_obj
def update_domain(
    options: _CliOptions,
    domain_id: int,
    name: str | None,
    description: str | None,
    status: str | None,
) -> None:
    """Change a domain; options left out keep their current value."""
    client = _authenticated_client(_load(options))
    try:
        current = client.get_domain(domain_id)
        updated = client.update_domain(
            domain_id,
            domain_payload(
                _or_current(name, current.name),
                _or_current(description, current.description),
                _or_current(status, current.status),
            ),
        )
    except FORM_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Updated domain {updated.id}: {updated.name}")


@domains.command(name="delete")
@click.argument("domain_id", type=int)
@click.confirmation_option(prompt="Delete this domain?")
@click.pass_obj
def delete_domain(options: _CliOptions, domain_id: int) -> None:
    """Delete a domain."""
    client = _authenticated_client(_load(options))
    try:
        client.delete_domain(domain_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Deleted domain {domain_id}")


@cli.group(name="projects")
def projects() -> None:
    """List and maintain projects and their Jira board links."""


@projects.command(name="list")
@click.option("--domain-id", type=int, default=None, help="Only this domain's projects")
@click.pass_obj
def list_projects(options: _CliOptions, domain_id: int | None) -> None:
    """List projects."""
    client = _authenticated_client(_load(options))
    try:
        if domain_id is None:
            items = client.list_projects()
        else:
            items = client.list_projects_by_domain(domain_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_table(
        ("ID", "Name", "Domain", "Status", "Jira key", "Board"),
        [
            (
                str(project.id),
                project.name,
                project.domain_name or "Unknown Domain",
                project.status,
                project.jira_project_key or "",
                project.jira_board_id or "",
            )
            for project in items
        ],
    )


@projects.command(name="show")
@click.argument("project_id", type=int)
@click.pass_obj
def show_project(options: _CliOptions, project_id: int) -> None:
    """Show one project."""
    client = _authenticated_client(_load(options))
    try:
        project = client.get_project(project_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_project(project)


@projects.command(name="add")
@click.option("--domain-id", required=True, type=int, help="Domain owning the project")
@click.option("--name", required=True, help="Project name, at least 3 characters")
@click.option("--description", required=True, help="Description, at least 10 characters")
@click.option("--status", default="Active", show_default=True, help="Project status")
@click.option("--jira-project-key", default=None, help="Jira project key")
@click.option("--jira-board-id", default=None, help="Numeric Jira board id")
@click.pass_obj
def add_project(  # pylint: disable=too-many-arguments
    options: _CliOptions,
    domain_id: int,
    name: str,
    description: str,
    status: str,
    jira_project_key: str | None,
    jira_board_id: str | None,
) -> None:
    """Create a project under a domain."""
    client = _authenticated_client(_load(options))
    try:
        created = client.create_project(
            project_payload(
                domain_id=domain_id,
                name=name,
                description=description,
                status=status,
                jira_project_key=jira_project_key,
                jira_board_id=jira_board_id,
            )
        )
    except FORM_ERRORS as exc:
        raise CliError(f"Error creating project: {exc}") from exc
    click.echo(f"Created project {created.id}: {created.name}")


@projects.command(name="update")
@click.argument("project_id", type=int)
@click.option("--domain-id", type=int, default=None, help="Move to another domain")
@click.option("--name", default=None, help="New project name")
@click.option("--description", default=None, help="New description")
@click.option("--status", default=None, help="New status")
@click.option("--jira-project-key", default=None, help="New Jira project key")
@click.option("--jira-board-id", default=None, help="New numeric Jira board id")
@click.pass_obj
def update_project(  # pylint: disable=too-many-arguments
    options: _CliOptions,
    project_id: int,
    domain_id: int | None,
    name: str | None,
    description: str | None,
    status: str | None,
    jira_project_key: str | None,
    jira_board_id: str | None,
) -> None:
    """Change a project; options left out keep their current value."""
    client = _authenticated_client(_load(options))
    try:
        current = client.get_project(project_id)
        updated = client.update_project(
            project_id,
            project_payload(
                domain_id=_or_current(domain_id, current.domain_id),
                name=_or_current(name, current.name),
                description=_or_current(description, current.description),
                status=_or_current(status, current.status),
                jira_project_key=_or_current(jira_project_key, current.jira_project_key),
                jira_board_id=_or_current(jira_board_id, current.jira_board_id),
            ),
        )
    except FORM_ERRORS as exc:
        raise CliError(f"Error updating project: {exc}") from exc
    click.echo(f"Updated project {updated.id}: {updated.name}")


@projects.command(name="delete")
@click.argument("project_id", type=int)
@click.confirmation_option(prompt="Delete this project?")
@click.pass_obj
def delete_project(options: _CliOptions, project_id: int) -> None:
    """Delete a project."""
    client = _authenticated_client(_load(options))
    try:
        client.delete_project(project_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Deleted project {project_id}")


@cli.group(name="testers")
def testers() -> None:
    """List and register testers."""


@testers.command(name="list")
@click.pass_obj
def list_testers(options: _CliOptions) -> None:
    """List testers."""
    client = _authenticated_client(_load(options))
    try:
        items = client.list_testers()
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_table(
        ("ID", "Name", "Role", "Gender", "Experience"),
        [
            (
                str(tester.id),
                tester.name,
                tester.role,
                tester.gender,
                "" if tester.experience is None else str(tester.experience),
            )
            for tester in items
        ],
    )


@testers.command(name="show")
@click.argument("tester_id", type=int)
@click.pass_obj
def show_tester(options: _CliOptions, tester_id: int) -> None:
    """Show one tester."""
    client = _authenticated_client(_load(options))
    try:
        tester = client.get_tester(tester_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_tester(tester)


@testers.command(name="add")
@click.option("--name", required=True, help="Tester name, at least 2 characters")
@click.option("--role", required=True, help="Tester role")
@click.option("--gender", required=True, help="Tester gender")
@click.option("--experience", type=int, default=0, show_default=True, help="Years of experience")
@click.pass_obj
def add_tester(
    options: _CliOptions, name: str, role: str, gender: str, experience: int
) -> None:
    """Register a tester."""
    client = _authenticated_client(_load(options))
    try:
        created = client.create_tester(
            tester_payload(name=name, role=role, gender=gender, experience=experience)
        )
    except FORM_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Created tester {created.id}: {created.name}")


@testers.command(name="update")
@click.argument("tester_id", type=int)
@click.option("--name", default=None, help="New name")
@click.option("--role", default=None, help="New role")
@click.option("--gender", default=None, help="New gender")
@click.option("--experience", type=int, default=None, help="New years of experience")
@click.pass_obj
def update_tester(  # pylint: disable=too-many-arguments
    options: _CliOptions,
    tester_id: int,
    name: str | None,
    role: str | None,
    gender: str | None,
    experience: int | None,
) -> None:
    """Change a tester; options left out keep their current value."""
    client = _authenticated_client(_load(options))
    try:
        current = client.get_tester(tester_id)
        updated = client.update_tester(
            tester_id,
            tester_payload(
                name=_or_current(name, current.name),
                role=_or_current(role, current.role),
                gender=_or_current(gender, current.gender),
                experience=_or_current(experience, current.experience),
            ),
        )
    except FORM_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Updated tester {updated.id}: {updated.name}")


@testers.command(name="delete")
@click.argument("tester_id", type=int)
@click.confirmation_option(prompt="Delete this tester?")
@click.pass_obj
def delete_tester(options: _CliOptions, tester_id: int) -> None:
    """Delete a tester."""
    client = _authenticated_client(_load(options))
    try:
        client.delete_tester(tester_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Deleted tester {tester_id}")


@cli.group(name="test-case")
def test_case() -> None:
    """Show, edit or delete one tracked test case."""


@test_case.command(name="show")
@click.argument("test_case_id", type=int)
@click.pass_obj
def show_test_case(options: _CliOptions, test_case_id: int) -> None:
    """Show one tracked test case with its steps."""
    client = _authenticated_client(_load(options))
    try:
        item = client.get_test_case(test_case_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_test_case(item)


@test_case.command(name="update")
@click.argument("test_case_id", type=int)
@click.option("--title", default=None, help="New title, at least 5 characters")
@click.option("--description", default=None, help="New description")
@click.option("--project-id", type=int, default=None, help="Move to another project")
@click.option("--tester-id", type=int, default=None, help="Assign another tester")
@click.option(
    "--status",
    type=click.Choice([status.value for status in TestCaseStatus]),
    default=None,
    help="New status",
)
@click.option(
    "--priority",
    type=click.Choice([priority.value for priority in TestCasePriority]),
    default=None,
    help="New priority",
)
@click.pass_obj
def update_test_case(  # pylint: disable=too-many-arguments
    options: _CliOptions,
    test_case_id: int,
    title: str | None,
    description: str | None,
    project_id: int | None,
    tester_id: int | None,
    status: str | None,
    priority: str | None,
) -> None:
    """Change a tracked test case; options left out keep their current value."""
    client = _authenticated_client(_load(options))
    try:
        current = client.get_test_case(test_case_id)
        client.update_test_case(
            test_case_id,
            edited_test_case_payload(
                title=_or_current(title, current.title),
                description=_or_current(description, current.description),
                project_id=_or_current(project_id, current.project_id),
                tester_id=_or_current(tester_id, current.tester_id),
                status=_or_current(status, current.status),
                priority=_or_current(priority, current.priority),
            ),
        )
    except FORM_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Updated test case {test_case_id}")


@test_case.command(name="delete")
@click.argument("test_case_id", type=int)
@click.confirmation_option(prompt="Delete this test case?")
@click.pass_obj
def delete_test_case(options: _CliOptions, test_case_id: int) -> None:
    """Delete a tracked test case."""
    client = _authenticated_client(_load(options))
    try:
        client.delete_test_case(test_case_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Deleted test case {test_case_id}")


@cli.command(name="dashboard")
@click.option("--domain-id", type=int, default=None, help="Status breakdown for one domain")
@click.option("--project-id", type=int, default=None, help="Status breakdown for one project")
@click.pass_obj
def dashboard(  # pylint: disable=too-many-locals
    options: _CliOptions, domain_id: int | None, project_id: int | None
) -> None:
    """Show coverage totals, a status breakdown and CI job pass rates.

    When the statistics endpoint fails, only the domain and project counts are
    shown, computed from the listings.
    """
    client = _authenticated_client(_load(options))
    scope = None
    try:
        try:
            stats = client.get_dashboard_stats()
        except SessionExpiredError:
            raise
        except ApiError as exc:
            LOGGER.warning("Error loading dashboard stats, counting listings instead: %s", exc)
            stats = basic_dashboard_stats(client.list_active_domains(), client.list_projects())
        if project_id is not None:
            scope = (f"Project {project_id}", client.list_test_cases_by_project(project_id))
        elif domain_id is not None:
            scope = (f"Domain {domain_id}", client.list_test_cases_by_domain(domain_id))
        jenkins_stats = client.get_jenkins_statistics()
        results = client.list_jenkins_results()
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc

    click.echo(
        f"Domains: {stats.total_domains} | Projects: {stats.total_projects} | "
        f"Testers: {stats.total_testers} | Test cases: {stats.total_test_cases}"
    )
    covered = stats.covered_test_cases
    click.echo(
        f"Automated: {covered} | Not Automated: {stats.total_test_cases - covered} "
        f"({coverage_percentage(covered, stats.total_test_cases)}% covered)"
    )
    if scope is not None:
        label, scoped_cases = scope
        counts = count_statuses(scoped_cases)
        click.echo(f"{label}: {counts.total} test cases")
        _echo_status_counts(counts)
    click.echo(
        f"CI jobs: {jenkins_stats.total_jobs} | Successful: {jenkins_stats.successful_jobs} | "
        f"Failed: {jenkins_stats.failed_jobs}"
    )
    _echo_table(
        ("Job", "Passed", "Failed", "Skipped", "Pass %"),
        [
            (
                series.job_name,
                str(series.passed),
                str(series.failed),
                str(series.skipped),
                f"{series.pass_percentage}%",
            )
            for series in jenkins_job_series(results)
        ],
    )


@cli.command(name="jenkins-check")
@click.pass_context
def jenkins_check(ctx: click.Context) -> None:
    """Check that the backend can reach Jenkins."""
    client = _authenticated_client(_load(ctx.obj))
    try:
        connected = bool(client.test_jenkins_connection().get("connected"))
    except SessionExpiredError as exc:
        raise CliError(str(exc)) from exc
    except ApiError as exc:
        LOGGER.error("Error testing Jenkins connection: %s", exc)
        connected = False
    click.echo(f"Jenkins connection: {'connected' if connected else 'not connected'}")
    if not connected:
        ctx.exit(1)


@cli.command(name="jenkins-frequencies")
@click.pass_obj
def jenkins_frequencies(options: _CliOptions) -> None:
    """List the job frequencies accepted by the jenkins-results filter."""
    client = _authenticated_client(_load(options))
    try:
        frequencies = client.list_job_frequencies()
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    if not frequencies:
        click.echo("No job frequencies.")
    for frequency in frequencies:
        click.echo(frequency)


@cli.command(name="jenkins-save")
@click.argument("result_id", type=int)
@click.option("--notes", default=None, help="Notes stored with the build")
@click.option("--automation-tester-id", type=int, default=None, help="Automation owner")
@click.option("--manual-tester-id", type=int, default=None, help="Manual testing owner")
@click.option("--project-id", type=int, default=None, help="Project the job belongs to")
@click.pass_obj
def jenkins_save(  # pylint: disable=too-many-arguments
    options: _CliOptions,
    result_id: int,
    notes: str | None,
    automation_tester_id: int | None,
    manual_tester_id: int | None,
    project_id: int | None,
) -> None:
    """Save notes and owners for one CI build."""
    client = _authenticated_client(_load(options))
    try:
        client.save_jenkins_job_data(
            result_id,
            notes=notes,
            automation_tester_id=automation_tester_id,
            manual_tester_id=manual_tester_id,
            project_id=project_id,
        )
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Saved build {result_id}")


@cli.command(name="jira-check")
@click.pass_context
def jira_check(ctx: click.Context) -> None:
    """Check that the backend can reach Jira."""
    client = _authenticated_client(_load(ctx.obj))
    try:
        status = client.test_jira_connection()
    except SessionExpiredError as exc:
        raise CliError(str(exc)) from exc
    except ApiError as exc:
        LOGGER.error("Connection test failed: %s", exc)
        status = {"connected": False, "message": "Connection failed"}
    connected = bool(status.get("connected"))
    message = status.get("message") or ("Connected" if connected else "Not connected")
    click.echo(f"Jira connection: {message}")
    if not connected:
        ctx.exit(1)


@cli.command(name="sprint-stats")
@click.argument("sprint_id")
@click.pass_obj
def sprint_stats(options: _CliOptions, sprint_id: str) -> None:
    """Show the backend's automation verdict totals for one sprint."""
    client = _authenticated_client(_load(options))
    try:
        stats = client.get_sprint_statistics(sprint_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_sprint_statistics(stats)


@cli.command(name="map-test-case")
@click.argument("test_case_id", type=int)
@click.option("--project-id", type=int, default=None, help="Project to map the test case to")
@click.option("--tester-id", type=int, default=None, help="Tester to assign")
@click.pass_obj
def map_test_case(
    options: _CliOptions, test_case_id: int, project_id: int | None, tester_id: int | None
) -> None:
    """Map a sprint test case to a project and tester."""
    client = _authenticated_client(_load(options))
    try:
        project_names = {project.id: project.name for project in client.list_manual_page_projects()}
        tester_names = {tester.id: tester.name for tester in client.list_manual_page_testers()}
        if project_id is not None and project_id not in project_names:
            raise CliError(f"Unknown project id {project_id}")
        if tester_id is not None and tester_id not in tester_names:
            raise CliError(f"Unknown tester id {tester_id}")
        updated = client.map_test_case(test_case_id, project_id=project_id, tester_id=tester_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    project = updated.project_name or project_names.get(updated.project_id, "Unassigned")
    tester = updated.assigned_tester_name or tester_names.get(
        updated.assigned_tester_id, "Unassigned"
    )
    click.echo(f"{updated.qtest_title}: project {project}, tester {tester}")


@cli.command(name="keyword-search")
@click.argument("keyword")
@click.option("--issue", "jira_key", default=None, help="Search one issue's comments only")
@click.option("--project-key", default=None, help="Limit the global search to a Jira project")
@click.option("--sprint-id", default=None, help="Limit the global search to one sprint")
@click.pass_obj
def keyword_search(
    options: _CliOptions,
    keyword: str,
    jira_key: str | None,
    project_key: str | None,
    sprint_id: str | None,
) -> None:
    """Count a keyword in issue comments, for one issue or across issues."""
    term = search_keyword(keyword)
    if term is None:
        raise CliError(f"Keyword must be at least {KEYWORD_MIN_LENGTH} characters")
    client = _authenticated_client(_load(options))
    try:
        if jira_key:
            issue = client.search_keyword_in_comments(jira_key, term)
            click.echo(f"{issue.jira_key}: {issue.keyword_count} occurrence(s) of '{term}'")
            return
        result = client.global_keyword_search(term, project_key, sprint_id)
    except BACKEND_ERRORS as exc:
        raise CliError(str(exc)) from exc
    matching = result.get("matchingIssues") or []
    click.echo(
        f"'{term}': {result.get('totalOccurrences') or 0} occurrence(s) in "
        f"{result.get('totalCount') or 0} issue(s)"
    )
    _echo_table(
        ("Key", "Summary", "Occurrences"),
        [
            (
                str(item.get("jiraKey", "")),
                str(item.get("summary", "")),
                str(item.get("keywordCount", 0)),
            )
            for item in matching
            if isinstance(item, dict)
        ],
    )


def _enable_verbose_logging() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    if any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def _load(options: _CliOptions) -> Configuration:
    config_path = options.config_path
    if config_path is None and Path(DEFAULT_CONFIG_FILENAME).is_file():
        config_path = DEFAULT_CONFIG_FILENAME
    try:
        return load_configuration(config_path, environ=os.environ)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc


def _login_state(configuration: Configuration) -> LoginState:
    cache = SessionCache(configuration.session.cache_path)
    return LoginState(cache, configuration.session.ttl_ms)


def _authenticated_client(configuration: Configuration) -> TrackerApiClient:
    login_state = _login_state(configuration)
    if login_state.current_user() is None:
        raise CliError("Not logged in. Run 'qa-coverage-tracker login' first.")
    return TrackerApiClient(configuration.api, login_state=login_state)


def _build_view(
    items: Sequence[Any],
    profile: ViewProfile,
    list_options: _ListOptions,
    configuration: Configuration,
) -> ListView[Any]:
    page_size = list_options.page_size or configuration.imports.page_size
    if page_size < 1:
        raise CliError("--page-size must be a positive integer")
    view: ListView[Any] = ListView(items, profile, page_size=page_size)
    try:
        if list_options.search:
            view.search(list_options.search)
        for raw_filter in list_options.filters:
            field_name, separator, value = raw_filter.partition("=")
            if not separator:
                raise CliError(f"Filter must look like FIELD=VALUE, got '{raw_filter}'")
            view.set_filter(field_name.strip(), value.strip())
        for column in list_options.sorts:
            view.toggle_sort(column)
    except ListQueryError as exc:
        raise CliError(str(exc)) from exc
    if list_options.page != 1 and not view.go_to_page(list_options.page):
        click.echo(
            f"Page {list_options.page} is out of range; showing page {view.state.page}.", err=True
        )
    return view


def _echo_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    if not rows:
        click.echo("No matching items.")
        return
    cells = [[_single_line(value) for value in row] for row in rows]
    widths = [
        max(len(header), *(len(row[index]) for row in cells))
        for index, header in enumerate(headers)
    ]
    click.echo(_table_line(headers, widths))
    for row in cells:
        click.echo(_table_line(row, widths))


def _table_line(values: Sequence[str], widths: Sequence[int]) -> str:
    padded = (value.ljust(width) for value, width in zip(values, widths, strict=True))
    return "  ".join(padded).rstrip()


def _echo_page_footer(view: ListView[Any]) -> None:
    click.echo(
        f"Page {view.state.page} of {view.total_pages} "
        f"({len(view.matching_items)} matching, {len(view.all_items)} total)"
    )


def _echo_status_counts(counts: StatusCounts) -> None:
    click.echo(
        f"Ready to Automate: {counts.ready_to_automate} | In Progress: {counts.in_progress} | "
        f"Automated: {counts.automated} | Completed: {counts.completed}"
    )


def _echo_sprint_statistics(stats: SprintStatistics) -> None:
    click.echo(
        f"Test cases: {stats.total_test_cases} | Ready to Automate: {stats.ready_to_automate} | "
        f"Not Automatable: {stats.not_automatable} | Pending: {stats.pending}"
    )


def _echo_fields(fields: Sequence[tuple[str, object]]) -> None:
    width = max(len(label) for label, _ in fields)
    for label, value in fields:
        text = "" if value is None else str(value)
        click.echo(f"{label.ljust(width)}  {text}".rstrip())


def _echo_outcome(outcome: ImportOutcome) -> None:
    click.echo(f"Total rows: {outcome.total_rows}")
    click.echo(f"Imported: {outcome.success_count}")
    click.echo(f"Failed: {outcome.error_count}")
    for message in outcome.errors:
        click.echo(message, err=True)
    for message in outcome.duplicates:
        click.echo(message, err=True)


def _echo_domain(domain: Domain) -> None:
    _echo_fields(
        [
            ("ID", domain.id),
            ("Name", domain.name),
            ("Status", domain.status),
            ("Description", domain.description),
        ]
    )


def _echo_project(project: Project) -> None:
    _echo_fields(
        [
            ("ID", project.id),
            ("Name", project.name),
            ("Domain", project.domain_name or project.domain_id),
            ("Status", project.status),
            ("Description", project.description),
            ("Jira key", project.jira_project_key),
            ("Jira board", project.jira_board_id),
        ]
    )


def _echo_tester(tester: Tester) -> None:
    _echo_fields(
        [
            ("ID", tester.id),
            ("Name", tester.name),
            ("Role", tester.role),
            ("Gender", tester.gender),
            ("Experience", tester.experience),
            ("Email", tester.email),
        ]
    )


def _echo_test_case(item: TrackedTestCase) -> None:
    _echo_fields(
        [
            ("ID", item.id),
            ("Title", item.title),
            ("Project", item.project_id),
            ("Tester", item.tester_id),
            ("Priority", item.priority),
            ("Status", item.status),
            ("Description", item.description),
            ("Steps", _single_line(item.test_steps)),
            ("Expected", _single_line(item.expected_result)),
        ]
    )


def _or_current(value: Any, current: Any) -> Any:
    return current if value is None else value


def _single_line(value: str) -> str:
    return " ".join(str(value).split())


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        exit_code = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return exit_code if isinstance(exit_code, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
