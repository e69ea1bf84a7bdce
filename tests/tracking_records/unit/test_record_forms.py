"""Form payload builder tests."""

from __future__ import annotations

import pytest
from qa_coverage_tracker.tracking_records import (
    RecordFormError,
    domain_payload,
    edited_test_case_payload,
    project_payload,
    registration_payload,
    tester_payload,
)


def test_project_payload_trims_jira_link_and_nests_domain() -> None:
    payload = project_payload(
        domain_id=2,
        name="Checkout",
        description="Card and voucher checkout",
        jira_project_key="  PAY ",
        jira_board_id=" 17 ",
    )

    assert payload == {
        "name": "Checkout",
        "description": "Card and voucher checkout",
        "status": "Active",
        "domain": {"id": 2},
        "jiraProjectKey": "PAY",
        "jiraBoardId": "17",
    }


def test_project_payload_sends_null_for_blank_jira_fields() -> None:
    payload = project_payload(
        domain_id=2, name="Checkout", description="Card and voucher checkout", jira_board_id=" "
    )

    assert payload["jiraProjectKey"] is None
    assert payload["jiraBoardId"] is None


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"domain_id": None}, "Domain is required"),
        ({"name": "Ab"}, "Project name must be at least 3 characters"),
        ({"description": "Too short"}, "Description must be at least 10 characters"),
        ({"jira_board_id": "12b"}, "Jira board id must contain only digits"),
    ],
)
def test_project_payload_rules(overrides, message) -> None:
    fields = {"domain_id": 1, "name": "Checkout", "description": "Card and voucher checkout"}

    with pytest.raises(RecordFormError, match=message):
        project_payload(**{**fields, **overrides})


def test_tester_payload_defaults_missing_experience_to_zero() -> None:
    payload = tester_payload(name="Al", role="QA", gender="Male", experience=None)

    assert payload == {"name": "Al", "role": "QA", "gender": "Male", "experience": 0}


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"name": "A"}, "Tester name must be at least 2 characters"),
        ({"gender": " "}, "Gender is required"),
        ({"experience": -1}, "Experience cannot be negative"),
    ],
)
def test_tester_payload_rules(overrides, message) -> None:
    fields = {"name": "Ann", "role": "QA", "gender": "Female", "experience": 3}

    with pytest.raises(RecordFormError, match=message):
        tester_payload(**{**fields, **overrides})


def test_registration_needs_four_character_password() -> None:
    assert registration_payload("bob", "abcd", "admin")["password"] == "abcd"
    with pytest.raises(RecordFormError, match="Password must be at least 4 characters"):
        registration_payload("bob", "abc", "admin")


def test_domain_payload_requires_name() -> None:
    assert domain_payload(" Retail ") == {"name": "Retail", "description": "", "status": "Active"}
    with pytest.raises(RecordFormError, match="Domain name is required"):
        domain_payload("  ")


def test_edited_test_case_payload_checks_enums_and_lengths() -> None:
    payload = edited_test_case_payload(
        title="Login works",
        description="Abc",
        project_id=1,
        tester_id=2,
        status="Automated",
        priority="High",
    )

    assert payload["status"] == "Automated"
    assert payload["priority"] == "High"
    with pytest.raises(RecordFormError):
        edited_test_case_payload(
            title="Login works", description="Abc", project_id=1, tester_id=2, priority="Urgent"
        )
    with pytest.raises(RecordFormError, match="Tester is required"):
        edited_test_case_payload(
            title="Login works", description="Abc", project_id=1, tester_id=None
        )
