"""Shared test case spreadsheet constants."""

from __future__ import annotations

TEMPLATE_SHEET_NAME = "Test Cases"

TITLE_HEADER = "Test Case Title"
DESCRIPTION_HEADER = "Description"
TEST_STEPS_HEADER = "Test Steps"
EXPECTED_RESULT_HEADER = "Expected Result"
PRIORITY_HEADER = "Priority"
STATUS_HEADER = "Status"
ASSIGNED_TESTER_HEADER = "Assigned Tester"

TEMPLATE_COLUMNS: tuple[str, ...] = (
    TITLE_HEADER,
    DESCRIPTION_HEADER,
    TEST_STEPS_HEADER,
    EXPECTED_RESULT_HEADER,
    PRIORITY_HEADER,
    STATUS_HEADER,
    ASSIGNED_TESTER_HEADER,
)
COLUMN_WIDTHS: tuple[int, ...] = (30, 50, 60, 40, 12, 18, 20)

SAMPLE_ROWS: tuple[tuple[str, ...], ...] = (
    (
        "Login with valid credentials",
        "Verify user can login with valid username and password",
        "1. Navigate to login page\n2. Enter valid username\n3. Enter valid password\n"
        "4. Click login button",
        "User should be logged in successfully and redirected to dashboard",
        "High",
        "Ready to Automate",
        "John Doe",
    ),
    (
        "Login with invalid credentials",
        "Verify system shows error message for invalid credentials",
        "1. Navigate to login page\n2. Enter invalid username\n3. Enter invalid password\n"
        "4. Click login button",
        "System should display error message and not allow login",
        "Medium",
        "Ready to Automate",
        "Jane Smith",
    ),
)
