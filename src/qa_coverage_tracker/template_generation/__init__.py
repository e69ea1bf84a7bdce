"""Template generation exports."""

from .constants import (
    ASSIGNED_TESTER_HEADER,
    COLUMN_WIDTHS,
    DESCRIPTION_HEADER,
    EXPECTED_RESULT_HEADER,
    PRIORITY_HEADER,
    SAMPLE_ROWS,
    STATUS_HEADER,
    TEMPLATE_COLUMNS,
    TEMPLATE_SHEET_NAME,
    TEST_STEPS_HEADER,
    TITLE_HEADER,
)
from .template_workbook_builder import generate_template_workbook, template_filename

__all__ = [
    "ASSIGNED_TESTER_HEADER",
    "COLUMN_WIDTHS",
    "DESCRIPTION_HEADER",
    "EXPECTED_RESULT_HEADER",
    "PRIORITY_HEADER",
    "SAMPLE_ROWS",
    "STATUS_HEADER",
    "TEMPLATE_COLUMNS",
    "TEMPLATE_SHEET_NAME",
    "TEST_STEPS_HEADER",
    "TITLE_HEADER",
    "generate_template_workbook",
    "template_filename",
]
