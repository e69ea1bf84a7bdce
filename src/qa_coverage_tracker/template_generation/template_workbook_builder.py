"""Excel template generation service."""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .constants import COLUMN_WIDTHS, SAMPLE_ROWS, TEMPLATE_COLUMNS, TEMPLATE_SHEET_NAME

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9]")


def generate_template_workbook(output_path: Path | str) -> Path:
    """Create the import template: header row, two sample rows and fixed column widths."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = TEMPLATE_SHEET_NAME

    for column_index, (name, width) in enumerate(
        zip(TEMPLATE_COLUMNS, COLUMN_WIDTHS, strict=True), start=1
    ):
        sheet.cell(row=1, column=column_index, value=name)
        sheet.column_dimensions[get_column_letter(column_index)].width = width

    for row_index, sample in enumerate(SAMPLE_ROWS, start=2):
        for column_index, value in enumerate(sample, start=1):
            cell = sheet.cell(row=row_index, column=column_index, value=value)
            if "\n" in value:
                cell.alignment = Alignment(wrap_text=True, vertical="top")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    return output_path


def template_filename(
    domain_name: str | None, project_name: str | None, today: date | None = None
) -> str:
    """Download name ``TestCases_Template_<domain>_<project>_<YYYY-MM-DD>.xlsx``."""
    domain_part = _safe_name(domain_name) if domain_name else "Unknown_Domain"
    project_part = _safe_name(project_name) if project_name else "Project"
    day = (today or date.today()).isoformat()
    return f"TestCases_Template_{domain_part}_{project_part}_{day}.xlsx"


def _safe_name(value: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", value)
