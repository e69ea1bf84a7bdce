"""End-to-end bulk import from a workbook on disk."""

from __future__ import annotations

import zipfile
from pathlib import Path

from openpyxl import Workbook
from qa_coverage_tracker.bulk_import import ImportSelection, run_bulk_import
from qa_coverage_tracker.template_generation import generate_template_workbook
from qa_coverage_tracker.template_ingestion import accept_file
from qa_coverage_tracker.tracking_records import Tester

TESTERS = (Tester(id=11, name="John Doe"), Tester(id=12, name="Jane Smith"))


def test_template_rows_import_with_tester_lookup(tmp_path: Path, store_factory) -> None:
    upload = accept_file(generate_template_workbook(tmp_path / "template.xlsx"))
    store = store_factory()

    outcome = run_bulk_import(
        upload, ImportSelection(project_id=1, default_tester_id=99), store, TESTERS
    )

    assert outcome.success is True
    assert outcome.total_rows == 2
    assert [(item["title"], item["testerId"], item["priority"]) for item in store.created] == [
        ("Login with valid credentials", 11, "High"),
        ("Login with invalid credentials", 12, "Medium"),
    ]


def test_rows_with_problems_are_reported_by_spreadsheet_row(tmp_path: Path, store_factory) -> None:
    workbook = Workbook()
    sheet = workbook.active
    assert sheet is not None
    sheet.append(["Test Case Title", "Description", "Assigned Tester"])
    sheet.append(["Valid row title", "Description long enough", "Someone Else"])
    sheet.append(["Bad", "Description long enough", None])
    sheet.append(["valid ROW title", "Description long enough", None])
    path = tmp_path / "cases.xlsx"
    workbook.save(path)
    store = store_factory()

    outcome = run_bulk_import(
        accept_file(path), ImportSelection(project_id=1, default_tester_id=99), store, TESTERS
    )

    assert outcome.total_rows == 3
    assert outcome.success_count == 1
    assert outcome.errors == (
        "Row 3: Title is required and must be at least 5 characters long",
    )
    assert outcome.duplicates == ('Row 4: Test case "valid ROW title" already exists',)
    assert store.created[0]["testerId"] == 99


def test_unreadable_file_degrades_to_single_error(tmp_path: Path, store_factory) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a zip archive")
    store = store_factory()

    outcome = run_bulk_import(
        accept_file(path), ImportSelection(project_id=1, default_tester_id=99), store, TESTERS
    )

    assert outcome.total_rows == 0
    assert outcome.success_count == 0
    assert outcome.error_count == 1
    assert outcome.errors == (
        "Failed to process file. Please check the file format and try again.",
    )
    assert store.calls == []


def test_damaged_sheet_inside_valid_archive_degrades_to_single_error(
    tmp_path: Path, store_factory
) -> None:
    template = generate_template_workbook(tmp_path / "template.xlsx")
    damaged = tmp_path / "damaged.xlsx"
    with zipfile.ZipFile(template) as original, zipfile.ZipFile(damaged, "w") as copy:
        for member in original.infolist():
            content = original.read(member.filename)
            if member.filename == "xl/worksheets/sheet1.xml":
                content = content[: len(content) // 2]
            copy.writestr(member, content)
    store = store_factory()

    outcome = run_bulk_import(
        accept_file(damaged), ImportSelection(project_id=1, default_tester_id=99), store, TESTERS
    )

    assert (outcome.total_rows, outcome.error_count) == (0, 1)
    assert store.calls == []


def test_damaged_legacy_workbook_degrades_to_single_error(tmp_path: Path, store_factory) -> None:
    path = tmp_path / "damaged.xls"
    path.write_bytes(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + bytes(600))
    store = store_factory()

    outcome = run_bulk_import(
        accept_file(path), ImportSelection(project_id=1, default_tester_id=99), store, TESTERS
    )

    assert (outcome.total_rows, outcome.error_count) == (0, 1)
    assert store.calls == []
