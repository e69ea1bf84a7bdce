"""Spreadsheet parsing tests."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest
from openpyxl import Workbook
from qa_coverage_tracker.template_ingestion import (
    SpreadsheetParseError,
    accept_file,
    parse_spreadsheet,
)

OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def _truncate_first_sheet(source: Path, target: Path) -> Path:
    with zipfile.ZipFile(source) as original, zipfile.ZipFile(target, "w") as damaged:
        for member in original.infolist():
            content = original.read(member.filename)
            if member.filename == "xl/worksheets/sheet1.xml":
                content = content[: len(content) // 2]
            damaged.writestr(member, content)
    return target


def _write_workbook(path: Path, *rows: tuple[object, ...], extra_sheet: bool = False) -> Path:
    workbook = Workbook()
    sheet = workbook.active
    assert sheet is not None
    for row in rows:
        sheet.append(list(row))
    if extra_sheet:
        other = workbook.create_sheet("Ignored")
        other.append(["Test Case Title"])
        other.append(["Should never be read"])
    workbook.save(path)
    return path


def test_rows_are_keyed_by_header_text(tmp_path: Path) -> None:
    path = _write_workbook(
        tmp_path / "cases.xlsx",
        ("Test Case Title", "Description", "Priority", None),
        ("Login works", "User can log in with a password", "High", "ignored"),
        ("Logout works", None, 3, None),
    )

    rows = parse_spreadsheet(accept_file(path))

    assert rows == (
        {
            "Test Case Title": "Login works",
            "Description": "User can log in with a password",
            "Priority": "High",
        },
        {"Test Case Title": "Logout works", "Priority": "3"},
    )


def test_empty_rows_are_skipped_and_only_first_sheet_is_read(tmp_path: Path) -> None:
    path = _write_workbook(
        tmp_path / "cases.xlsx",
        ("Test Case Title",),
        ("First",),
        (None,),
        ("   ",),
        ("Second",),
        extra_sheet=True,
    )

    rows = parse_spreadsheet(accept_file(path))

    assert [row["Test Case Title"] for row in rows] == ["First", "Second"]


def test_header_only_and_empty_sheets_yield_no_rows(tmp_path: Path) -> None:
    header_only = _write_workbook(tmp_path / "header.xlsx", ("Test Case Title", "Description"))
    empty = _write_workbook(tmp_path / "empty.xlsx")

    assert parse_spreadsheet(accept_file(header_only)) == ()
    assert parse_spreadsheet(accept_file(empty)) == ()


def test_cell_text_is_not_trimmed(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path / "cases.xlsx", ("Test Case Title",), ("  padded  ",))

    rows = parse_spreadsheet(accept_file(path))

    assert rows == ({"Test Case Title": "  padded  "},)


@pytest.mark.parametrize("name", ["broken.xlsx", "broken.xls"])
def test_undecodable_file_raises_parse_error(tmp_path: Path, name: str) -> None:
    path = tmp_path / name
    path.write_bytes(b"this is not a workbook at all")

    with pytest.raises(SpreadsheetParseError):
        parse_spreadsheet(accept_file(path))


def test_truncated_sheet_xml_raises_parse_error(tmp_path: Path) -> None:
    rows = [("Test Case Title", "Description")]
    rows += [(f"Case number {index}", "A description long enough") for index in range(20)]
    valid = _write_workbook(tmp_path / "valid.xlsx", *rows)
    damaged = _truncate_first_sheet(valid, tmp_path / "damaged.xlsx")

    with pytest.raises(SpreadsheetParseError):
        parse_spreadsheet(accept_file(damaged))


def test_truncated_legacy_compound_file_raises_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "damaged.xls"
    path.write_bytes(OLE_SIGNATURE + bytes(600))

    with pytest.raises(SpreadsheetParseError):
        parse_spreadsheet(accept_file(path))
