"""Spreadsheet decoding into header-keyed rows."""

from __future__ import annotations

import logging
import struct
import zipfile
import zlib
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, time
from xml.etree.ElementTree import ParseError

import xlrd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.compdoc import CompDocError

from .upload_acceptance import AcceptedSpreadsheet

LOGGER = logging.getLogger(__name__)

SpreadsheetRow = Mapping[str, str]

# Sheet XML is read lazily, so these can surface while rows are iterated.
_XLSX_DECODE_ERRORS = (
    InvalidFileException,
    zipfile.BadZipFile,
    zlib.error,
    ParseError,
    EOFError,
    KeyError,
    OSError,
    ValueError,
)
_XLS_DECODE_ERRORS = (
    xlrd.XLRDError,
    CompDocError,
    struct.error,
    IndexError,
    OSError,
    ValueError,
    AssertionError,
)


class SpreadsheetParseError(Exception):
    """Raised when an accepted file cannot be decoded as a workbook."""


def parse_spreadsheet(upload: AcceptedSpreadsheet) -> tuple[SpreadsheetRow, ...]:
    """Read the first sheet; the first row names the columns of every later row."""
    if upload.is_legacy_format:
        grid = _read_xls_grid(upload)
    else:
        grid = _read_xlsx_grid(upload)
    rows = _rows_from_grid(grid)
    LOGGER.debug("Parsed %d rows from %s", len(rows), upload.path)
    return rows


def _read_xlsx_grid(upload: AcceptedSpreadsheet) -> list[tuple[object, ...]]:
    try:
        workbook = load_workbook(upload.path, read_only=True, data_only=True)
        try:
            if not workbook.worksheets:
                return []
            sheet = workbook.worksheets[0]
            return [tuple(row) for row in sheet.iter_rows(values_only=True)]
        finally:
            workbook.close()
    except _XLSX_DECODE_ERRORS as exc:
        raise SpreadsheetParseError(f"Unable to read workbook {upload.path}: {exc}") from exc


def _read_xls_grid(upload: AcceptedSpreadsheet) -> list[tuple[object, ...]]:
    try:
        book = xlrd.open_workbook(str(upload.path))
        if book.nsheets == 0:
            return []
        sheet = book.sheet_by_index(0)
        return [
            tuple(_xls_cell_value(cell, book.datemode) for cell in sheet.row(row_index))
            for row_index in range(sheet.nrows)
        ]
    except _XLS_DECODE_ERRORS as exc:
        raise SpreadsheetParseError(f"Unable to read workbook {upload.path}: {exc}") from exc


def _xls_cell_value(cell: xlrd.sheet.Cell, datemode: int) -> object:
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    return cell.value


def _rows_from_grid(grid: Sequence[Sequence[object]]) -> tuple[SpreadsheetRow, ...]:
    if not grid:
        return ()
    headers = [_cell_text(value).strip() for value in grid[0]]
    rows: list[SpreadsheetRow] = []
    for raw_row in grid[1:]:
        row = dict(_named_cells(headers, raw_row))
        if row:
            rows.append(row)
    return tuple(rows)


def _named_cells(headers: Sequence[str], values: Iterable[object]) -> Iterable[tuple[str, str]]:
    for header, value in zip(headers, values, strict=False):
        if not header:
            continue
        text = _cell_text(value)
        if text.strip():
            yield header, text


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat() if value.time() == time() else value.isoformat()
    if isinstance(value, date | time):
        return value.isoformat()
    return str(value)
