"""Template ingestion exports."""

from .upload_acceptance import (
    ALLOWED_MEDIA_TYPES,
    XLS_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    AcceptedSpreadsheet,
    PendingUpload,
    UploadRejectedError,
    accept_file,
)
from .workbook_reader import SpreadsheetParseError, SpreadsheetRow, parse_spreadsheet

__all__ = [
    "ALLOWED_MEDIA_TYPES",
    "AcceptedSpreadsheet",
    "PendingUpload",
    "SpreadsheetParseError",
    "SpreadsheetRow",
    "UploadRejectedError",
    "XLSX_MEDIA_TYPE",
    "XLS_MEDIA_TYPE",
    "accept_file",
    "parse_spreadsheet",
]
