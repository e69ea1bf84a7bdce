"""Acceptance checks for spreadsheet uploads."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from qa_coverage_tracker.configuration.runtime_settings import DEFAULT_MAX_UPLOAD_BYTES

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLS_MEDIA_TYPE = "application/vnd.ms-excel"
ALLOWED_MEDIA_TYPES: tuple[str, ...] = (XLSX_MEDIA_TYPE, XLS_MEDIA_TYPE)

_SUFFIX_MEDIA_TYPES = {".xlsx": XLSX_MEDIA_TYPE, ".xls": XLS_MEDIA_TYPE}


class UploadRejectedError(Exception):
    """Raised when a selected file cannot be accepted for import."""


@dataclass(frozen=True)
class AcceptedSpreadsheet:
    """A spreadsheet file that passed the type and size checks."""

    path: Path
    media_type: str
    size_bytes: int

    @property
    def is_legacy_format(self) -> bool:
        return self.media_type == XLS_MEDIA_TYPE


def guess_media_type(path: Path | str) -> str | None:
    """Media type for a file name; spreadsheet suffixes are resolved without the OS tables."""
    suffix = Path(path).suffix.lower()
    if suffix in _SUFFIX_MEDIA_TYPES:
        return _SUFFIX_MEDIA_TYPES[suffix]
    media_type, _ = mimetypes.guess_type(str(path))
    return media_type


def accept_file(
    path: Path | str,
    media_type: str | None = None,
    *,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> AcceptedSpreadsheet:
    """Validate type and size of a selected file without reading its rows."""
    file_path = Path(path)
    if not file_path.is_file():
        raise UploadRejectedError(f"File not found: {file_path}")
    resolved_type = media_type or guess_media_type(file_path)
    if resolved_type not in ALLOWED_MEDIA_TYPES:
        raise UploadRejectedError("Please select a valid Excel file (.xlsx or .xls)")
    size_bytes = file_path.stat().st_size
    if size_bytes > max_bytes:
        raise UploadRejectedError("File size should be less than 5MB")
    return AcceptedSpreadsheet(path=file_path, media_type=resolved_type, size_bytes=size_bytes)


class PendingUpload:
    """Holds at most one accepted file until an import consumes it."""

    def __init__(self, *, max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> None:
        self._max_bytes = max_bytes
        self._current: AcceptedSpreadsheet | None = None

    @property
    def current(self) -> AcceptedSpreadsheet | None:
        return self._current

    def select(self, path: Path | str, media_type: str | None = None) -> AcceptedSpreadsheet:
        """Replace the pending file; a rejected file leaves the previous one in place."""
        accepted = accept_file(path, media_type, max_bytes=self._max_bytes)
        self._current = accepted
        return accepted

    def clear(self) -> None:
        self._current = None

    def take(self) -> AcceptedSpreadsheet:
        if self._current is None:
            raise UploadRejectedError("No file selected for import.")
        accepted, self._current = self._current, None
        return accepted
