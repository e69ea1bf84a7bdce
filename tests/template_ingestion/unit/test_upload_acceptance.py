"""Upload acceptance tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from qa_coverage_tracker.template_ingestion import (
    XLS_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    PendingUpload,
    UploadRejectedError,
    accept_file,
)

FIVE_MIB = 5 * 1024 * 1024


def _sized_file(path: Path, size: int) -> Path:
    with path.open("wb") as handle:
        handle.truncate(size)
    return path


def test_accepts_xlsx_at_exactly_the_size_limit(tmp_path: Path) -> None:
    path = _sized_file(tmp_path / "cases.xlsx", FIVE_MIB)

    accepted = accept_file(path)

    assert accepted.path == path
    assert accepted.media_type == XLSX_MEDIA_TYPE
    assert accepted.size_bytes == FIVE_MIB
    assert accepted.is_legacy_format is False


def test_rejects_file_one_byte_over_the_limit(tmp_path: Path) -> None:
    path = _sized_file(tmp_path / "cases.xlsx", FIVE_MIB + 1)

    with pytest.raises(UploadRejectedError, match="less than 5MB"):
        accept_file(path)


def test_accepts_legacy_xls(tmp_path: Path) -> None:
    accepted = accept_file(_sized_file(tmp_path / "cases.XLS", 10))

    assert accepted.media_type == XLS_MEDIA_TYPE
    assert accepted.is_legacy_format is True


@pytest.mark.parametrize("name", ["cases.csv", "cases.txt", "cases"])
def test_rejects_non_spreadsheet_types(tmp_path: Path, name: str) -> None:
    path = _sized_file(tmp_path / name, 10)

    with pytest.raises(UploadRejectedError, match="valid Excel file"):
        accept_file(path)


def test_explicit_media_type_wins_over_file_name(tmp_path: Path) -> None:
    path = _sized_file(tmp_path / "upload.bin", 10)

    assert accept_file(path, XLSX_MEDIA_TYPE).media_type == XLSX_MEDIA_TYPE
    with pytest.raises(UploadRejectedError):
        accept_file(tmp_path / "upload.bin", "text/csv")


def test_missing_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(UploadRejectedError, match="not found"):
        accept_file(tmp_path / "missing.xlsx")


def test_custom_limit_is_honoured(tmp_path: Path) -> None:
    path = _sized_file(tmp_path / "cases.xlsx", 2048)

    with pytest.raises(UploadRejectedError):
        accept_file(path, max_bytes=1024)


def test_pending_upload_select_replace_and_take(tmp_path: Path) -> None:
    first = _sized_file(tmp_path / "first.xlsx", 10)
    second = _sized_file(tmp_path / "second.xlsx", 10)
    pending = PendingUpload()

    pending.select(first)
    pending.select(second)
    taken = pending.take()

    assert taken.path == second
    assert pending.current is None
    with pytest.raises(UploadRejectedError, match="No file selected"):
        pending.take()


def test_rejected_selection_keeps_previous_file(tmp_path: Path) -> None:
    good = _sized_file(tmp_path / "good.xlsx", 10)
    bad = _sized_file(tmp_path / "bad.csv", 10)
    pending = PendingUpload()
    pending.select(good)

    with pytest.raises(UploadRejectedError):
        pending.select(bad)

    assert pending.current is not None
    assert pending.current.path == good


def test_clear_discards_pending_file(tmp_path: Path) -> None:
    pending = PendingUpload()
    pending.select(_sized_file(tmp_path / "cases.xlsx", 10))

    pending.clear()

    assert pending.current is None
