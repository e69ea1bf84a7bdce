"""Test case conversion exports."""

from .record_conversion import (
    DESCRIPTION_REQUIREMENT,
    TITLE_REQUIREMENT,
    InvalidRecord,
    RecordCheck,
    TestCaseRecord,
    ValidRecord,
    convert_rows,
    validate_record,
)

__all__ = [
    "DESCRIPTION_REQUIREMENT",
    "InvalidRecord",
    "RecordCheck",
    "TITLE_REQUIREMENT",
    "TestCaseRecord",
    "ValidRecord",
    "convert_rows",
    "validate_record",
]
