"""Bulk import exports."""

from .import_outcome import ImportOutcome, ImportOutcomeBuilder, failed_file_outcome
from .import_pipeline import ImportSelection, TestCaseStore, import_all, run_bulk_import

__all__ = [
    "ImportOutcome",
    "ImportOutcomeBuilder",
    "ImportSelection",
    "TestCaseStore",
    "failed_file_outcome",
    "import_all",
    "run_bulk_import",
]
