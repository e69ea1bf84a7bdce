"""Bulk import outcome entities."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImportOutcome:
    """Summary of one bulk import.

    Every input row is counted exactly once, either as a success or as an error.
    Duplicate rows count as errors and are listed in ``duplicates`` instead of ``errors``.
    """

    total_rows: int
    success_count: int
    error_count: int
    errors: tuple[str, ...] = ()
    duplicates: tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return self.error_count == 0


@dataclass
class ImportOutcomeBuilder:
    """Mutable accumulator used while rows are being processed."""

    total_rows: int
    success_count: int = 0
    errors: list[str] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    stopped_rows: int = 0

    def record_success(self) -> None:
        self.success_count += 1

    def record_error(self, message: str) -> None:
        self.errors.append(message)

    def record_duplicate(self, message: str) -> None:
        self.duplicates.append(message)

    def record_stopped(self, message: str, rows: int) -> None:
        """One message for the row that stopped the import and every row after it."""
        self.errors.append(message)
        self.stopped_rows += rows

    def build(self) -> ImportOutcome:
        # The stop message is in ``errors`` but stands for ``stopped_rows`` rows.
        stop_messages = 1 if self.stopped_rows else 0
        return ImportOutcome(
            total_rows=self.total_rows,
            success_count=self.success_count,
            error_count=len(self.errors) + len(self.duplicates) + self.stopped_rows - stop_messages,
            errors=tuple(self.errors),
            duplicates=tuple(self.duplicates),
        )


def failed_file_outcome() -> ImportOutcome:
    """Outcome reported when the file could not be parsed at all."""
    return ImportOutcome(
        total_rows=0,
        success_count=0,
        error_count=1,
        errors=("Failed to process file. Please check the file format and try again.",),
    )
