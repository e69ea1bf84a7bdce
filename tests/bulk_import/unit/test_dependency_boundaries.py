"""Boundary tests for the transport-free core packages."""

from __future__ import annotations

from pathlib import Path

CORE_PACKAGES = (
    "bulk_import",
    "coverage_reconciliation",
    "list_query",
    "template_ingestion",
    "testcase_conversion",
    "tracking_records",
)


def _package_root() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "qa_coverage_tracker"


def test_core_packages_do_not_import_http_or_cli_layers() -> None:
    forbidden_import_fragments = (
        "import requests",
        "from requests",
        "qa_coverage_tracker.backend_access",
        "qa_coverage_tracker.cli",
        "import click",
    )

    for package in CORE_PACKAGES:
        for module_path in sorted((_package_root() / package).glob("*.py")):
            text = module_path.read_text(encoding="utf-8")
            for fragment in forbidden_import_fragments:
                assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"
