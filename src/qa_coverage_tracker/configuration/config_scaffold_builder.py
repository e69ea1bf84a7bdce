"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "qa-tracker.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for qa-coverage-tracker.
# Every key is optional; remove the ones you do not need to override.
# QA_TRACKER_API_URL in the environment overrides api.base_url.

api:
  # Base URL of the tracking backend REST API.
  base_url: "http://localhost:8080/api"
  timeout_seconds: 30
  verify_tls: true

session:
  # Relative paths resolve against this file's directory.
  # cache_path: "<OPTIONAL>"
  # Login stays valid for this many milliseconds.
  ttl_ms: 3600000

import:
  # Spreadsheets above this size are rejected before parsing.
  max_upload_bytes: 5242880
  # Rows per page for list commands.
  page_size: 10
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
