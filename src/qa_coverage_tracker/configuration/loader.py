"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_UPLOAD_BYTES,
    DEFAULT_SESSION_TTL_MS,
    ApiSettings,
    Configuration,
    ImportSettings,
    SessionSettings,
)

ENVIRONMENT_BASE_URL = "QA_TRACKER_API_URL"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(
    config_path: Path | str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Configuration:
    """Load and validate the configuration file.

    When ``config_path`` is omitted every section falls back to its defaults.
    ``QA_TRACKER_API_URL`` in ``environ`` overrides ``api.base_url``.
    """
    path = Path(config_path) if config_path is not None else None
    parsed: Any = {}
    if path is not None:
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")
        text = path.read_text(encoding="utf-8")
        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_dir = path.parent if path is not None else Path.cwd()
    api = _parse_api_section(parsed.get("api"), environ or {})
    session = _parse_session_section(parsed.get("session"), base_dir)
    imports = _parse_import_section(parsed.get("import"))

    return Configuration(path=path, api=api, session=session, imports=imports)


def _parse_api_section(value: Any, environ: Mapping[str, str]) -> ApiSettings:
    section = _optional_mapping(value, "api")
    base_url = _require_non_empty_string(section.get("base_url", DEFAULT_BASE_URL), "api.base_url")
    override = environ.get(ENVIRONMENT_BASE_URL, "").strip()
    if override:
        base_url = override
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError("api.base_url must start with http:// or https://.")
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 30), "api.timeout_seconds"
    )
    verify_tls = section.get("verify_tls", True)
    if not isinstance(verify_tls, bool):
        raise ConfigurationError("api.verify_tls must be a boolean.")
    return ApiSettings(
        base_url=base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        verify_tls=verify_tls,
    )


def _parse_session_section(value: Any, base_dir: Path) -> SessionSettings:
    section = _optional_mapping(value, "session")
    defaults = SessionSettings()
    raw_path = section.get("cache_path")
    cache_path = defaults.cache_path
    if raw_path is not None:
        cache_path = _resolve_path(
            base_dir, _require_non_empty_string(raw_path, "session.cache_path")
        )
    ttl_ms = _require_positive_int(section.get("ttl_ms", DEFAULT_SESSION_TTL_MS), "session.ttl_ms")
    return SessionSettings(cache_path=cache_path, ttl_ms=ttl_ms)


def _parse_import_section(value: Any) -> ImportSettings:
    section = _optional_mapping(value, "import")
    max_upload_bytes = _require_positive_int(
        section.get("max_upload_bytes", DEFAULT_MAX_UPLOAD_BYTES), "import.max_upload_bytes"
    )
    page_size = _require_positive_int(section.get("page_size", 10), "import.page_size")
    return ImportSettings(max_upload_bytes=max_upload_bytes, page_size=page_size)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
