"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_BASE_URL = "http://localhost:8080/api"
DEFAULT_SESSION_TTL_MS = 3_600_000
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def _default_cache_path() -> Path:
    return Path.home() / ".qa-coverage-tracker" / "session.json"


@dataclass(frozen=True)
class ApiSettings:
    """Backend REST API connectivity configuration."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: int = 30
    verify_tls: bool = True


@dataclass(frozen=True)
class SessionSettings:
    """Where the logged-in user is cached between invocations."""

    cache_path: Path = field(default_factory=_default_cache_path)
    ttl_ms: int = DEFAULT_SESSION_TTL_MS


@dataclass(frozen=True)
class ImportSettings:
    """Bulk import limits and display defaults."""

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    page_size: int = 10


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    api: ApiSettings
    session: SessionSettings
    imports: ImportSettings
