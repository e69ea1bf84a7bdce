"""Expiring key-value cache persisted between CLI invocations."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

LOGGER = logging.getLogger(__name__)

USER_INFO_KEY = "userInfo"


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class SessionCache:
    """JSON file of ``key -> {"value": ..., "expiry": epoch_ms}`` entries."""

    def __init__(self, path: Path | str, *, clock: Callable[[], int] | None = None) -> None:
        self._path = Path(path)
        self._clock = clock or _epoch_millis

    @property
    def path(self) -> Path:
        return self._path

    def save_with_expiry(self, key: str, value: Any, ttl_ms: int) -> None:
        entries = self._read_entries()
        entries[key] = {"value": value, "expiry": self._clock() + ttl_ms}
        self._write_entries(entries)

    def get_with_expiry(self, key: str) -> Any | None:
        """Return the stored value, or None when missing, expired or corrupt."""
        entries = self._read_entries()
        if key not in entries:
            return None
        item = entries[key]
        if not isinstance(item, dict) or not isinstance(item.get("expiry"), int | float):
            LOGGER.error("Failed to parse session cache item %r", key)
            self.remove_item(key)
            return None
        if self._clock() > item["expiry"]:
            self.remove_item(key)
            return None
        return item.get("value")

    def remove_item(self, key: str) -> None:
        entries = self._read_entries()
        if entries.pop(key, None) is not None:
            self._write_entries(entries)

    def remove_all(self) -> None:
        self._path.unlink(missing_ok=True)

    def _read_entries(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            parsed = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            LOGGER.error("Discarding unreadable session cache %s: %s", self._path, exc)
            self.remove_all()
            return {}
        return parsed if isinstance(parsed, dict) else {}

    def _write_entries(self, entries: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(entries), encoding="utf-8")
