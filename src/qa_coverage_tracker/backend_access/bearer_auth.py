"""Authentication header injection and login state."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from requests import PreparedRequest
from requests.auth import AuthBase

from .session_cache import USER_INFO_KEY, SessionCache

TokenProvider = Callable[[], str | None]


class BearerTokenAuth(AuthBase):  # pylint: disable=too-few-public-methods
    """Attach ``Authorization: Bearer <token>`` whenever a token is available."""

    def __init__(self, token_provider: TokenProvider) -> None:
        self._token_provider = token_provider

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        token = self._token_provider()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        return request


@dataclass(frozen=True)
class LoggedInUser:
    """Subset of the login response kept in the session cache."""

    user_name: str
    token: str
    permission: Any = None


class LoginState:
    """Reads and writes the cached login."""

    def __init__(self, cache: SessionCache, ttl_ms: int) -> None:
        self._cache = cache
        self._ttl_ms = ttl_ms

    def remember(self, user_payload: Mapping[str, Any]) -> LoggedInUser:
        self._cache.save_with_expiry(USER_INFO_KEY, dict(user_payload), self._ttl_ms)
        return _to_user(user_payload)

    def current_user(self) -> LoggedInUser | None:
        value = self._cache.get_with_expiry(USER_INFO_KEY)
        if not isinstance(value, Mapping):
            return None
        return _to_user(value)

    def token(self) -> str | None:
        user = self.current_user()
        return user.token if user and user.token else None

    def forget(self) -> None:
        self._cache.remove_all()


def _to_user(payload: Mapping[str, Any]) -> LoggedInUser:
    return LoggedInUser(
        user_name=str(payload.get("userName") or payload.get("username") or ""),
        token=str(payload.get("token") or ""),
        permission=payload.get("permission"),
    )
