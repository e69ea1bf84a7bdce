"""Backend access exports."""

from .api_client import TrackerApiClient
from .api_errors import ApiError, SessionExpiredError
from .bearer_auth import BearerTokenAuth, LoggedInUser, LoginState
from .session_cache import USER_INFO_KEY, SessionCache

__all__ = [
    "ApiError",
    "BearerTokenAuth",
    "LoggedInUser",
    "LoginState",
    "SessionCache",
    "SessionExpiredError",
    "TrackerApiClient",
    "USER_INFO_KEY",
]
