"""Fake HTTP transport for backend access tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
import requests
from requests.adapters import BaseAdapter

Responder = Callable[[requests.PreparedRequest], tuple[int, Any]]


class RecordingAdapter(BaseAdapter):
    """Answers every request from a route table and records what was sent."""

    def __init__(self) -> None:
        super().__init__()
        self.routes: dict[tuple[str, str], Responder | tuple[int, Any]] = {}
        self.requests: list[requests.PreparedRequest] = []
        self.raise_error: Exception | None = None

    def add(self, method: str, path: str, status: int, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.last_timeout = timeout
        self.last_verify = verify
        if self.raise_error is not None:
            raise self.raise_error
        path = requests.utils.urlparse(request.url).path
        route = self.routes.get((request.method, path))
        if route is None:
            status, body = 404, {"message": "no route"}
        elif callable(route):
            status, body = route(request)
        else:
            status, body = route
        response = requests.Response()
        response.status_code = status
        response.reason = "OK" if status < 400 else "Error"
        response.url = request.url
        response.request = request
        response._content = b"" if body is None else json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
        return response

    def close(self) -> None:
        pass


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def http_session(adapter: RecordingAdapter) -> requests.Session:
    session = requests.Session()
    session.mount("http://", adapter)
    return session
