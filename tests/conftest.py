from __future__ import annotations

import json as jsonlib

import pytest
import requests


def make_response(status: int, body=None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = jsonlib.dumps(body).encode("utf-8") if body is not None else b""
    resp.headers["Content-Type"] = "application/json"
    return resp


class FakeSession:
    """Stands in for requests.Session; routes are (method, url) -> queued replies.

    A reply is a Response, an exception to raise, or a callable taking the
    recorded call. The last queued reply repeats.
    """

    def __init__(self):
        self.headers: dict[str, str] = {}
        self.routes: dict[tuple[str, str], list] = {}
        self.calls: list[dict] = []

    def add(self, method: str, url: str, *replies) -> None:
        self.routes.setdefault((method.upper(), url), []).extend(replies)

    def get(self, url, timeout=None, **kwargs):
        return self.request("GET", url, timeout=timeout, **kwargs)

    def request(self, method, url, json=None, params=None, headers=None, timeout=None):
        call = {
            "method": method.upper(),
            "url": url,
            "json": json,
            "params": params,
            "headers": {**self.headers, **(headers or {})},
            "explicit_headers": dict(headers or {}),
            "timeout": timeout,
        }
        self.calls.append(call)

        queue = self.routes.get((call["method"], url))
        if not queue:
            raise requests.ConnectionError(f"no route to {url}")
        reply = queue[0] if len(queue) == 1 else queue.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(call)
        return reply

    def calls_to(self, method: str, url: str) -> list[dict]:
        return [c for c in self.calls if c["method"] == method.upper() and c["url"] == url]


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def respond():
    return make_response
