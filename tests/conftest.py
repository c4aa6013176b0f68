"""Shared fixtures: a fake requests.Session that never touches the network."""

import json
import threading

import pytest
import requests


def make_response(status_code=200, body=b'{"response": "ok"}'):
    """Build a real requests.Response with the given status and body."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        body = body.encode("utf-8")
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = "utf-8"
    return response


class FakeSession:
    """Records every request and answers through ``responder``."""

    def __init__(self, responder=None):
        self.headers = {}
        self.calls = []
        self.closed = False
        self.responder = responder or (lambda call: make_response())
        self._lock = threading.Lock()

    def request(self, method, url, data=None, headers=None, timeout=None):
        call = {
            "method": method,
            "url": url,
            "data": data,
            "headers": dict(headers or {}),
            "timeout": timeout,
        }
        with self._lock:
            self.calls.append(call)
        return self.responder(call)

    def close(self):
        self.closed = True


@pytest.fixture
def session():
    return FakeSession()
