"""
Pytest configuration and shared fixtures for logo lookup tests.
"""

from unittest.mock import MagicMock

import pytest

from domains import resolve_identity

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


def png_bytes(size):
    """A payload of `size` bytes that starts like a PNG."""
    return PNG_HEADER + b"\x00" * max(0, size - len(PNG_HEADER))


def make_response(status=200, content=b"", content_type="image/png", text=None, json_data=None, url=""):
    """Mock requests.Response with just the attributes the adapters read."""
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 400
    response.url = url
    response.content = content
    response.text = text if text is not None else content.decode("latin-1")
    response.headers = {"Content-Type": content_type} if content_type else {}
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON")
    return response


class FakeSession:
    """
    Stand-in for requests.Session.

    Routes map a URL (exact, or prefix when it ends with '*') to a
    response or an exception instance. Unknown URLs get a 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None, allow_redirects=True):
        self.calls.append((url, dict(params or {})))
        key = url
        if params and "titles" in params:
            key = f"{url}?titles={params['titles']}&prop={params.get('prop')}"
        for route, result in self.routes.items():
            matches = key.startswith(route[:-1]) if route.endswith("*") else key == route
            if matches:
                if isinstance(result, Exception):
                    raise result
                return result
        return make_response(status=404, content=b"", content_type="text/html")

    def close(self):
        pass


@pytest.fixture
def apple():
    return resolve_identity("Apple")


@pytest.fixture
def fake_session():
    return FakeSession()
