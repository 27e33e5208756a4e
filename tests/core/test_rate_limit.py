"""Tests for rate limit client keys and the 429 handler."""

from starlette.requests import Request

from wordmaster.middleware.rate_limit import client_key


def _request(headers: dict, client=("10.0.0.9", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/feed",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }
    return Request(scope)


def test_client_key_uses_remote_address():
    assert client_key(_request({})) == "10.0.0.9"


def test_client_key_prefers_first_forwarded_hop():
    request = _request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})

    assert client_key(request) == "203.0.113.7"
