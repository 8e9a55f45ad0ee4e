"""Shared test fixtures for webutils tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import urlsplit

from fastapi import Request


def build_request(url: str = "https://example.com/", headers: dict = None) -> Request:
    """Build a FastAPI Request for `url` without running an app."""
    parts = urlsplit(url)
    path = parts.path or "/"
    default_port = 443 if parts.scheme == "https" else 80
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": parts.scheme,
        "server": (parts.hostname, parts.port or default_port),
        "path": path,
        "raw_path": path.encode(),
        "query_string": parts.query.encode(),
        "root_path": "",
        "headers": [
            (key.lower().encode("latin-1"), value.encode("latin-1"))
            for key, value in (headers or {}).items()
        ],
    }
    return Request(scope)


@pytest.fixture
def make_request():
    return build_request


@pytest.fixture
def supported_options():
    return {
        "supported_languages": ["en", "de"],
        "fallback_language": "en",
    }


@pytest.fixture
def mock_cookie():
    cookie = MagicMock()
    cookie.parse = AsyncMock(return_value="de")
    cookie.serialize = AsyncMock(return_value="lng=serialized")
    return cookie


@pytest.fixture
def failing_cookie():
    cookie = MagicMock()
    cookie.parse = AsyncMock(side_effect=ValueError("Cookie parsing failed"))
    return cookie


def _session_with(value):
    session = MagicMock()
    session.get = MagicMock(side_effect=lambda key: value if key == "lng" else None)
    return session


@pytest.fixture
def make_session_storage():
    """Factory for a session storage whose session holds `value` under "lng"."""
    def _factory(value):
        storage = MagicMock()
        storage.get_session = AsyncMock(return_value=_session_with(value))
        return storage
    return _factory
