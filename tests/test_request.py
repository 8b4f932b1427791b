"""Tests for cookie_httponly.http.request: frozen Request built from ASGI scope."""

import pytest

from cookie_httponly._internal.protocols import CookieRequest
from cookie_httponly.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [(b"host", b"example.com:443"), (b"cookie", b"git=041ab08b")],
        "server": ("example.com", 443),
        "client": ("203.0.113.7", 54321),
    }
    base.update(overrides)
    return base


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        req = Request.from_asgi(_make_scope())

        assert req.headers["host"] == "example.com:443"
        assert req.headers["cookie"] == "git=041ab08b"
        assert req.client == ("203.0.113.7", 54321)

    def test_client_list_becomes_tuple(self) -> None:
        req = Request.from_asgi(_make_scope(client=["203.0.113.7", 1]))
        assert req.client == ("203.0.113.7", 1)

    def test_missing_client(self) -> None:
        req = Request.from_asgi(_make_scope(client=None))
        assert req.client is None
        assert req.remote_address is None

    def test_missing_headers(self) -> None:
        scope = _make_scope()
        del scope["headers"]
        req = Request.from_asgi(scope)
        assert len(req.headers) == 0
        assert req.headers.get("host") is None

    def test_repeated_cookie_fields_kept(self) -> None:
        req = Request.from_asgi(
            _make_scope(headers=[(b"host", b"a"), (b"cookie", b"a=1"), (b"cookie", b"b=2")])
        )
        assert req.headers.get_list("cookie") == ["a=1", "b=2"]


class TestRequestProperties:
    def test_remote_address(self) -> None:
        req = Request.from_asgi(_make_scope())
        assert req.remote_address == "203.0.113.7"

    def test_frozen(self) -> None:
        req = Request.from_asgi(_make_scope())
        with pytest.raises(AttributeError):
            req.client = None  # type: ignore[misc]

    def test_satisfies_cookie_request(self) -> None:
        assert isinstance(Request.from_asgi(_make_scope()), CookieRequest)


class TestRequestBuild:
    def test_headers_and_address(self) -> None:
        req = Request.build({"Host": "example.com"}, remote_address="127.0.0.1")
        assert req.headers["host"] == "example.com"
        assert req.remote_address == "127.0.0.1"
        assert req.client == ("127.0.0.1", 0)

    def test_no_address(self) -> None:
        req = Request.build({"Host": "example.com"})
        assert req.client is None
