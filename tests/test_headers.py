"""Tests for cookie_httponly.http.headers: request Headers and ResponseHeaders."""

import pytest

from cookie_httponly._internal.protocols import HeaderLookup, HeaderStore
from cookie_httponly.http.headers import Headers, ResponseHeaders


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from string pairs."""
    raw = tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)
    return Headers(raw)


class TestHeaders:
    def test_getitem(self) -> None:
        h = _h(("Host", "example.com:443"))
        assert h["Host"] == "example.com:443"

    def test_case_insensitive(self) -> None:
        h = _h(("Cookie", "git=041ab08b"))
        assert h["cookie"] == "git=041ab08b"
        assert h["COOKIE"] == "git=041ab08b"

    def test_missing_key_raises(self) -> None:
        h = _h(("Accept", "*/*"))
        with pytest.raises(KeyError):
            h["X-Missing"]

    def test_contains(self) -> None:
        h = _h(("Accept", "*/*"))
        assert "accept" in h
        assert "Accept" in h
        assert "x-missing" not in h

    def test_contains_rejects_non_str(self) -> None:
        h = _h(("Accept", "*/*"))
        assert 42 not in h  # type: ignore[operator]

    def test_len_deduplicates(self) -> None:
        h = _h(("Cookie", "a=1"), ("Cookie", "b=2"), ("Host", "x"))
        assert len(h) == 2

    def test_iter_yields_unique_lowercase_keys(self) -> None:
        h = _h(("Accept", "*/*"), ("Host", "x"), ("Accept", "text/xml"))
        assert list(h) == ["accept", "host"]

    def test_get_with_default(self) -> None:
        h = _h(("Host", "x"))
        assert h.get("host") == "x"
        assert h.get("cookie") is None
        assert h.get("cookie", "") == ""

    def test_get_list(self) -> None:
        h = _h(("Accept", "a"), ("Accept", "b"))
        assert h.get_list("accept") == ["a", "b"]
        assert h.get_list("x-missing") == []

    def test_from_strings(self) -> None:
        h = Headers.from_strings({"Host": "example.com", "Cookie": "a=1"})
        assert h["host"] == "example.com"
        assert h.get_list("cookie") == ["a=1"]
        assert list(h) == ["host", "cookie"]

    def test_empty_headers(self) -> None:
        h = Headers()
        assert len(h) == 0
        assert list(h) == []

    def test_satisfies_header_lookup(self) -> None:
        assert isinstance(_h(("A", "1")), HeaderLookup)

    def test_repr(self) -> None:
        assert "host" in repr(_h(("Host", "x")))


class TestResponseHeaders:
    def test_get_header_unset_is_none(self) -> None:
        assert ResponseHeaders().get_header("Set-Cookie") is None

    def test_set_and_get(self) -> None:
        h = ResponseHeaders()
        h.set_header("Set-Cookie", ["a=1; HttpOnly", "b=2; HttpOnly"])
        assert h.get_header("Set-Cookie") == ["a=1; HttpOnly", "b=2; HttpOnly"]

    def test_case_insensitive(self) -> None:
        h = ResponseHeaders()
        h.set_header("Set-Cookie", ["a=1"])
        assert h.get_header("set-cookie") == ["a=1"]
        assert "SET-COOKIE" in h

    def test_set_replaces_all_values(self) -> None:
        h = ResponseHeaders([("Set-Cookie", "a=1"), ("set-cookie", "b=2")])
        h.set_header("Set-Cookie", ["c=3"])
        assert h.get_header("Set-Cookie") == ["c=3"]
        assert len(h) == 1

    def test_set_keeps_other_headers(self) -> None:
        h = ResponseHeaders([("Content-Type", "text/html")])
        h.set_header("Set-Cookie", ["a=1"])
        assert h.get_header("content-type") == ["text/html"]

    def test_set_empty_list_removes(self) -> None:
        h = ResponseHeaders([("Set-Cookie", "a=1")])
        h.set_header("Set-Cookie", [])
        assert h.get_header("Set-Cookie") is None

    def test_remove_missing_is_noop(self) -> None:
        h = ResponseHeaders([("A", "1")])
        h.remove("B")
        assert list(h) == [("A", "1")]

    def test_contains_rejects_non_str(self) -> None:
        assert 42 not in ResponseHeaders()  # type: ignore[operator]

    def test_satisfies_header_store(self) -> None:
        assert isinstance(ResponseHeaders(), HeaderStore)
