"""CookieStore: HttpOnly cookie manager for one request/response pair.

Reads the inbound ``Cookie`` header once at construction and stages
outbound ``Set-Cookie`` directives on the response header store. Every
staged directive carries ``HttpOnly``; ``Secure`` is added when the
connection port is the secure port.

Usage::

    cookies = CookieStore(request, response_headers)
    if not cookies.has("sid"):
        cookies.set("sid", new_session_id(), CookieOptions(path="/app"))
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from cookie_httponly._internal.protocols import CookieRequest, HeaderLookup, HeaderStore
from cookie_httponly.config import CookieConfig
from cookie_httponly.errors import CookieTypeError, UnsafeOriginError
from cookie_httponly.http.cookies import (
    CookieOptions,
    SetCookie,
    encode_cookie_octet,
    parse_cookies,
    replace_directive,
)

_DEFAULT_OPTIONS = CookieOptions()
_DEFAULT_PATH = "/"


def split_host(host: str, default_port: int) -> tuple[str, str]:
    """Split a Host header value into ``(name, port)``.

    A bracketed IPv6 literal loses its brackets: ``"[::1]:443"`` gives
    ``("::1", "443")``. A missing port becomes *default_port*.
    """
    if host.startswith("["):
        name, _, rest = host[1:].partition("]")
        port = rest[1:] if rest.startswith(":") else ""
    else:
        name, _, port = host.partition(":")
    return name, port or str(default_port)


def _cookie_header(headers: HeaderLookup) -> str:
    # HTTP/2 may split cookies across several fields (RFC 7540 8.1.2.5)
    get_list = getattr(headers, "get_list", None)
    if callable(get_list):
        return "; ".join(get_list("cookie"))
    return headers.get("cookie") or ""


def _is_port(port: str, expected: int) -> bool:
    try:
        return int(port) == expected
    except ValueError:
        return False


def _encode(text: str, parameter: str) -> str:
    try:
        return encode_cookie_octet(text)
    except UnicodeEncodeError:
        raise CookieTypeError(parameter, "str encodable as UTF-8", text) from None


class CookieStore:
    """Inbound cookies plus outbound ``Set-Cookie`` staging for one request.

    Attributes:
        domain: Lower-cased host name from the Host header, without port.
        secure: True iff the Host header port is ``config.secure_port``.

    Raises:
        CookieTypeError: If *request*, *response* or *config* has the wrong shape.
        UnsafeOriginError: If the peer address equals the derived domain.
    """

    __slots__ = ("_config", "_domain", "_entries", "_response", "_secure")

    def __init__(
        self,
        request: CookieRequest,
        response: HeaderStore,
        config: CookieConfig | None = None,
    ) -> None:
        if not isinstance(request, CookieRequest) or not isinstance(
            request.headers, HeaderLookup
        ):
            raise CookieTypeError("request", "object with headers and remote_address", request)
        if not isinstance(response, HeaderStore):
            raise CookieTypeError("response", "header store with get_header/set_header", response)
        if config is None:
            config = CookieConfig()
        elif not isinstance(config, CookieConfig):
            raise CookieTypeError("config", "CookieConfig", config)

        host = request.headers.get("host")
        if not isinstance(host, str):
            raise CookieTypeError("request", "request with a Host header", host)

        self._config = config
        self._response = response

        name, port = split_host(host, config.default_port)

        # RFC 6265 5.1.3 Domain Matching
        self._domain: str = name.lower()
        if request.remote_address == self._domain:
            raise UnsafeOriginError()

        # RFC 6265 4.1.2.5 The Secure Attribute
        self._secure: bool = _is_port(port, config.secure_port)

        self._entries: dict[str, str] = parse_cookies(_cookie_header(request.headers))

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def secure(self) -> bool:
        return self._secure

    def __repr__(self) -> str:
        return (
            f"CookieStore(domain={self._domain!r}, secure={self._secure}, "
            f"entries={self._entries!r})"
        )

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Mapping[str, str]:
        """Read-only view of the decoded inbound cookies."""
        return MappingProxyType(self._entries)

    # -- Read side --

    def has(self, name: str) -> bool:
        """Whether the request carried a cookie called *name*."""
        if not isinstance(name, str):
            raise CookieTypeError("name", "str", name)
        return name in self._entries

    def get(self, name: str) -> str | None:
        """Decoded value of the inbound cookie *name*, or ``None``."""
        if not isinstance(name, str):
            raise CookieTypeError("name", "str", name)
        return self._entries.get(name)

    # -- Write side --

    def set(
        self,
        name: str,
        value: str,
        options: CookieOptions | Mapping[str, Any] = _DEFAULT_OPTIONS,
    ) -> None:
        """Stage a ``Set-Cookie`` directive on the response.

        A directive already staged for the same (escaped) name is replaced,
        not duplicated. The inbound entries are never touched.

        Raises:
            CookieTypeError: If *name*, *value* or any option has the wrong type.
        """
        if not isinstance(name, str):
            raise CookieTypeError("name", "str", name)
        if not isinstance(value, str):
            raise CookieTypeError("value", "str", value)
        if isinstance(options, Mapping):
            options = CookieOptions.from_mapping(options)
        elif not isinstance(options, CookieOptions):
            raise CookieTypeError("options", "CookieOptions or mapping", options)
        options.validate()

        # RFC 6265 4.1.1 Syntax
        escaped_name = _encode(name, "name")
        escaped_value = _encode(value, "value")

        domain = self._domain if options.domain is None else options.domain.lower()

        cookie = SetCookie(
            name=escaped_name,
            value=escaped_value,
            domain=domain if domain != self._domain else None,
            path=options.path if options.path != _DEFAULT_PATH else None,
            expires=options.expires,
            secure=self._secure,
        )

        header = self._config.header_name
        current = self._response.get_header(header)
        if current is None:
            current = []
        elif isinstance(current, str):
            current = [current]

        self._response.set_header(
            header, replace_directive(current, escaped_name, cookie.to_header_value())
        )
