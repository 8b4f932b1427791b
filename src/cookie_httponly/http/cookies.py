"""Cookie parsing and SetCookie serialization.

Consolidates the read side (parse_cookies, used by CookieStore at
construction) and the write side (SetCookie, replace_directive, used by
``CookieStore.set``) in one module.

Escaping follows RFC 6265 4.1.1: control characters are stripped, then
everything outside the URL-component unreserved set is percent-encoded.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from datetime import UTC, datetime
from email.utils import format_datetime
from typing import Any
from urllib.parse import quote, unquote

from cookie_httponly.errors import CookieTypeError

logger = logging.getLogger("cookie_httponly.cookies")

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\xa0]")

# quote() always keeps letters, digits and "_.-~"
_URI_COMPONENT_SAFE = "!*'()"


def encode_cookie_octet(text: str) -> str:
    """Escape *text* for use as a cookie name or value.

    ``"a b;c"`` becomes ``"a%20b%3Bc"``; characters in ``0x00-0x1F`` and
    ``0x7F-0xA0`` are dropped, not encoded.
    """
    return quote(_CONTROL_CHARS.sub("", text), safe=_URI_COMPONENT_SAFE)


def decode_cookie_octet(text: str) -> str:
    """Percent-decode a cookie name or value. ``+`` is left as is."""
    return unquote(text)


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Pairs are separated by ``"; "`` and split at their first ``=``.
    Pairs without ``=`` are dropped. Duplicate names: last one wins.
    Returns an empty dict for empty or missing headers.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split("; "):
        name, sep, value = pair.partition("=")
        if not sep:
            logger.debug("Dropping malformed cookie pair %r", pair)
            continue
        cookies[decode_cookie_octet(name)] = decode_cookie_octet(value)
    return cookies


def format_expires(expires: datetime) -> str:
    """Format *expires* as an RFC 1123 GMT date.

    Naive datetimes are taken as UTC::

        >>> format_expires(datetime(2026, 10, 19, 12, 0))
        'Mon, 19 Oct 2026 12:00:00 GMT'
    """
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=UTC)
    else:
        expires = expires.astimezone(UTC)
    return format_datetime(expires, usegmt=True)


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Attributes for ``CookieStore.set``.

    ``domain=None`` means the store's own domain. ``expires=None`` means a
    session cookie: no ``Expires`` attribute is rendered.
    """

    domain: str | None = None
    path: str = "/"
    expires: datetime | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> CookieOptions:
        """Build options from a plain dict with the same keys."""
        allowed = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - allowed)
        if unknown:
            raise CookieTypeError(
                "options", f"mapping with keys {sorted(allowed)} (unknown: {unknown})", options
            )
        return cls(**options)

    def validate(self) -> None:
        """Raise ``CookieTypeError`` naming the first field of the wrong type."""
        if self.domain is not None and not isinstance(self.domain, str):
            raise CookieTypeError("domain", "str", self.domain)
        if not isinstance(self.path, str):
            raise CookieTypeError("path", "str", self.path)
        if self.expires is not None and not isinstance(self.expires, datetime):
            raise CookieTypeError("expires", "datetime", self.expires)


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A rendered-ready ``Set-Cookie`` directive.

    ``name`` and ``value`` are already escaped. ``domain`` and ``path`` are
    ``None`` when the attribute should be omitted. ``HttpOnly`` is always
    rendered and has no field.
    """

    name: str
    value: str
    domain: str | None = None
    path: str | None = None
    expires: datetime | None = None
    secure: bool = False

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string.

        Attribute order: Domain, Path, Expires, Secure, HttpOnly.
        """
        parts = [f"{self.name}={self.value}"]
        if self.domain is not None:
            parts.append(f"Domain={self.domain}")
        if self.path is not None:
            parts.append(f"Path={self.path}")
        if self.expires is not None:
            parts.append(f"Expires={format_expires(self.expires)}")
        if self.secure:
            parts.append("Secure")
        parts.append("HttpOnly")
        return "; ".join(parts)


def directive_name(directive: str) -> str:
    """Return the escaped cookie name of *directive* (text before the first ``=``)."""
    return directive.partition("=")[0]


def replace_directive(current: Sequence[str], name: str, directive: str) -> list[str]:
    """Return *current* without directives named *name*, plus *directive*.

    *name* is the escaped cookie name. Escaped names never contain a raw
    ``=``, so the first ``=`` of a stored directive is always its
    name/value separator.
    """
    kept = [d for d in current if directive_name(d) != name]
    if len(kept) != len(current):
        logger.debug("Replacing staged Set-Cookie directive for %r", name)
    kept.append(directive)
    return kept
