"""Collaborator protocols: what CookieStore needs from a request and a response.

Structural protocols so any framework's request/response objects can be
passed in without subclassing. ``CookieStore`` checks the shape, not the
lineage.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class HeaderLookup(Protocol):
    """A case-insensitive header mapping with ``.get``."""

    def get(self, key: str, default: str | None = None) -> str | None: ...


@runtime_checkable
class CookieRequest(Protocol):
    """Request side: headers plus the peer address of the connection."""

    @property
    def headers(self) -> HeaderLookup: ...

    @property
    def remote_address(self) -> str | None: ...


@runtime_checkable
class HeaderStore(Protocol):
    """Response side: a case-insensitive, multi-value header store.

    ``get_header`` returns ``None`` for a header that was never set.
    """

    def get_header(self, name: str) -> list[str] | str | None: ...
    def set_header(self, name: str, values: list[str]) -> None: ...
