"""Immutable HTTP request metadata.

Only what cookie handling needs: the headers and the peer end of the
connection. Satisfies the ``CookieRequest`` protocol.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from cookie_httponly.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``client`` is the ``(host, port)`` pair reported by the ASGI server,
    or ``None`` when unknown (e.g. a Unix socket).
    """

    headers: Headers
    client: tuple[str, int] | None = None

    @property
    def remote_address(self) -> str | None:
        """Peer address of the connection (``client`` host)."""
        if self.client is None:
            return None
        return self.client[0]

    # -- Factories --

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        client = scope.get("client")
        return cls(
            headers=Headers(tuple(scope.get("headers", ()))),
            client=tuple(client) if client else None,
        )

    @classmethod
    def build(
        cls,
        headers: Mapping[str, str],
        remote_address: str | None = None,
        remote_port: int = 0,
    ) -> Request:
        """Create a Request from string headers, mainly for tests and adapters."""
        client = (remote_address, remote_port) if remote_address is not None else None
        return cls(headers=Headers.from_strings(headers), client=client)
