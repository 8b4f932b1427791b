"""ASGI middleware: one CookieStore per HTTP request.

The store is kept in a ContextVar, accessible via ``get_cookies()`` from
any handler running inside the request. Directives staged with
``get_cookies().set(...)`` are merged into the ``http.response.start``
message, replacing any ``set-cookie`` header the application already
emitted for the same cookie name.

Usage::

    from cookie_httponly.middleware import CookieMiddleware, get_cookies

    app = CookieMiddleware(app)

    # In a handler:
    cookies = get_cookies()
    cookies.set("theme", "dark")
"""

import logging
from collections.abc import Iterable
from contextvars import ContextVar

from cookie_httponly._internal.asgi import ASGIApp, Message, Receive, Scope, Send
from cookie_httponly.config import CookieConfig
from cookie_httponly.errors import CookieTypeError, UnsafeOriginError
from cookie_httponly.http.cookies import directive_name, replace_directive
from cookie_httponly.http.headers import ResponseHeaders
from cookie_httponly.http.request import Request
from cookie_httponly.store import CookieStore

logger = logging.getLogger("cookie_httponly.middleware")

# -- Store ContextVar --

_cookies_var: ContextVar[CookieStore | None] = ContextVar("cookie_httponly_store", default=None)


def get_cookies() -> CookieStore:
    """Return the CookieStore of the current request.

    Raises ``LookupError`` if called outside a request handled by
    ``CookieMiddleware``.
    """
    store = _cookies_var.get()
    if store is None:
        msg = (
            "No active cookie store. Ensure CookieMiddleware wraps the "
            "application before accessing cookies."
        )
        raise LookupError(msg)
    return store


async def _send_bad_request(send: Send, detail: str) -> None:
    body = detail.encode("utf-8")
    await send(
        {
            "type": "http.response.start",
            "status": 400,
            "headers": [
                (b"content-type", b"text/plain; charset=utf-8"),
                (b"content-length", str(len(body)).encode("latin-1")),
            ],
        }
    )
    await send({"type": "http.response.body", "body": body})


def _merge_directives(
    headers: Iterable[tuple[bytes, bytes]],
    header_name: str,
    directives: list[str],
) -> list[tuple[bytes, bytes]]:
    """Fold staged directives into the application's own response headers.

    A directive the application already emitted under *header_name* is
    replaced when a staged one carries the same cookie name.
    """
    key = header_name.lower().encode("latin-1")
    others: list[tuple[bytes, bytes]] = []
    current: list[str] = []
    for name, value in headers:
        if name.lower() == key:
            current.append(value.decode("latin-1"))
        else:
            others.append((name, value))
    for directive in directives:
        current = replace_directive(current, directive_name(directive), directive)
    return [*others, *((key, value.encode("latin-1")) for value in current)]


class CookieMiddleware:
    """Wrap an ASGI application with per-request HttpOnly cookie handling.

    Requests whose Host is the peer's own address, or that carry no Host
    header at all, are answered with ``400 Bad Request`` and never reach
    the wrapped application.
    """

    __slots__ = ("_app", "_config")

    def __init__(self, app: ASGIApp, config: CookieConfig | None = None) -> None:
        self._app = app
        self._config = config or CookieConfig()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        request = Request.from_asgi(scope)
        staged = ResponseHeaders()
        try:
            store = CookieStore(request, staged, self._config)
        except (UnsafeOriginError, CookieTypeError) as exc:
            logger.warning("Rejecting request from %s: %s", request.remote_address, exc)
            await _send_bad_request(send, str(exc))
            return

        header_name = self._config.header_name

        async def send_with_cookies(message: Message) -> None:
            if message["type"] == "http.response.start":
                directives = staged.get_header(header_name)
                if directives:
                    message = dict(message)
                    message["headers"] = _merge_directives(
                        message.get("headers", ()), header_name, directives
                    )
            await send(message)

        token = _cookies_var.set(store)
        try:
            await self._app(scope, receive, send_with_cookies)
        finally:
            _cookies_var.reset(token)
