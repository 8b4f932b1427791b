"""cookie_httponly: server-side HttpOnly cookie manager (RFC 6265).

Parses the request ``Cookie`` header and stages ``Set-Cookie`` directives
that always carry ``HttpOnly``, and ``Secure`` on port 443.

Basic usage::

    from cookie_httponly import CookieOptions, CookieStore

    cookies = CookieStore(request, response_headers)
    cookies.get("sid")
    cookies.set("sid", "5309ece4", CookieOptions(path="/app"))

ASGI usage::

    from cookie_httponly import CookieMiddleware, get_cookies

    app = CookieMiddleware(app)
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "CookieConfig",
    "CookieError",
    "CookieMiddleware",
    "CookieOptions",
    "CookieStore",
    "CookieTypeError",
    "Headers",
    "Request",
    "ResponseHeaders",
    "SetCookie",
    "UnsafeOriginError",
    "get_cookies",
]

# Public name -> defining module. Resolved on first attribute access.
_LAZY_IMPORTS: dict[str, str] = {
    "CookieConfig": "cookie_httponly.config",
    "CookieError": "cookie_httponly.errors",
    "CookieMiddleware": "cookie_httponly.middleware",
    "CookieOptions": "cookie_httponly.http.cookies",
    "CookieStore": "cookie_httponly.store",
    "CookieTypeError": "cookie_httponly.errors",
    "Headers": "cookie_httponly.http.headers",
    "Request": "cookie_httponly.http.request",
    "ResponseHeaders": "cookie_httponly.http.headers",
    "SetCookie": "cookie_httponly.http.cookies",
    "UnsafeOriginError": "cookie_httponly.errors",
    "get_cookies": "cookie_httponly.middleware",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import cookie_httponly`` cheap while providing a flat top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module_path), name)
