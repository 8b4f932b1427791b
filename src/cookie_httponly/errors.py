"""cookie_httponly exception hierarchy.

Shared by CookieStore, the cookie codec, and the ASGI middleware so every
module raises and catches the same types.
"""


class CookieError(Exception):
    """Base for all cookie_httponly errors."""


class CookieTypeError(CookieError, TypeError):
    """An argument or option does not have the expected type or shape.

    Raised before any header mutation. Subclasses ``TypeError`` so callers
    that already guard against ``TypeError`` keep working.
    """

    def __init__(self, parameter: str, expected: str, got: object = None) -> None:
        self.parameter = parameter
        self.expected = expected
        msg = f"Invalid argument '{parameter}': expected {expected}, got {type(got).__name__}"
        super().__init__(msg)


class UnsafeOriginError(CookieError):
    """The connection was made to a numeric address instead of a host name.

    RFC 6265 5.1.3 domain matching: a cookie scoped to a literal IP
    address would bind to the address rather than a stable name.
    """

    def __init__(self) -> None:
        super().__init__(
            "The connection must be established from the domain name (i.e., not an IP address)"
        )
