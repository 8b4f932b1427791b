"""Cookie manager configuration.

CookieConfig is a frozen dataclass: immutable after creation, passed
explicitly, no environment lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CookieConfig:
    """Cookie manager configuration. Immutable after creation.

    All fields have RFC-conventional defaults. Override what you need::

        config = CookieConfig(secure_port=8443)
    """

    # Outbound header that carries the directive list
    header_name: str = "Set-Cookie"

    # Connection derivation
    default_port: int = 80  # Used when the Host header has no port
    secure_port: int = 443  # Port that marks the connection as secure
