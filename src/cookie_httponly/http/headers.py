"""Case-insensitive HTTP headers.

``Headers`` is the immutable request side: it stores raw byte pairs from
the ASGI scope and decodes on access.

``ResponseHeaders`` is the mutable response side: a multi-value header
store implementing the ``HeaderStore`` protocol that ``CookieStore``
writes ``Set-Cookie`` directives into.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower().encode("latin-1")
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == key_lower]

    @classmethod
    def from_strings(cls, pairs: Mapping[str, str]) -> "Headers":
        """Build Headers from a ``{name: value}`` dict of strings."""
        return cls(tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs.items()))


class ResponseHeaders:
    """Mutable, case-insensitive, multi-value response header store.

    Values for one name keep their insertion order. ``set_header``
    replaces every value for a name at once, which is how ``CookieStore``
    writes back its merged ``Set-Cookie`` list.
    """

    __slots__ = ("_items",)

    def __init__(self, items: list[tuple[str, str]] | None = None) -> None:
        self._items: list[tuple[str, str]] = list(items) if items else []

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name.lower() == key_lower for name, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"ResponseHeaders({self._items!r})"

    def get_header(self, name: str) -> list[str] | None:
        """Return all values for *name*, or ``None`` if it was never set."""
        key_lower = name.lower()
        values = [value for key, value in self._items if key.lower() == key_lower]
        return values or None

    def set_header(self, name: str, values: list[str]) -> None:
        """Replace all values for *name* with *values*."""
        self.remove(name)
        self._items.extend((name, value) for value in values)

    def remove(self, name: str) -> None:
        """Drop every value for *name*. Missing names are ignored."""
        key_lower = name.lower()
        self._items = [(key, value) for key, value in self._items if key.lower() != key_lower]
