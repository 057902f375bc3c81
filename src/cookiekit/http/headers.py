"""Header containers for reading cookies in and writing ``Set-Cookie`` out.

``Headers`` is immutable and case-insensitive over raw ASGI byte pairs,
decoding on access. ``MutableHeaders`` is the append-only response side:
one entry per ``append``, never folded, because ``Set-Cookie`` values
cannot be comma-joined.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class Headers(Mapping[str, str]):
    """Request headers as cookies are read from them.

    Holds the raw ASGI ``(name, value)`` byte pairs untouched and decodes
    latin-1 on access. Names match case-insensitively, so ``"Cookie"``,
    ``"cookie"`` and ``"COOKIE"`` all find the same line.

    ``headers["cookie"]`` is the first ``Cookie`` line; ``get_list`` keeps
    every line, which is what repeated ``Set-Cookie`` headers need.
    Satisfies ``MultiHeaderSource``.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> Headers:
        """Build from ``(name, value)`` string pairs, preserving order and repeats."""
        return cls(tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs))

    @classmethod
    def from_scope(cls, scope: Mapping[str, Any]) -> Headers:
        """Build from the ``headers`` entry of an ASGI HTTP scope."""
        return cls(tuple((bytes(k), bytes(v)) for k, v in scope.get("headers", ())))

    def _values(self, key: str) -> Iterator[str]:
        wanted = key.lower().encode("latin-1")
        return (value.decode("latin-1") for name, value in self._raw if name.lower() == wanted)

    def __getitem__(self, key: str) -> str:
        for value in self._values(key):
            return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and any(True for _ in self._values(key))

    def __iter__(self) -> Iterator[str]:
        names = dict.fromkeys(name.decode("latin-1").lower() for name, _ in self._raw)
        return iter(names)

    def __len__(self) -> int:
        return len(dict.fromkeys(name.lower() for name, _ in self._raw))

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* when the header is absent."""
        return next(self._values(key), default)

    def get_list(self, key: str) -> list[str]:
        """Every value for *key* in arrival order; ``[]`` when absent."""
        return list(self._values(key))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """The original byte pairs, for handing back to an ASGI server."""
        return self._raw


class MutableHeaders:
    """Response headers where each ``Set-Cookie`` stays its own line.

    Satisfies ``HeaderSink`` for writing and ``MultiHeaderSource`` for
    reading back, so a response built here can be parsed again with
    ``parse_set_cookies``.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def append(self, name: str, value: str) -> None:
        """Add one header line."""
        self._items.append((name, value))

    def get(self, key: str, default: str | None = None) -> str | None:
        """First value for *key*, case-insensitively, or *default*."""
        values = self.get_list(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Every value for *key* in append order, case-insensitively."""
        wanted = key.lower()
        return [value for name, value in self._items if name.lower() == wanted]

    def items(self) -> list[tuple[str, str]]:
        """All header lines as ``(name, value)`` pairs."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MutableHeaders({self._items!r})"

    @property
    def raw(self) -> list[tuple[bytes, bytes]]:
        """Lowercased latin-1 byte pairs, ready for an ASGI ``http.response.start``."""
        return [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in self._items]
