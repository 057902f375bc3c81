"""Header shapes the cookie functions read from and write to.

Request side: a ``Cookie`` header is one value, so ``get`` is enough.
Response side: ``Set-Cookie`` repeats and cannot be comma-folded, so
reading it needs ``get_list`` and writing it needs ``append``.

Structural so any framework's header object fits without an adapter;
a plain ``dict`` satisfies ``HeaderSource``.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class HeaderSource(Protocol):
    """Case-insensitive single-value lookup, e.g. the ``Cookie`` header."""

    def get(self, key: str, default: str | None = None) -> str | None: ...


@runtime_checkable
class MultiHeaderSource(HeaderSource, Protocol):
    """A ``HeaderSource`` that also keeps repeated lines apart."""

    def get_list(self, key: str) -> list[str]: ...


@runtime_checkable
class HeaderSink(Protocol):
    """Outgoing headers, one line per ``append``."""

    def append(self, name: str, value: str) -> None: ...
