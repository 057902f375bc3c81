"""Change-tracked cookie collection.

Keeps what arrived on the request apart from what the program changed.
``original`` holds the pairs read from a ``Cookie`` header (or a dict or
list of pairs) and is never re-emitted. ``modified`` is the log of every
``set`` and ``delete`` call and is the only source of outgoing
``Set-Cookie`` headers.

Every mutation first removes the name from both lists, so a name occurs
at most once overall and ``modified`` always wins a lookup. A deletion
leaves an empty-valued cookie with ``expires == 1`` in ``modified``:
lookups read it as absent, ``get_all_changes`` still emits it.

Not safe for concurrent mutation; use one collection per request.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import NamedTuple, TypeAlias

from cookiekit._internal.encoding import decode_component
from cookiekit.cookie import DELETE_EXPIRES, Cookie
from cookiekit.errors import CookieError


class CookiePair(NamedTuple):
    """A ``name=value`` pair as yielded by iteration and ``get_all``."""

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class CookieDeleteOptions:
    """Which cookie to delete, and the domain/path its clearing header targets."""

    name: str
    domain: str = ""
    path: str = "/"


# A Cookie header string, a name -> value mapping, or (name, value) pairs
CookieInput: TypeAlias = str | Mapping[str, str] | Iterable[tuple[str, str]]


class CookieCollection:
    """Cookies read from a request plus the changes made while handling it.

    Usage::

        cookies = CookieCollection(request.headers.get("cookie", ""))
        theme = cookies.get("theme")
        cookies.set("theme", "dark")
        cookies.delete("legacy")
        for cookie in cookies.get_all_changes():
            response_headers.append("Set-Cookie", cookie.to_header_value())

    Iteration yields ``CookiePair`` items (changed values first, then the
    untouched originals) and skips deletions.
    """

    __slots__ = ("_modified", "_original")

    def __init__(self, source: CookieInput | None = None) -> None:
        self._original: list[CookiePair] = []
        self._modified: list[Cookie] = []
        if source is None:
            return
        if isinstance(source, str):
            self._parse_cookie_string(source)
        elif isinstance(source, Mapping):
            self._original.extend(CookiePair(k, v) for k, v in source.items())
        else:
            for pair in source:
                items = tuple(pair)
                if len(items) == 2:
                    self._original.append(CookiePair(*items))

    @classmethod
    def create(cls, source: CookieInput, *, strict: bool = False) -> CookieCollection:
        """Build a collection, falling back to an empty one if *source* is unusable.

        With ``strict=True`` construction errors propagate instead.
        """
        try:
            return cls(source)
        except (CookieError, TypeError, ValueError):
            if strict:
                raise
            return cls()

    def _parse_cookie_string(self, header: str) -> None:
        """Read a ``Cookie`` request header into ``original``.

        Segments without ``=`` or with an empty name are skipped. When the
        header contains a ``%`` anywhere, each pair is percent-decoded,
        falling back to the raw text for a pair that fails to decode.
        """
        if not header.strip():
            return

        decode = "%" in header
        for segment in header.split(";"):
            if "=" not in segment:
                continue
            name, _, value = segment.partition("=")
            name = name.strip()
            value = value.strip()
            if not name:
                continue
            if decode:
                try:
                    pair = CookiePair(decode_component(name), decode_component(value))
                except ValueError:
                    pair = CookiePair(name, value)
            else:
                pair = CookiePair(name, value)
            self._original.append(pair)

    # -- Lookup --

    def get(self, name: str) -> str | None:
        """Return the effective value of *name*, or ``None``.

        A changed value shadows the original; a deleted (empty) value
        reads as ``None``.
        """
        for cookie in self._modified:
            if cookie.name == name:
                return cookie.value or None
        for pair in self._original:
            if pair.key == name:
                return pair.value
        return None

    def has(self, name: str) -> bool:
        """True if ``get(name)`` finds a value."""
        return self.get(name) is not None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    # -- Mutation --

    def _remove(self, name: str) -> None:
        self._original = [pair for pair in self._original if pair.key != name]
        self._modified = [cookie for cookie in self._modified if cookie.name != name]

    def set(self, cookie: Cookie | str, value: str | None = None) -> None:
        """Record a cookie to send back.

        Accepts a ready ``Cookie``, or a name and value for a cookie with
        default attributes. Any previous entry of that name is dropped.

        Raises:
            TypeError: If called with a name but no value.
            InvalidCookieError: If the name is not a valid cookie name.
        """
        if isinstance(cookie, str):
            if value is None:
                msg = "Value is required when setting cookie by name"
                raise TypeError(msg)
            cookie = Cookie(name=cookie, value=value)
        self._remove(cookie.name)
        self._modified.append(cookie)

    def delete(self, target: CookieDeleteOptions | str) -> bool:
        """Delete a cookie and record a clearing ``Set-Cookie``.

        Pass ``CookieDeleteOptions`` to aim the clearing header at a
        specific domain or path. Returns whether the cookie was present.
        """
        options = CookieDeleteOptions(target) if isinstance(target, str) else target
        marker = Cookie(
            name=options.name,
            value="",
            domain=options.domain or "",
            path=options.path or "/",
            expires=DELETE_EXPIRES,
        )
        existed = self.has(marker.name)
        self._remove(marker.name)
        self._modified.append(marker)
        return existed

    def clear(self) -> None:
        """Forget both the original cookies and every recorded change."""
        self._original = []
        self._modified = []

    def clone(self) -> CookieCollection:
        """Return an independent copy; later changes to either side don't leak."""
        copy = CookieCollection()
        copy._original = list(self._original)
        copy._modified = list(self._modified)
        return copy

    # -- Views --

    def get_all(self) -> list[CookiePair]:
        """Every effective pair: set values first, then the originals."""
        return list(self)

    def get_all_changes(self) -> list[Cookie]:
        """Every ``set`` and ``delete`` in call order, deletions included.

        This is the list to turn into ``Set-Cookie`` headers.
        """
        return list(self._modified)

    def size(self) -> int:
        """Number of effective cookies (deletions not counted)."""
        return sum(1 for cookie in self._modified if cookie.value) + len(self._original)

    def __len__(self) -> int:
        return self.size()

    def to_dict(self) -> dict[str, str]:
        """Name -> value for every effective cookie; changed values win."""
        result = {cookie.name: cookie.value for cookie in self._modified if cookie.value}
        for pair in self._original:
            result.setdefault(pair.key, pair.value)
        return result

    # -- Iteration --

    def __iter__(self) -> Iterator[CookiePair]:
        for cookie in self._modified:
            if cookie.value:
                yield CookiePair(cookie.name, cookie.value)
        yield from self._original

    def entries(self) -> Iterator[tuple[str, str]]:
        """Lazy ``(name, value)`` tuples in iteration order."""
        for key, value in self:
            yield key, value

    def keys(self) -> Iterator[str]:
        """Lazy cookie names in iteration order."""
        for pair in self:
            yield pair.key

    def values(self) -> Iterator[str]:
        """Lazy cookie values in iteration order."""
        for pair in self:
            yield pair.value

    def for_each(self, callback: Callable[[str, str, CookieCollection], object]) -> None:
        """Call ``callback(value, name, self)`` for every effective cookie."""
        for key, value in self:
            callback(value, key, self)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self)
        return f"CookieCollection({{{items}}})"
