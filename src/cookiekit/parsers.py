"""Header-level cookie functions.

Thin adapters between header containers and the core types: read
``Cookie`` / ``Set-Cookie`` values out of any ``HeaderSource``
(``MultiHeaderSource`` when lines repeat) and append ``Set-Cookie``
lines to any ``HeaderSink``.

The bulk ``Set-Cookie`` readers treat one bad header as non-fatal: it is
logged at WARNING on the ``cookiekit`` logger and skipped, unless
``CookieConfig.strict`` is set.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TypeAlias

from cookiekit._internal.encoding import encode_component
from cookiekit._internal.protocols import HeaderSink, HeaderSource, MultiHeaderSource
from cookiekit.collection import CookieCollection
from cookiekit.config import DEFAULT_CONFIG, CookieConfig
from cookiekit.cookie import Cookie
from cookiekit.errors import CookieError

logger = logging.getLogger("cookiekit")

# Anything with a case-insensitive .get(); get_list() is used when present
HeaderLookup: TypeAlias = MultiHeaderSource | HeaderSource | Mapping[str, str]


def parse_cookie_header(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for an empty header.
    """
    return CookieCollection(header).to_dict()


def parse_set_cookie_header(header: str) -> Cookie:
    """Parse one ``Set-Cookie`` header value. Errors propagate."""
    return Cookie.parse(header)


def _parse_each(headers: Iterable[str], config: CookieConfig) -> Iterator[Cookie]:
    for header in headers:
        try:
            cookie = Cookie.parse(header)
        except CookieError as exc:
            if config.strict:
                raise
            logger.warning("Failed to parse Set-Cookie header %r: %s", header, exc)
            continue
        yield cookie


def parse_set_cookie_headers(
    headers: Iterable[str], *, config: CookieConfig = DEFAULT_CONFIG
) -> list[Cookie]:
    """Parse several ``Set-Cookie`` values, skipping (and logging) bad ones."""
    return list(_parse_each(headers, config))


def cookies_to_record(cookies: Iterable[Cookie]) -> dict[str, str]:
    """Name -> value; a later cookie with the same name wins."""
    return {cookie.name: cookie.value for cookie in cookies}


def record_to_cookies(record: Mapping[str, str]) -> list[Cookie]:
    """Build default-attribute cookies from a name -> value mapping.

    Raises:
        InvalidCookieError: If any name is not a valid cookie name.
    """
    return [Cookie(name=name, value=value) for name, value in record.items()]


def _set_cookie_values(headers: HeaderLookup, name: str) -> list[str]:
    get_list = getattr(headers, "get_list", None)
    if get_list is not None:
        return list(get_list(name))
    value = headers.get(name)
    return [value] if value else []


def create_cookie_map_from_headers(
    headers: HeaderLookup, *, config: CookieConfig = DEFAULT_CONFIG
) -> CookieCollection:
    """Build a collection from the request's ``Cookie`` header (absent -> empty)."""
    cookie_header = headers.get(config.cookie_header)
    if cookie_header:
        return CookieCollection(cookie_header)
    return CookieCollection()


def create_cookie_map_from_set_cookie_headers(
    headers: HeaderLookup, *, config: CookieConfig = DEFAULT_CONFIG
) -> CookieCollection:
    """Build a collection whose changes are the response's ``Set-Cookie`` headers.

    Unparsable headers are logged and skipped.
    """
    collection = CookieCollection()
    for cookie in _parse_each(_set_cookie_values(headers, config.set_cookie_header), config):
        collection.set(cookie)
    return collection


def serialize_cookie_map(collection: CookieCollection) -> str:
    """Serialize the effective cookies as a ``Cookie`` request-header value."""
    return "; ".join(f"{name}={encode_component(value)}" for name, value in collection.entries())


def write_set_cookie_headers(collection: CookieCollection, sink: HeaderSink) -> None:
    """Append one ``Set-Cookie`` line per recorded change, deletions included."""
    for cookie in collection.get_all_changes():
        sink.append("Set-Cookie", cookie.to_header_value())


def parse_cookies(source: str | HeaderLookup) -> dict[str, str]:
    """Parse cookies from a ``Cookie`` header string or a header container."""
    if isinstance(source, str):
        return parse_cookie_header(source)
    return create_cookie_map_from_headers(source).to_dict()


def parse_set_cookies(source: Iterable[str] | HeaderLookup) -> list[Cookie]:
    """Parse ``Set-Cookie`` values from a list of strings or a header container.

    Any ``MultiHeaderSource`` (``Headers``, ``MutableHeaders``) or mapping
    counts as a container; anything else is iterated as header values.
    """
    if isinstance(source, (Mapping, MultiHeaderSource)):
        return create_cookie_map_from_set_cookie_headers(source).get_all_changes()
    return parse_set_cookie_headers(source)
