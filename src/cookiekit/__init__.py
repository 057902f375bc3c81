"""Cookiekit — HTTP cookie parsing, serialization, and change tracking.

Reads ``Cookie`` and ``Set-Cookie`` headers, and keeps the cookies a
request arrived with apart from the ones the application set or
deleted, so only real changes go back out as ``Set-Cookie``.

Basic usage::

    from cookiekit import CookieCollection, write_set_cookie_headers

    cookies = CookieCollection("session=abc123; theme=light")
    cookies.set("theme", "dark")
    cookies.delete("session")

    write_set_cookie_headers(cookies, response_headers)
    # Set-Cookie: theme=dark; Path=/; SameSite=Lax
    # Set-Cookie: session=; Path=/; Expires=Thu, 01 Jan 1970 00:00:00 GMT; SameSite=Lax

Single cookies::

    from cookiekit import Cookie

    cookie = Cookie.parse("id=42; Domain=example.com; Max-Age=3600; Secure")
    cookie.to_header_value()
"""

__version__ = "0.1.0"
__all__ = [
    "Cookie",
    "CookieCollection",
    "CookieConfig",
    "CookieDeleteOptions",
    "CookieError",
    "CookiePair",
    "CookieParseError",
    "Headers",
    "InvalidCookieError",
    "MutableHeaders",
    "SameSite",
    "cookies_to_record",
    "create_cookie_map_from_headers",
    "create_cookie_map_from_set_cookie_headers",
    "is_valid_cookie_domain",
    "is_valid_cookie_name",
    "is_valid_cookie_path",
    "parse_cookie_header",
    "parse_cookies",
    "parse_set_cookie_header",
    "parse_set_cookie_headers",
    "parse_set_cookies",
    "record_to_cookies",
    "serialize_cookie_map",
    "write_set_cookie_headers",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "Cookie": "cookiekit.cookie",
    "SameSite": "cookiekit.cookie",
    "is_valid_cookie_domain": "cookiekit.cookie",
    "is_valid_cookie_name": "cookiekit.cookie",
    "is_valid_cookie_path": "cookiekit.cookie",
    "CookieCollection": "cookiekit.collection",
    "CookieDeleteOptions": "cookiekit.collection",
    "CookiePair": "cookiekit.collection",
    "CookieConfig": "cookiekit.config",
    "CookieError": "cookiekit.errors",
    "CookieParseError": "cookiekit.errors",
    "InvalidCookieError": "cookiekit.errors",
    "Headers": "cookiekit.http.headers",
    "MutableHeaders": "cookiekit.http.headers",
    "cookies_to_record": "cookiekit.parsers",
    "create_cookie_map_from_headers": "cookiekit.parsers",
    "create_cookie_map_from_set_cookie_headers": "cookiekit.parsers",
    "parse_cookie_header": "cookiekit.parsers",
    "parse_cookies": "cookiekit.parsers",
    "parse_set_cookie_header": "cookiekit.parsers",
    "parse_set_cookie_headers": "cookiekit.parsers",
    "parse_set_cookies": "cookiekit.parsers",
    "record_to_cookies": "cookiekit.parsers",
    "serialize_cookie_map": "cookiekit.parsers",
    "write_set_cookie_headers": "cookiekit.parsers",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import cookiekit`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_path), name)
