"""Cookiekit exception hierarchy.

Shared by Cookie, CookieCollection, and the header parsers so every
module raises and catches the same types.
"""


class CookieError(Exception):
    """Base for all cookiekit-specific errors."""


class CookieParseError(CookieError, ValueError):
    """Raised when a ``Set-Cookie`` string is malformed.

    Too short, no ``=`` in the cookie-pair, or an empty name.
    """


class InvalidCookieError(CookieError, ValueError):
    """Raised when a cookie name, path, or domain has invalid characters.

    Construction never coerces: a bad value fails the ``Cookie`` outright.
    """
